"""Lazy iteration over reference files."""

import logging
from enum import Enum
from typing import BinaryIO, Iterator

from refsum.errors import FileOpenError, ReadError, RefsumError
from refsum.reference.formats import LineFormat
from refsum.types import HashRecord


logger = logging.getLogger(__name__)


class StreamState(Enum):
    """Read cursor state shared by all iterators of a stream."""

    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class ReferenceStream:
    """A line-based byte source paired with the line format used to parse it.

    Every ``iter()`` call returns a new ReferenceIterator sharing this
    stream's single read cursor, so lines consumed by one iterator are never
    seen by another. The first malformed line or read failure is terminal for
    the whole stream and is kept in ``error``.
    """

    def __init__(self, source: BinaryIO, line_format: LineFormat, *, owns_source: bool = False):
        """Initialize the stream.

        Args:
            source: Binary file-like object read line by line
            line_format: Format used to parse each line
            owns_source: Close ``source`` when the stream is closed
        """
        self.source = source
        self.line_format = line_format
        self.state = StreamState.POSITIONED
        self.error: RefsumError | None = None
        self._owns_source = owns_source

    @classmethod
    def open(cls, path: str, line_format: LineFormat) -> "ReferenceStream":
        """Open a reference file.

        Raises:
            FileOpenError: If the file can't be opened
        """
        try:
            source = open(path, "rb")
        except OSError as e:
            raise FileOpenError(path) from e
        return cls(source, line_format, owns_source=True)

    @property
    def failed(self) -> bool:
        return self.state is StreamState.FAILED

    def close(self) -> None:
        if self._owns_source:
            self.source.close()

    def __enter__(self) -> "ReferenceStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> "ReferenceIterator":
        return ReferenceIterator(self)

    def read_line(self) -> str | None:
        """Read the next line without its terminator, or None at end of input.

        Raises:
            ReadError: If reading or UTF-8 decoding fails
        """
        try:
            raw = self.source.readline()
        except OSError as e:
            raise ReadError() from e

        if not raw:
            return None

        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ReadError() from e

    def _fail(self, error: RefsumError) -> None:
        logger.error("%s", error.message)
        self.state = StreamState.FAILED
        self.error = error


class ReferenceIterator:
    """Iterator yielding HashRecords until end of input or the first failure."""

    def __init__(self, stream: ReferenceStream):
        self._stream = stream

    def __iter__(self) -> Iterator[HashRecord]:
        return self

    def __next__(self) -> HashRecord:
        stream = self._stream
        if stream.state is not StreamState.POSITIONED:
            raise StopIteration

        try:
            line = stream.read_line()
        except ReadError as e:
            stream._fail(e)
            raise StopIteration

        if line is None:
            stream.state = StreamState.EXHAUSTED
            raise StopIteration

        try:
            return stream.line_format.parse(line)
        except RefsumError as e:
            stream._fail(e)
            raise StopIteration
