"""Reference line formats: render and parse (file name, digest) records."""

import re
from abc import ABC, abstractmethod

from refsum.errors import MalformedLineError
from refsum.types import HashRecord, LineFormatKind


class LineFormat(ABC):
    """Strategy for one textual reference-line convention.

    Implementations expose exactly two operations: render a record to one
    line of text, and parse one line of text back into a record.
    """

    @abstractmethod
    def render(self, digest: str, file_name: str) -> str:
        """Render a digest and file name as one reference line."""

    @abstractmethod
    def parse(self, line: str) -> HashRecord:
        """Parse one reference line.

        Raises:
            MalformedLineError: If the line does not follow this format
        """


class SimpleFormat(LineFormat):
    """The ``<digest>  <file name>`` convention used by sha256sum."""

    _pattern = re.compile(r"^([A-Fa-f0-9]+)\s\s(.*)$")

    def render(self, digest: str, file_name: str) -> str:
        return f"{digest}  {file_name}"

    def parse(self, line: str) -> HashRecord:
        match = self._pattern.fullmatch(line)
        if match is None:
            raise MalformedLineError(line)

        # Tolerates extra separator spaces and trailing blanks
        return HashRecord(file_name=match.group(2).strip(), digest=match.group(1))


class BsdFormat(LineFormat):
    """The ``<ALGO> (<file name>) = <digest>`` convention of BSD tools.

    The greedy file name group makes the last ``) = <hex>`` on the line the
    separator, so parentheses inside file names are kept verbatim. Lines
    naming a different algorithm are rejected as malformed.
    """

    def __init__(self, algo_name: str):
        self.algo_name = algo_name
        self._pattern = re.compile(rf"^{re.escape(algo_name)} \((.*)\) = ([A-Fa-f0-9]+)$")

    def render(self, digest: str, file_name: str) -> str:
        return f"{self.algo_name} ({file_name}) = {digest}"

    def parse(self, line: str) -> HashRecord:
        match = self._pattern.fullmatch(line)
        if match is None:
            raise MalformedLineError(line)

        return HashRecord(file_name=match.group(1), digest=match.group(2))


def make_line_format(kind: LineFormatKind, algo_name: str) -> LineFormat:
    """Build the line format for ``kind``.

    Args:
        kind: Reference line convention
        algo_name: Algorithm display name, embedded by the BSD format

    Returns:
        LineFormat instance
    """
    if kind is LineFormatKind.BSD:
        return BsdFormat(algo_name)
    return SimpleFormat()
