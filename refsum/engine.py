"""Streaming digest engine for file integrity checks."""

import hashlib
import logging
from io import BytesIO
from typing import BinaryIO, Callable, Protocol

from refsum.errors import (
    FileOpenError,
    FileVerifyError,
    HashMismatchError,
    ReadError,
)
from refsum.types import DigestAlgorithm, VerifyResult, VerifyStatus


BUFFER_SIZE = 4096  # bytes per read, buffer is reused across calls

VERIFY_OK = VerifyResult(VerifyStatus.OK)

logger = logging.getLogger(__name__)


class HashPrimitive(Protocol):
    """Any streaming hash object with hashlib's update/hexdigest interface."""

    def update(self, data: bytes, /) -> None:
        ...

    def hexdigest(self) -> str:
        ...


class DigestEngine:
    """Turns byte streams into lowercase hex digests under a fixed memory budget.

    The engine owns one read buffer, allocated once, and one hash primitive.
    After every ``hash*`` or ``verify*`` call the primitive is replaced by a
    fresh one from ``factory``, so a single engine can hash any number of
    files. Engines are mutable and must not be shared between threads.
    """

    def __init__(self, algo_name: str, factory: Callable[[], HashPrimitive]):
        """Initialize the engine.

        Args:
            algo_name: Display name of the algorithm (e.g. 'SHA256')
            factory: Zero-argument callable returning a fresh hash primitive
        """
        self._algo_name = algo_name
        self._factory = factory
        self._primitive = factory()
        self._buffer = bytearray(BUFFER_SIZE)
        self._view = memoryview(self._buffer)

    @classmethod
    def for_algorithm(cls, algorithm: DigestAlgorithm) -> "DigestEngine":
        """Create an engine backed by hashlib for ``algorithm``."""
        name = algorithm.hashlib_name
        return cls(algorithm.display_name, lambda: hashlib.new(name))

    @property
    def algo_name(self) -> str:
        """Return the algorithm display name."""
        return self._algo_name

    def reset(self) -> None:
        """Return the hash primitive to its initial state."""
        self._primitive = self._factory()

    def hash(self, source: BinaryIO) -> str:
        """Compute the digest of a binary stream, reading it to exhaustion.

        Args:
            source: Binary file-like object

        Returns:
            Lowercase hexadecimal digest string

        Raises:
            ReadError: If reading from the stream fails
        """
        self.reset()
        try:
            while True:
                bytes_read = self._read_chunk(source)
                if not bytes_read:
                    break
                self._primitive.update(self._view[:bytes_read])
            return self._primitive.hexdigest()
        except OSError as e:
            logger.debug("Read failed after partial input: %s", e)
            raise ReadError() from e
        finally:
            self.reset()

    def _read_chunk(self, source: BinaryIO) -> int:
        readinto = getattr(source, "readinto", None)
        if readinto is not None:
            return readinto(self._buffer) or 0

        # Plain read() sources still land in the same buffer
        data = source.read(BUFFER_SIZE)
        self._buffer[: len(data)] = data
        return len(data)

    def hash_bytes(self, data: bytes) -> str:
        """Compute the digest of in-memory bytes."""
        return self.hash(BytesIO(data))

    def hash_file(self, path: str) -> str:
        """Compute the digest of a file.

        Args:
            path: Path of the file to hash

        Returns:
            Lowercase hexadecimal digest string

        Raises:
            FileOpenError: If the file can't be opened
            ReadError: If the file can't be read
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            logger.debug("Cannot open %s: %s", path, e)
            raise FileOpenError(path) from e

        with f:
            return self.hash(f)

    def verify(self, source: BinaryIO, expected: str) -> VerifyResult:
        """Hash a stream and compare it against an expected digest.

        The comparison is case-sensitive; digests produced by the engine are
        always lowercase.

        Args:
            source: Binary file-like object
            expected: Expected hex digest

        Returns:
            VerifyResult with status OK, HASH_MISMATCH or READ_FAILED
        """
        try:
            actual = self.hash(source)
        except ReadError as e:
            return VerifyResult(VerifyStatus.READ_FAILED, e)

        if actual != expected:
            return VerifyResult(VerifyStatus.HASH_MISMATCH, HashMismatchError())

        return VERIFY_OK

    def verify_bytes(self, data: bytes, expected: str) -> VerifyResult:
        """Verify in-memory bytes against an expected digest."""
        return self.verify(BytesIO(data), expected)

    def verify_file(self, path: str, expected: str) -> VerifyResult:
        """Verify a file against an expected digest.

        Distinguishes a digest that could not be computed (FILE_OPEN_FAILED,
        READ_FAILED) from one that was computed but differs
        (FILE_VERIFY_FAILED).

        Args:
            path: Path of the file to verify
            expected: Expected hex digest

        Returns:
            VerifyResult describing the outcome
        """
        try:
            actual = self.hash_file(path)
        except FileOpenError as e:
            return VerifyResult(VerifyStatus.FILE_OPEN_FAILED, e)
        except ReadError as e:
            return VerifyResult(VerifyStatus.READ_FAILED, e)

        if actual != expected:
            return VerifyResult(VerifyStatus.FILE_VERIFY_FAILED, FileVerifyError(path))

        return VERIFY_OK
