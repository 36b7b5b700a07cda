"""Core type definitions for refsum."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from refsum.errors import RefsumError


class DigestAlgorithm(Enum):
    """Supported digest algorithms, keyed by their display name."""

    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"

    @property
    def display_name(self) -> str:
        """Name embedded in BSD-style reference lines."""
        return self.value

    @property
    def hashlib_name(self) -> str:
        """Name understood by ``hashlib.new``."""
        return self.value.lower()

    @property
    def digest_size(self) -> int:
        """Digest length in bytes."""
        return int(self.value[3:]) // 8

    @classmethod
    def from_name(cls, name: str) -> "DigestAlgorithm":
        """Look up an algorithm by name, e.g. 'sha512' or 'SHA-256'.

        Raises:
            ValueError: If the name is not a supported algorithm
        """
        normalized = name.strip().upper().replace("-", "").replace("_", "")
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ValueError(f"Invalid algorithm: {name}. Must be one of {choices}.")


class LineFormatKind(Enum):
    """Reference line conventions."""

    SIMPLE = "simple"
    BSD = "bsd"


@dataclass(frozen=True)
class HashRecord:
    """A (file name, hex digest) pair read from or written to a reference file."""

    file_name: str
    digest: str

    def __iter__(self) -> Iterator[str]:
        yield self.file_name
        yield self.digest


class VerifyStatus(Enum):
    """Outcome of a verify operation."""

    OK = "ok"
    HASH_MISMATCH = "hash_mismatch"
    FILE_VERIFY_FAILED = "file_verify_failed"
    FILE_OPEN_FAILED = "file_open_failed"
    READ_FAILED = "read_failed"


@dataclass(frozen=True)
class VerifyResult:
    """Single result type returned by every verify operation.

    Success is reported as ``status == VerifyStatus.OK`` with no error, so
    callers can dispatch on ``status`` for both success and each failure kind.
    """

    status: VerifyStatus
    error: RefsumError | None = None

    @property
    def ok(self) -> bool:
        return self.status is VerifyStatus.OK

    @property
    def message(self) -> str:
        """Human-readable description of the outcome."""
        if self.error is None:
            return "OK"
        return self.error.message


@dataclass
class RefsumConfig:
    """Main configuration for refsum."""

    algorithm: DigestAlgorithm = DigestAlgorithm.SHA256
    line_format: LineFormatKind = LineFormatKind.SIMPLE

    # Execution options
    verbose: bool = False
