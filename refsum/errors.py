"""Error taxonomy for hashing and reference parsing."""


class RefsumError(Exception):
    """Base class for all refsum errors.

    Every subclass carries just enough context to render a stable,
    human-readable ``message``.
    """

    @property
    def message(self) -> str:
        return "Operation failed"

    def __str__(self) -> str:
        return self.message


class MalformedLineError(RefsumError):
    """A reference line does not match the active line format."""

    def __init__(self, line: str):
        super().__init__(line)
        self.line = line

    @property
    def message(self) -> str:
        return f"Input line '{self.line}' has wrong format"


class FileOpenError(RefsumError):
    """A named file could not be opened."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    @property
    def message(self) -> str:
        return f"Error opening file '{self.path}'"


class ReadError(RefsumError):
    """An I/O error occurred while reading a stream."""

    @property
    def message(self) -> str:
        return "Unable to read data"


class HashMismatchError(RefsumError):
    """Computed digest of a stream differs from the expected one."""

    @property
    def message(self) -> str:
        return "Hashes different"


class FileVerifyError(RefsumError):
    """Computed digest of a file differs from the expected one."""

    def __init__(self, path: str):
        super().__init__(path)
        self.path = path

    @property
    def message(self) -> str:
        return f"Hash verification for file '{self.path}' failed"
