"""Reference file subpackage."""

from refsum.reference.formats import BsdFormat, LineFormat, SimpleFormat, make_line_format
from refsum.reference.stream import ReferenceIterator, ReferenceStream, StreamState

__all__ = [
    "LineFormat",
    "SimpleFormat",
    "BsdFormat",
    "make_line_format",
    "ReferenceStream",
    "ReferenceIterator",
    "StreamState",
]
