"""Unit tests for reference line formats."""

import pytest

from refsum.errors import MalformedLineError
from refsum.reference.formats import BsdFormat, SimpleFormat, make_line_format
from refsum.types import HashRecord, LineFormatKind


def test_simple_render():
    """Test simple lines use exactly two spaces."""
    assert SimpleFormat().render("abcdef", "data.txt") == "abcdef  data.txt"


def test_simple_parse():
    """Test a well-formed simple line."""
    record = SimpleFormat().parse("abcdef0123456789  data.txt")

    assert record == HashRecord(file_name="data.txt", digest="abcdef0123456789")
    file_name, digest = record
    assert (file_name, digest) == ("data.txt", "abcdef0123456789")


def test_simple_parse_tolerates_extra_spaces():
    """Test extra separator spaces and trailing blanks are trimmed."""
    fmt = SimpleFormat()

    assert fmt.parse("abcdef0123456789                data.txt").file_name == "data.txt"
    assert fmt.parse("abcdef0123456789  data.txt   ").file_name == "data.txt"


@pytest.mark.parametrize("line", [
    "abcdef012345678 data.txt",
    "abcdef012345678G  data.txt",
    "abcdef01234567",
    "",
    "  data.txt",
])
def test_simple_parse_malformed(line):
    """Test lines that are not in simple format."""
    with pytest.raises(MalformedLineError) as exc_info:
        SimpleFormat().parse(line)

    assert exc_info.value.line == line
    assert exc_info.value.message == f"Input line '{line}' has wrong format"


def test_bsd_render():
    """Test BSD lines embed the algorithm name."""
    assert BsdFormat("SHA256").render("abcdef", "data.txt") == "SHA256 (data.txt) = abcdef"


def test_bsd_parse():
    """Test a well-formed BSD line."""
    record = BsdFormat("SHA256").parse("SHA256 (data.txt) = abcdef0123456789")
    assert record == HashRecord(file_name="data.txt", digest="abcdef0123456789")


def test_bsd_parse_parentheses_in_name():
    """Test parentheses inside file names are kept."""
    fmt = BsdFormat("SHA256")

    assert fmt.parse("SHA256 ((data .txt)) = abcdef0123456789").file_name == "(data .txt)"
    assert fmt.parse("SHA256 (a) = b) = abcdef").file_name == "a) = b"


def test_bsd_parse_keeps_surrounding_spaces():
    """Test BSD file names are not trimmed."""
    fmt = BsdFormat("SHA256")
    line = fmt.render("abcdef", " name with spaces ")

    assert fmt.parse(line).file_name == " name with spaces "


@pytest.mark.parametrize("line", [
    "SHA512 (data.txt) = abcdef0123456789",
    "SHA256 data.txt = abcdef0123456789",
    "SHA256 (data.txt) = abcdefX",
    "SHA256 (data.txt) =abcdef",
    "abcdef0123456789  data.txt",
])
def test_bsd_parse_malformed(line):
    """Test lines that are not in BSD format for SHA256."""
    with pytest.raises(MalformedLineError):
        BsdFormat("SHA256").parse(line)


def test_bsd_algorithm_name_is_literal():
    """Test regex metacharacters in the algorithm name are escaped."""
    fmt = BsdFormat("SHA-512/256")

    assert fmt.parse("SHA-512/256 (f) = 00ff").digest == "00ff"
    with pytest.raises(MalformedLineError):
        fmt.parse("SHAX512/256 (f) = 00ff")


@pytest.mark.parametrize("fmt", [SimpleFormat(), BsdFormat("SHA512")])
@pytest.mark.parametrize("name", ["data.txt", "dir/sub dir/file (1).bin", "ünïcode.txt"])
def test_render_then_parse(fmt, name):
    """Test rendered lines parse back to the same record."""
    digest = "0123456789abcdef" * 8
    record = fmt.parse(fmt.render(digest, name))

    assert record == HashRecord(file_name=name, digest=digest)
    assert fmt.render(record.digest, record.file_name) == fmt.render(digest, name)


def test_make_line_format():
    """Test format selection."""
    assert isinstance(make_line_format(LineFormatKind.SIMPLE, "SHA256"), SimpleFormat)

    bsd = make_line_format(LineFormatKind.BSD, "SHA512")
    assert isinstance(bsd, BsdFormat)
    assert bsd.algo_name == "SHA512"
