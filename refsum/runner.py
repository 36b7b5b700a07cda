"""Generation and verification drivers built on the engine and line formats."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, TextIO

import click

from refsum.engine import DigestEngine
from refsum.errors import FileOpenError, ReadError
from refsum.reference.formats import LineFormat
from refsum.reference.stream import ReferenceStream
from refsum.types import HashRecord, VerifyStatus


logger = logging.getLogger(__name__)


@dataclass
class GenerateSummary:
    """Result of hashing a sequence of files."""

    count: int = 0
    ok: bool = True


def iter_input_names(lines: Iterable[bytes]) -> Iterator[str]:
    """Yield file names from UTF-8 byte lines, one per line, skipping blank lines.

    Raises:
        ReadError: If reading fails or a line is not valid UTF-8
    """
    try:
        for line in lines:
            name = line.rstrip(b"\r\n")
            if name:
                yield name.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError() from e


def generate(
    file_names: Iterable[str],
    engine: DigestEngine,
    line_format: LineFormat,
    out: TextIO | None = None,
) -> GenerateSummary:
    """Hash files in order and write one reference line per file.

    Stops at the first file that can't be opened or read, or when reading
    ``file_names`` itself fails; ``file_names`` is not consumed past that point.

    Args:
        file_names: File names to hash
        engine: Digest engine
        line_format: Format used to render each line
        out: Text stream for reference lines, stdout if None

    Returns:
        GenerateSummary with the number of files hashed and overall status
    """
    summary = GenerateSummary()
    names = iter(file_names)

    while True:
        try:
            file_name = next(names, None)
            if file_name is None:
                break
            digest = engine.hash_file(file_name)
        except (FileOpenError, ReadError) as e:
            logger.error("%s", e.message)
            summary.ok = False
            return summary

        click.echo(line_format.render(digest, file_name), file=out)
        summary.count += 1

    return summary


def process_one_file(engine: DigestEngine, record: HashRecord, out: TextIO | None = None) -> bool:
    """Verify a single record and print its status line.

    Returns:
        True if the file matched its recorded digest
    """
    file_name, digest = record
    result = engine.verify_file(file_name, digest)

    if result.ok:
        click.echo(f"{file_name}: OK", file=out)
    elif result.status in (VerifyStatus.HASH_MISMATCH, VerifyStatus.FILE_VERIFY_FAILED):
        click.echo(f"{file_name}: FAILED!!!", file=out)
    else:
        click.echo(f"{file_name}: {result.message}", file=out)

    return result.ok


def verify_reference(stream: ReferenceStream, engine: DigestEngine, out: TextIO | None = None) -> bool:
    """Verify every record of a reference stream.

    Mismatches do not stop the scan; a malformed line or read failure does,
    and counts as an error.

    Returns:
        True if every record verified and the stream was read to the end
    """
    all_ok = True

    for record in stream:
        all_ok &= process_one_file(engine, record, out)

    if stream.failed:
        logger.debug("Reference scan stopped early: %s", stream.error)
        all_ok = False

    return all_ok
