"""CLI commands for refsum."""

import itertools
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from refsum import __version__
from refsum.config import get_default_config, load_config, merge_cli_args, parse_config
from refsum.engine import DigestEngine
from refsum.errors import FileOpenError
from refsum.reference import ReferenceStream, make_line_format
from refsum.runner import generate, iter_input_names, verify_reference
from refsum.types import DigestAlgorithm, RefsumConfig


EXIT_OK = 0
EXIT_FAILURE = 42

console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Configure the refsum logger with a Rich handler on stderr."""
    logger = logging.getLogger("refsum")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        ))


def common_options(func):
    """Options shared by the gen and verify commands."""
    options = [
        click.option(
            "--algorithm", "-a",
            type=click.Choice([a.value for a in DigestAlgorithm], case_sensitive=False),
            help="Digest algorithm (default SHA256)",
        ),
        click.option("--sha512", is_flag=True, help="Uses SHA512"),
        click.option("--use-bsd", is_flag=True, help="Uses BSD format"),
        click.option(
            "--config", "-c",
            type=click.Path(exists=True, dir_okay=False),
            help="Path to YAML configuration file",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_config(config: Optional[str], **overrides) -> RefsumConfig:
    """Load the config file (or defaults) and apply CLI overrides."""
    try:
        if config:
            cfg = load_config(Path(config))
        else:
            cfg = parse_config(get_default_config())
        return merge_cli_args(cfg, **overrides)
    except (ValueError, OSError, yaml.YAMLError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        click.get_current_context().exit(EXIT_FAILURE)


@click.group()
@click.version_option(version=__version__, prog_name="refsum")
def cli() -> None:
    """refsum - a sha256sum clone.

    Generate reference digests for files and verify files against them,
    in simple or BSD line format.
    """
    pass


@cli.command()
@click.argument("files", nargs=-1)
@click.option("--files", "-f", "option_files", multiple=True, help="Names of files to hash")
@click.option("--from-stdin", is_flag=True, help="Reads names of files to hash from stdin")
@common_options
def gen(
    files: tuple[str, ...],
    option_files: tuple[str, ...],
    from_stdin: bool,
    algorithm: Optional[str],
    sha512: bool,
    use_bsd: bool,
    config: Optional[str],
    verbose: bool,
) -> None:
    """Generate reference data.

    Examples:

        # Hash two files
        refsum gen -f a.txt -f b.txt

        # Hash files listed on stdin, BSD style, with SHA512
        find . -type f | refsum gen --from-stdin --use-bsd --sha512
    """
    cfg = _resolve_config(config, algorithm=algorithm, sha512=sha512, use_bsd=use_bsd, verbose=verbose)
    setup_logging(cfg.verbose)
    context = click.get_current_context()

    engine = DigestEngine.for_algorithm(cfg.algorithm)
    line_format = make_line_format(cfg.line_format, engine.algo_name)

    names = itertools.chain(option_files, files)
    if from_stdin:
        names = itertools.chain(names, iter_input_names(sys.stdin.buffer))

    summary = generate(names, engine, line_format)

    if not summary.ok:
        context.exit(EXIT_FAILURE)

    if summary.count == 0:
        click.echo("No input specified", err=True)
        context.exit(EXIT_FAILURE)

    context.exit(EXIT_OK)


@cli.command()
@click.option("--input", "-i", "input_file", help="A file containing reference hashes")
@click.option("--from-stdin", is_flag=True, help="Reads reference data from stdin")
@common_options
def verify(
    input_file: Optional[str],
    from_stdin: bool,
    algorithm: Optional[str],
    sha512: bool,
    use_bsd: bool,
    config: Optional[str],
    verbose: bool,
) -> None:
    """Verify reference data.

    Examples:

        refsum verify -i sums.txt

        cat sums.txt | refsum verify --from-stdin
    """
    cfg = _resolve_config(config, algorithm=algorithm, sha512=sha512, use_bsd=use_bsd, verbose=verbose)
    setup_logging(cfg.verbose)
    context = click.get_current_context()

    if not input_file and not from_stdin:
        click.echo("No input specified", err=True)
        context.exit(EXIT_FAILURE)

    engine = DigestEngine.for_algorithm(cfg.algorithm)
    line_format = make_line_format(cfg.line_format, engine.algo_name)
    all_ok = True

    if input_file:
        try:
            stream = ReferenceStream.open(input_file, line_format)
        except FileOpenError as e:
            click.echo(e.message, err=True)
            context.exit(EXIT_FAILURE)

        with stream:
            all_ok &= verify_reference(stream, engine)

    if from_stdin:
        stdin_stream = ReferenceStream(sys.stdin.buffer, line_format)
        all_ok &= verify_reference(stdin_stream, engine)

    if not all_ok:
        click.echo("There were errors!!", err=True)
        context.exit(EXIT_FAILURE)

    context.exit(EXIT_OK)


@cli.command()
@click.option("--output", "-o", type=click.Path(), default="./refsum.yaml")
def init(output: str) -> None:
    """Generate a sample configuration file."""
    output_path = Path(output)
    with open(output_path, "w") as f:
        yaml.dump(get_default_config(), f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]Generated configuration file: {output_path}[/green]")
    console.print("[dim]Edit the file and run: refsum gen --config refsum.yaml FILES...[/dim]")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
