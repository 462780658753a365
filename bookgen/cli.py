import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from dotenv import load_dotenv

from bookgen import parser
from bookgen.errors import BookgenError, DuplicateChapterError
from bookgen.export import book_to_dict
from bookgen.json_utils import json_dumps
from bookgen.xlsx import write_workbook

try:
    __version__ = version("bookgen")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="BOOKGEN_LOG_FILE",
)
@click.version_option(__version__, prog_name="bookgen")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


def _book_options(func):  # type: ignore[no-untyped-def]
    """Attach the options shared by commands that parse a book."""

    options = [
        click.argument("book_name"),
        click.option(
            "--books-dir",
            type=click.Path(file_okay=False, dir_okay=True),
            envvar="BOOKGEN_BOOKS_DIR",
            default="books",
            show_default=True,
            help="Directory holding one sub-directory per book.",
        ),
        click.option(
            "--users",
            type=click.Path(file_okay=True, dir_okay=False),
            envvar="BOOKGEN_USERS",
            default=None,
            help="YAML or JSON map of Stack Overflow user ids to names.",
        ),
        click.option(
            "--workers",
            type=click.IntRange(min=1),
            envvar="BOOKGEN_WORKERS",
            default=None,
            help="Chapters parsed at the same time (default: CPUs - 1).",
        ),
        click.option(
            "--strict/--no-strict",
            default=True,
            show_default=True,
            help="Abort on malformed articles instead of skipping them.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_book(
    book_name: str,
    books_dir: str,
    users: Optional[str],
    workers: Optional[int],
    strict: bool,
) -> parser.Book:
    """Parse a book, turning library errors into CLI failures."""

    kwargs = {"workers": workers} if workers else {}
    options = parser.ParseOptions(
        strict=strict, books_dir=Path(books_dir), user_names=users, **kwargs
    )

    try:
        return parser.parse_book(book_name, options)
    except DuplicateChapterError as exc:
        # The message names both colliding index files.
        click.echo(str(exc), err=True)
        sys.exit(1)
    except BookgenError as exc:
        raise click.ClickException(str(exc)) from exc


def _report_errors(book: parser.Book) -> None:
    """Print recorded errors and exit with a failure status if any."""

    for err in book.errors:
        click.echo(f"error: {err}", err=True)
    if book.errors:
        sys.exit(1)


@cli.command("parse")
@_book_options
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=True),
    default=None,
    help="Write output to FILE or DIRECTORY instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml", "xlsx"]),
    default="json",
    help="Output format.",
)
def parse_cmd(
    book_name: str,
    books_dir: str = "books",
    users: Optional[str] = None,
    workers: Optional[int] = None,
    strict: bool = True,
    output_path: Optional[str] = None,
    output_format: str = "json",
) -> None:
    """Parse the sources of BOOK_NAME and write the assembled book.

    Args:
        book_name: Name of the book, e.g. "Go".
        books_dir: Directory holding one sub-directory per book.
        users: Optional map of contributor ids to names.
        workers: Maximum number of chapters parsed concurrently.
        strict: Abort on malformed articles instead of skipping them.
        output_path: Optional file or directory path for the output.
            If a directory is provided, the file name is generated from
            the book slug.
        output_format: Format of the output.
    """

    book = _build_book(book_name, books_dir, users, workers, strict)
    data = book_to_dict(book)

    # Determine the output file path if one was provided. When the user
    # passes a directory, generate the file name using the book slug and
    # the chosen format extension.
    final_path: Optional[Path] = None
    if output_path:
        final_path = Path(output_path)
        extensions = {"json": ".json", "yaml": ".yaml", "xlsx": ".xlsx"}
        if final_path.is_dir():
            final_path = final_path / (
                f"{book.file_name_base}{extensions[output_format]}"
            )

    if output_format == "xlsx":
        if final_path is None:
            raise click.UsageError("Output file is required for xlsx format.")
        write_workbook(data, final_path)
    else:
        if output_format == "json":
            content = json_dumps(data, indent=True)
        else:
            content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
        if final_path:
            final_path.write_text(content, encoding="utf-8")
        else:
            click.echo(content)

    _report_errors(book)


@cli.command()
@_book_options
def urls(
    book_name: str,
    books_dir: str = "books",
    users: Optional[str] = None,
    workers: Optional[int] = None,
    strict: bool = True,
) -> None:
    """Print the URL of every chapter and article of BOOK_NAME."""

    book = _build_book(book_name, books_dir, users, workers, strict)
    for file_name_base in book.known_urls:
        click.echo(f"{book.url}{file_name_base}")
    _report_errors(book)
