"""Key-value documents used for chapter and article sources."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from attrs import define

from bookgen.errors import BookIOError, FormatError, KeyNotFoundError

from .snippets import INCLUDE_PREFIX, extract_snippet_lines
from .utils import shorten

logger = logging.getLogger(__name__)

# A key starts with an upper-case letter and is followed by a colon and
# either the end of the line or a space.
_KEY_LINE = re.compile(r"^([A-Z][A-Za-z0-9_]*):(?: (.*))?$")


@define(slots=True, frozen=True)
class KeyValue:
    """Single entry of a KV document.

    Attributes:
        key: Entry name such as ``Title`` or ``Body``.
        value: Entry text; multi-line values keep their inner newlines.
    """

    key: str
    value: str


class KVDoc(list[KeyValue]):
    """Ordered list of entries where keys may repeat.

    Lookups return the first matching entry. The source path, when known,
    is kept for error messages.
    """

    path: Path | None = None

    def get_value(self, key: str) -> str:
        """Return the value of the first entry named ``key``.

        Raises:
            KeyNotFoundError: If no entry uses ``key``.
        """

        for kv in self:
            if kv.key == key:
                return kv.value
        raise KeyNotFoundError(key, self.path)

    def get_value_silent(self, key: str, default: str = "") -> str:
        """Return the value for ``key`` or ``default`` when it is absent."""

        for kv in self:
            if kv.key == key:
                return kv.value
        return default

    def keys(self) -> list[str]:
        return [kv.key for kv in self]


def _trim_blank(lines: list[str]) -> list[str]:
    """Drop leading and trailing blank lines."""

    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def parse_kv_lines(
    lines: Iterable[str], path: Path | str | None = None
) -> KVDoc:
    """Group lines into key-value entries.

    A key line starts a new entry. A key with an inline value is a
    complete single-line entry: only blank lines or another key line may
    follow it. A key with no inline value opens a multi-line entry and
    every following line that is not a key line is appended to it.

    Args:
        lines: Source lines without line terminators.
        path: Optional source path used in error messages.

    Returns:
        The parsed document.

    Raises:
        FormatError: If text appears before the first key line or after a
            single-line entry.
    """

    doc = KVDoc()
    doc.path = Path(path) if path is not None else None

    key: str | None = None
    value_lines: list[str] = []
    single_line = False

    def flush() -> None:
        if key is not None:
            doc.append(KeyValue(key, "\n".join(_trim_blank(value_lines))))

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        match = _KEY_LINE.match(line)
        if match:
            flush()
            key = match.group(1)
            inline = (match.group(2) or "").strip()
            value_lines = [inline] if inline else []
            single_line = bool(inline)
            continue

        if key is None:
            if line.strip():
                raise FormatError(
                    f"{path or '<lines>'}:{line_no}: text before first key: "
                    f"'{shorten(line)}'",
                    path,
                )
            continue

        if single_line:
            if line.strip():
                raise FormatError(
                    f"{path or '<lines>'}:{line_no}: text after single-line "
                    f"entry '{key}': '{shorten(line)}'",
                    path,
                )
            continue

        value_lines.append(line)

    flush()
    return doc


def read_lines(path: Path) -> list[str]:
    """Read ``path`` as a list of lines with terminators removed."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BookIOError(f"cannot read '{path}': {exc}", path) from exc
    except UnicodeDecodeError as exc:
        raise FormatError(
            f"'{path}' is not valid UTF-8: {exc}", path
        ) from exc
    return text.replace("\r\n", "\n").split("\n")


def parse_kv_file(path: Path | str) -> KVDoc:
    """Parse the KV document stored at ``path`` without expanding includes."""

    path = Path(path)
    return parse_kv_lines(read_lines(path), path)


def expand_includes(path: Path | str) -> list[str]:
    """Return the lines of ``path`` with ``@file`` directives expanded.

    Each directive line is replaced by the lines extracted from the
    referenced file, resolved relative to the directory of ``path``.
    """

    path = Path(path)
    seen = frozenset({path.resolve()})
    result: list[str] = []
    for line in read_lines(path):
        if line.startswith(INCLUDE_PREFIX):
            result.extend(extract_snippet_lines(path.parent, line, seen))
        else:
            result.append(line)
    return result


def parse_kv_file_with_includes(path: Path | str) -> KVDoc:
    """Parse ``path`` after expanding its include directives.

    When expansion fails the raw file is parsed instead, keeping the
    directive lines as literal text.
    """

    path = Path(path)
    try:
        lines = expand_includes(path)
    except OSError as exc:
        logger.warning(f"{path}: include expansion failed, parsing raw: {exc}")
        return parse_kv_file(path)
    return parse_kv_lines(lines, path)


def dump_kv(doc: KVDoc) -> None:
    """Log every entry of ``doc`` to help diagnose malformed sources."""

    for kv in doc:
        logger.warning(f"K: {kv.key}\nV: {shorten(kv.value)}")
