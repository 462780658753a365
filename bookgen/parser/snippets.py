"""Extract code snippets referenced by ``@file`` directives."""

from __future__ import annotations

from pathlib import Path

from bookgen.errors import IncludeError

INCLUDE_PREFIX = "@file "

SHOW_START = ":show start"
SHOW_END = ":show end"
HIDE = ":hide"

# Flags accepted after the file name of a directive.
KNOWN_FLAGS = frozenset({"no_output"})

# Map file extensions to the language used for fenced code blocks.
EXT_TO_LANG = {
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".java": "java",
    ".js": "javascript",
    ".kt": "kotlin",
    ".php": "php",
    ".py": "python",
    ".rb": "ruby",
    ".rs": "rust",
    ".sh": "sh",
    ".sql": "sql",
    ".swift": "swift",
    ".ts": "typescript",
}


def parse_directive(line: str) -> tuple[str, list[str]]:
    """Split an ``@file`` line into the file name and its flags.

    Raises:
        IncludeError: If the line has no file name or uses unknown flags.
    """

    parts = line[len(INCLUDE_PREFIX) :].split()
    if not parts:
        raise IncludeError(f"missing file name in '{line}'")
    name, flags = parts[0], parts[1:]
    unknown = [f for f in flags if f not in KNOWN_FLAGS]
    if unknown:
        raise IncludeError(f"unknown flags {unknown} in '{line}'")
    return name, flags


def _select_shown(lines: list[str]) -> list[str]:
    """Keep only the lines inside ``:show`` regions, if any exist."""

    if not any(SHOW_START in line for line in lines):
        return [line for line in lines if HIDE not in line]

    shown: list[str] = []
    showing = False
    for line in lines:
        if SHOW_START in line:
            showing = True
        elif SHOW_END in line:
            showing = False
        elif showing and HIDE not in line:
            shown.append(line)
    return shown


def extract_snippet_lines(
    base_dir: Path, line: str, seen: frozenset[Path] = frozenset()
) -> list[str]:
    """Return markdown lines for the snippet referenced by ``line``.

    Args:
        base_dir: Directory of the file containing the directive.
        line: The ``@file`` directive line.
        seen: Files already being expanded, used to detect cycles.

    Returns:
        A fenced code block holding the snippet lines in file order.

    Raises:
        IncludeError: If the file is missing, unreadable or includes itself.
    """

    name, _flags = parse_directive(line)
    path = (base_dir / name).resolve()
    if path in seen:
        raise IncludeError(f"include cycle through '{path}'", path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IncludeError(f"cannot include '{name}': {exc}", path) from exc

    body: list[str] = []
    for src_line in text.replace("\r\n", "\n").rstrip("\n").split("\n"):
        if src_line.startswith(INCLUDE_PREFIX):
            body.extend(
                extract_snippet_lines(path.parent, src_line, seen | {path})
            )
        else:
            body.append(src_line)

    lang = EXT_TO_LANG.get(path.suffix.lower(), "")
    return [f"```{lang}", *_select_shown(body), "```"]
