"""Options controlling how a book is parsed."""

from __future__ import annotations

import os
from pathlib import Path

from attrs import define, field


def default_worker_count() -> int:
    """Return the number of chapters parsed at the same time.

    One CPU is left free for the dispatching thread.
    """

    return max(1, (os.cpu_count() or 1) - 1)


@define(slots=True, frozen=True)
class ParseOptions:
    """Options controlling how a book is parsed.

    Attributes:
        strict: When ``True`` a malformed article or chapter aborts the book.
            When ``False`` it is skipped with a warning.
        books_dir: Directory holding one sub-directory per book.
        workers: Maximum number of chapters parsed concurrently.
        user_names: Optional YAML or JSON file mapping Stack Overflow user
            ids to URL names.
    """

    strict: bool
    books_dir: Path = field(default=Path("books"), converter=Path)
    workers: int = field(factory=default_worker_count)
    user_names: Path | None = field(
        default=None,
        converter=lambda p: Path(p) if p is not None else None,
    )

    @workers.validator
    def _check_workers(self, attribute: object, value: int) -> None:
        if value < 1:
            raise ValueError(f"workers must be at least 1, got {value}")
