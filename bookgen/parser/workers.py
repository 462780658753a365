"""Parse chapter directories on a bounded pool of worker threads."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from attrs import define

from .chapter import Chapter

logger = logging.getLogger(__name__)

ChapterParser = Callable[[Path], Chapter]


@define(slots=True, frozen=True)
class ChapterOutcome:
    """Result of parsing one chapter directory.

    Attributes:
        chapter_dir: Directory that was parsed.
        chapter: Parsed chapter, or ``None`` when parsing failed.
        error: Error raised by the parser, or ``None`` on success.
    """

    chapter_dir: Path
    chapter: Chapter | None
    error: Exception | None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_chapters(
    chapter_dirs: Iterable[Path], parse: ChapterParser, workers: int
) -> list[ChapterOutcome]:
    """Run ``parse`` for every directory with at most ``workers`` in flight.

    The dispatch loop blocks while all slots are taken. A failing chapter
    does not stop the others, and the call returns only after every
    dispatched parse has finished.

    Args:
        chapter_dirs: Chapter directories in listing order.
        parse: Callable turning a chapter directory into a ``Chapter``.
        workers: Maximum number of simultaneous parses.

    Returns:
        One outcome per directory, in dispatch order.
    """

    slots = threading.BoundedSemaphore(workers)
    submitted: list[tuple[Path, Future[Chapter]]] = []

    def release(_future: Future[Chapter]) -> None:
        slots.release()

    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="chapter"
    ) as executor:
        for chapter_dir in chapter_dirs:
            slots.acquire()
            try:
                future = executor.submit(parse, chapter_dir)
            except BaseException:
                slots.release()
                raise
            future.add_done_callback(release)
            submitted.append((chapter_dir, future))
        logger.debug(f"Dispatched {len(submitted)} chapters")

    outcomes: list[ChapterOutcome] = []
    for chapter_dir, future in submitted:
        exc = future.exception()
        if exc is None:
            outcomes.append(ChapterOutcome(chapter_dir, future.result(), None))
        elif isinstance(exc, Exception):
            outcomes.append(ChapterOutcome(chapter_dir, None, exc))
        else:
            raise exc
    return outcomes


def first_error(outcomes: Iterable[ChapterOutcome]) -> Exception | None:
    """Return the error of the first failed outcome in dispatch order."""

    for outcome in outcomes:
        if outcome.error is not None:
            return outcome.error
    return None
