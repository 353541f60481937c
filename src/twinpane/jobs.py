"""Copy, move and delete marked entries on background threads.

Every submitted entry gets its own daemon thread.  Threads are never joined
or cancelled; each one reports back exactly once by putting a
:class:`JobResult` on the runner's queue, which the UI thread drains with
:meth:`JobRunner.poll`.
"""

from __future__ import annotations

import logging
import shutil
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from queue import Empty, Queue
from typing import Callable, Iterable, List, Optional

from twinpane.state import PaneEntry

LOGGER = logging.getLogger(__name__)

ERROR_PREFIX = "Err: "


class JobKind(Enum):
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class JobResult:
    """Outcome of one background job."""

    job_id: int
    kind: JobKind
    source: Path
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """Status text: empty on success, ``Err: <cause>`` on failure."""
        if self.error is None:
            return ""
        return f"{ERROR_PREFIX}{self.error}"


def _copy_path(source: Path, is_dir: bool, dest_dir: Path) -> None:
    target = dest_dir / source.name
    if is_dir:
        shutil.copytree(source, target, symlinks=True)
    else:
        shutil.copy2(source, target)


def _move_path(source: Path, dest_dir: Path) -> None:
    source.rename(dest_dir / source.name)


def _delete_path(source: Path, is_dir: bool, is_symlink: bool) -> None:
    if is_dir and not is_symlink:
        shutil.rmtree(source)
    else:
        source.unlink()


class JobRunner:
    """Spawn one thread per entry and collect their results."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_job_id = 1
        self._results: Queue[JobResult] = Queue()

    def copy(self, entries: Iterable[PaneEntry], dest_dir: Path) -> List[int]:
        """Copy each entry into ``dest_dir``; directories are copied recursively."""
        job_ids = []
        for entry in entries:
            source, is_dir = entry.path, entry.is_dir
            job_ids.append(
                self._spawn(JobKind.COPY, source, lambda s=source, d=is_dir: _copy_path(s, d, dest_dir))
            )
        return job_ids

    def move(self, entries: Iterable[PaneEntry], dest_dir: Path) -> List[int]:
        """Rename each entry into ``dest_dir`` (same-filesystem semantics)."""
        job_ids = []
        for entry in entries:
            source = entry.path
            job_ids.append(self._spawn(JobKind.MOVE, source, lambda s=source: _move_path(s, dest_dir)))
        return job_ids

    def delete(self, entries: Iterable[PaneEntry]) -> List[int]:
        """Remove each entry; directories are removed with their contents."""
        job_ids = []
        for entry in entries:
            source, is_dir, is_symlink = entry.path, entry.is_dir, entry.is_symlink
            job_ids.append(
                self._spawn(
                    JobKind.DELETE,
                    source,
                    lambda s=source, d=is_dir, link=is_symlink: _delete_path(s, d, link),
                )
            )
        return job_ids

    def poll(self) -> Optional[JobResult]:
        """Return one finished job result without blocking, or None."""
        try:
            return self._results.get_nowait()
        except Empty:
            return None

    def _spawn(self, kind: JobKind, source: Path, work: Callable[[], None]) -> int:
        with self._lock:
            job_id = self._next_job_id
            self._next_job_id += 1

        LOGGER.info("Job %d: %s %s", job_id, kind.label, source)
        worker = threading.Thread(
            target=self._run,
            args=(job_id, kind, source, work),
            name=f"twinpane-{kind.value}-{job_id}",
            daemon=True,
        )
        worker.start()
        return job_id

    def _run(self, job_id: int, kind: JobKind, source: Path, work: Callable[[], None]) -> None:
        try:
            work()
        except OSError as err:
            LOGGER.warning("Job %d: %s %s failed: %s", job_id, kind.label, source, err)
            self._results.put(JobResult(job_id, kind, source, error=str(err)))
            return
        except Exception as err:
            # Every job reports exactly once, even on unexpected errors
            LOGGER.exception("Job %d: %s %s crashed", job_id, kind.label, source)
            self._results.put(JobResult(job_id, kind, source, error=str(err) or type(err).__name__))
            return
        LOGGER.debug("Job %d: %s %s done", job_id, kind.label, source)
        self._results.put(JobResult(job_id, kind, source))


__all__ = ["JobKind", "JobResult", "JobRunner", "ERROR_PREFIX"]
