"""Watch mode - Watchdog based rebuilds on source-tree changes.

File-system events are filtered down to schema documents (never the
output file) and forwarded to a ``RebuildScheduler``, which runs builds
one at a time on its own thread. Changes that arrive while a build is
running collapse into exactly one follow-up build.
"""

import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from gqlcompose.discovery import is_schema_file
from gqlcompose.utils.constants import DEFAULT_SCHEMA_EXTENSIONS
from gqlcompose.utils.logging import logger

# Event types that can change the composed schema
RELEVANT_EVENTS = frozenset({"created", "modified", "deleted", "moved"})

# Directory events that can take documents away without per-file events
DIRECTORY_REMOVAL_EVENTS = frozenset({"deleted", "moved"})


class RebuildScheduler:
    """Serializes rebuild requests onto a single worker thread."""

    def __init__(self, build: Callable[[], Any], debounce_seconds: float = 0.0):
        """
        Args:
            build: Runs one full build pass; its return value is kept as ``last_result``
            debounce_seconds: Quiet period between a request and the build it starts
        """
        self._build = build
        self._debounce = max(0.0, debounce_seconds)
        self._requested = threading.Event()
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None
        self.builds_completed = 0
        self.last_result: Any = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stopping.clear()
        self._thread = threading.Thread(target=self._run, name="gqlcompose-rebuild", daemon=True)
        self._thread.start()

    def trigger(self) -> None:
        """Request a rebuild; requests made during a build coalesce into one."""
        self._requested.set()

    def stop(self, timeout: float | None = None) -> None:
        """Stop after the in-flight build, if any, has completed."""
        self._stopping.set()
        self._requested.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            self._requested.wait()
            if self._stopping.is_set():
                return
            if self._debounce and self._stopping.wait(self._debounce):
                return
            self._requested.clear()

            try:
                self.last_result = self._build()
            except Exception:
                # Watch mode never dies on a failed rebuild
                logger.opt(exception=True).error("Rebuild crashed")

            self.builds_completed += 1


def _as_path(path: str | bytes | None) -> Path | None:
    if not path:
        return None
    if isinstance(path, bytes):
        path = path.decode()
    return Path(path)


class SchemaChangeHandler(FileSystemEventHandler):
    """Forwards changes to schema documents, ignoring everything else.

    Moving or deleting a directory reports only the directory itself, so
    those events are forwarded too unless they concern the output file's
    own directories.
    """

    def __init__(self, on_change: Callable[[], None], output: Path | None = None,
                 extensions: Iterable[str] = DEFAULT_SCHEMA_EXTENSIONS):
        super().__init__()
        self.on_change = on_change
        self.output = Path(output).resolve() if output is not None else None
        self.extensions = tuple(extensions)

    def is_relevant_path(self, path: str | bytes | None) -> bool:
        path = _as_path(path)
        if path is None:
            return False
        if not is_schema_file(path.name, self.extensions):
            return False
        return self.output is None or path.resolve() != self.output

    def is_relevant_directory(self, path: str | bytes | None) -> bool:
        path = _as_path(path)
        if path is None:
            return False
        if self.output is None:
            return True
        resolved = path.resolve()
        return resolved != self.output and resolved not in self.output.parents

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in RELEVANT_EVENTS:
            return

        paths = [event.src_path, getattr(event, "dest_path", None)]
        if event.is_directory:
            if event.event_type not in DIRECTORY_REMOVAL_EVENTS:
                return
            relevant = any(self.is_relevant_directory(p) for p in paths)
        else:
            relevant = any(self.is_relevant_path(p) for p in paths)
        if not relevant:
            return

        logger.debug(f"Change detected: {event.event_type} {event.src_path}")
        self.on_change()


def watch(source: Path, output: Path, rebuild: Callable[[], Any],
          debounce_seconds: float = 0.2,
          extensions: Iterable[str] = DEFAULT_SCHEMA_EXTENSIONS,
          stop_event: threading.Event | None = None) -> Any:
    """Build, then rebuild whenever a schema document under ``source`` changes.

    The first build is scheduled only once the observer is running, so
    edits made while it runs are picked up by a follow-up build. Runs
    until interrupted or until ``stop_event`` is set.

    Returns:
        The result of the last build, or None if none ran
    """
    stop_event = stop_event or threading.Event()
    scheduler = RebuildScheduler(rebuild, debounce_seconds=debounce_seconds)
    handler = SchemaChangeHandler(scheduler.trigger, output=output, extensions=extensions)

    observer = Observer()
    observer.schedule(handler, str(source), recursive=True)

    scheduler.start()
    observer.start()
    scheduler.trigger()
    logger.info(f"Watching {source} for changes (Ctrl-C to stop)")

    try:
        while observer.is_alive() and not stop_event.wait(0.5):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
        scheduler.stop()
        logger.info(f"Stopped watching after {scheduler.builds_completed} build(s)")

    return scheduler.last_result
