"""
Watch Mode — Recompile roles when content changes

A watchdog Observer watches the content directory recursively. Bursts of
filesystem events (an editor save often produces several) are collapsed
by a debounce timer into a single "Change detected" recompile pass.

Only content changes count: created, modified, deleted and moved files.
Open/close events are ignored, otherwise the compiler's own reads would
retrigger it.
"""

import threading
from typing import Optional

from watchdog.events import (
    EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED,
    FileSystemEvent, FileSystemEventHandler,
)
from watchdog.observers import Observer

from ..core.paths import Paths
from ..presentation.logger import Logger
from .roles import RoleCompiler


DEFAULT_DEBOUNCE_SECONDS = 0.3

CHANGE_EVENTS = (EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED)


class RecompileHandler(FileSystemEventHandler):
    """Debounces content events into compile_all() calls."""

    def __init__(self, compiler: RoleCompiler, logger: Logger,
                 debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS):
        super().__init__()
        self.compiler = compiler
        self.logger = logger
        self.debounce_seconds = debounce_seconds
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in CHANGE_EVENTS:
            return
        self.schedule()

    def schedule(self) -> None:
        """Restart the debounce window."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._recompile)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _recompile(self) -> None:
        with self._lock:
            self._timer = None
        self.logger.info("Change detected, recompiling...")
        try:
            self.compiler.compile_all()
        except (OSError, ValueError) as e:
            # Keep watching after a failed pass
            self.logger.error(f"Recompile failed: {e}")


class Watcher:
    """A running watch. close() stops the observer and any pending recompile."""

    def __init__(self, observer, handler: RecompileHandler):
        self.observer = observer
        self.handler = handler

    @property
    def is_alive(self) -> bool:
        return self.observer.is_alive()

    def close(self) -> None:
        self.handler.cancel()
        self.observer.stop()
        self.observer.join()


def watch_and_recompile(
    paths: Paths,
    compiler: RoleCompiler,
    logger: Logger,
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
) -> Watcher:
    """Start watching the content directory. The caller owns close()."""
    content_dir = paths.content_dir
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    handler = RecompileHandler(compiler, logger, debounce_seconds)
    observer = Observer()
    observer.schedule(handler, str(content_dir), recursive=True)
    observer.start()

    logger.info(f"Watching {paths.relative(content_dir)}/ for changes...")
    return Watcher(observer, handler)
