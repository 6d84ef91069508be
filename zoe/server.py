"""Development server: serve the built site and rebuild it when sources change.

The output directory is served on ``127.0.0.1`` with clean URLs, so ``/posts/``
answers with ``public/posts/index.html``. A background thread polls
``content/``, ``templates/`` and the assets directory and re-runs the whole
build when any file is added, removed or modified. A failed rebuild is logged
and the previous output keeps being served.
"""

from __future__ import annotations

import functools
import logging
import threading
import typing as typ
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from zoe.errors import ZoeError
from zoe.pipeline import BuildResult, build_site

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from zoe.config import SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_POLL_INTERVAL = 1.0


class SiteRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that logs through :mod:`logging`.

    Directory URLs resolve to their ``index.html``, and a directory requested
    without its trailing slash is redirected to the slashed URL.
    """

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)


def snapshot(directories: cabc.Iterable[Path]) -> dict[Path, int]:
    """Return the modification time of every file under ``directories``."""
    mtimes: dict[Path, int] = {}
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in directory.rglob("*"):
            try:
                if path.is_file():
                    mtimes[path] = path.stat().st_mtime_ns
            except FileNotFoundError:
                continue
    return mtimes


class SiteWatcher:
    """Poll the site sources and rebuild on change, one build at a time.

    Parameters
    ----------
    config : SiteConfig
        Site to rebuild.
    interval : float, optional
        Seconds between polls.
    build : callable, optional
        Build entry point; :func:`zoe.pipeline.build_site` by default.
    """

    def __init__(
        self,
        config: SiteConfig,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        build: cabc.Callable[[SiteConfig], BuildResult] = build_site,
    ) -> None:
        self.config = config
        self.interval = interval
        self._build = build
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self._snapshot = snapshot(self.watched_dirs)

    @property
    def watched_dirs(self) -> list[Path]:
        dirs = [self.config.content_dir, self.config.templates_dir]
        if self.config.assets_dir is not None:
            dirs.append(self.config.assets_dir)
        return dirs

    def poll(self) -> bool:
        """Rebuild if any watched file changed since the last poll.

        Returns
        -------
        bool
            ``True`` when a change was detected and a rebuild attempted.
        """
        current = snapshot(self.watched_dirs)
        if current == self._snapshot:
            return False
        self._snapshot = current
        logger.info("Change detected, rebuilding site")
        self.rebuild()
        return True

    def rebuild(self) -> BuildResult | None:
        """Run a full build; return ``None`` if it failed."""
        with self._lock:
            try:
                result = self._build(self.config)
            except ZoeError:
                logger.exception("Rebuild failed; serving the previous output")
                return None
        logger.info("Rebuilt %d pages", result.page_count)
        return result

    def start(self) -> None:
        """Start polling on a daemon thread."""
        self._thread = threading.Thread(
            target=self._run, name="zoe-watcher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and wait for the thread to finish."""
        self._stopped.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.poll()
            except Exception:  # noqa: BLE001 - keep polling after any failure
                logger.exception("Watcher poll failed; continuing to watch")


def make_server(
    output_dir: Path, *, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> ThreadingHTTPServer:
    """Return an HTTP server bound to ``host:port`` serving ``output_dir``."""
    handler = functools.partial(SiteRequestHandler, directory=str(output_dir))
    return ThreadingHTTPServer((host, port), handler)


def serve(
    config: SiteConfig,
    *,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """Build the site, then serve it and rebuild on change until interrupted.

    Raises
    ------
    ZoeError
        If the initial build fails.
    OSError
        If the port cannot be bound.
    """
    build_site(config)
    watcher = SiteWatcher(config, interval=interval)
    with make_server(config.output_dir, host=host, port=port) as httpd:
        watcher.start()
        logger.info("Listening on http://localhost:%d", port)
        logger.info("Serving files from %s", config.output_dir)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Stopping server")
        finally:
            watcher.stop()


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "SiteRequestHandler",
    "SiteWatcher",
    "make_server",
    "serve",
    "snapshot",
]
