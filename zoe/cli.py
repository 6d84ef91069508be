"""Cyclopts CLI entrypoint for building, serving and scaffolding zoe sites.

The ``zoe`` console script defined here builds the site described by
``zoe-config.json``, serves it with live rebuilds during development, creates
new projects and removes build output. Every option can also be supplied
through a ``ZOE_``-prefixed environment variable, e.g. ``ZOE_BASE_URL``.

Examples
--------
Build the site in the current directory:

>>> from zoe.cli import main
>>> main()  # doctest: +SKIP

Build with a production base URL:

>>> from zoe.cli import app
>>> app(["build", "--base-url", "https://example.com"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME, VERSION
from .config import load_site_config
from .config.models import DEFAULT_BASE_URL
from .pipeline import build_site
from .scaffold import DEFAULT_PROJECT_DIR, DEFAULT_SITE_NAME, scaffold_project
from .server import DEFAULT_PORT
from .server import serve as serve_site

DEFAULT_CONFIG = Path(CONFIG_FILENAME)
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)

app = App(
    name="zoe",
    version=VERSION,
    config=cyclopts.config.Env("ZOE_", command=False),  # type: ignore[unknown-argument]
)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Build the site into the configured output directory.")
def build(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to zoe-config.json")] = (
        DEFAULT_CONFIG
    ),
    name: typ.Annotated[
        str | None, Parameter(help="Override the configured site title")
    ] = None,
    base_url: typ.Annotated[
        str | None, Parameter(help="Override the configured base URL")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Run the full build pipeline and list the files it wrote.

    Parameters
    ----------
    config : Path, optional
        Path to ``zoe-config.json``; its directory is the project root.
    name : str or None, optional
        Site title override.
    base_url : str or None, optional
        Base URL override, used for sitemap locations.
    verbose : bool, optional
        Log at DEBUG level instead of INFO.

    Raises
    ------
    ZoeError
        If configuration loading or any build stage fails.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config).with_overrides(title=name, base_url=base_url)
    result = build_site(site_config)
    for path in result.written:
        print(f"wrote {_format_path(path)}")
    if result.sitemap_path is not None:
        print(f"wrote {_format_path(result.sitemap_path)}")


@app.command(help="Serve the site locally and rebuild it when sources change.")
def serve(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to zoe-config.json")] = (
        DEFAULT_CONFIG
    ),
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = DEFAULT_PORT,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build once, then serve the output directory until interrupted."""
    _configure_logging(verbose=verbose)
    logger.info("Zoe, version %s", VERSION)
    serve_site(load_site_config(config), port=port)


@app.command(help="Create a new zoe project with example content and templates.")
def init(
    *,
    name: typ.Annotated[str, Parameter(help="Site title")] = DEFAULT_SITE_NAME,
    base_url: typ.Annotated[str, Parameter(help="Site base URL")] = DEFAULT_BASE_URL,
    directory: typ.Annotated[
        Path, Parameter(help="Directory to create")
    ] = DEFAULT_PROJECT_DIR,
) -> None:
    """Scaffold a project; the target directory must not exist.

    Raises
    ------
    FileExistsError
        If ``directory`` already exists.
    """
    _configure_logging(verbose=False)
    for path in scaffold_project(directory, site_name=name, base_url=base_url):
        print(f"wrote {_format_path(path)}")
    print(f"Initialized {name} in {_format_path(directory)}; run 'zoe serve' there.")


@app.command(help="Remove the build output directory.")
def clean(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to zoe-config.json")] = (
        DEFAULT_CONFIG
    ),
) -> None:
    """Delete the configured output directory; a missing one is not an error."""
    _configure_logging(verbose=False)
    output_dir = load_site_config(config).output_dir
    if not output_dir.exists():
        print(f"nothing to clean at {_format_path(output_dir)}")
        return
    shutil.rmtree(output_dir)
    print(f"removed {_format_path(output_dir)}")


@app.command(name="version", help="Print the zoe version.")
def show_version() -> None:
    print(f"zoe {VERSION}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``zoe`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
