"""Filesystem side of a build: output directories, static files and pages."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from zoe._constants import HIGHLIGHT_CSS_PATH, IMAGES_DIR, STATIC_OUTPUT_DIR
from zoe.errors import FileSystemError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from zoe.config import SiteConfig
    from zoe.content import ContentNode, ContentTree
    from zoe.document import HtmlContentRenderer

logger = logging.getLogger(__name__)


def prepare_output(config: SiteConfig, renderer: HtmlContentRenderer) -> None:
    """Create the output directory and copy images, assets and code styles.

    ``content/images`` is copied to ``<output>/images`` and the configured
    assets directory to ``<output>/static``. A configured assets directory
    that does not exist is logged and skipped.

    Raises
    ------
    FileSystemError
        If a directory cannot be created or a file cannot be copied.
    """
    output_dir = config.output_dir
    _make_dirs(output_dir)

    images_src = config.content_dir / IMAGES_DIR
    if images_src.is_dir():
        copy_directory(images_src, output_dir / IMAGES_DIR)

    assets_src = config.assets_dir
    if assets_src is not None:
        if assets_src.is_dir():
            copy_directory(assets_src, output_dir / STATIC_OUTPUT_DIR)
        else:
            logger.warning(
                "Static directory not found or could not be accessed: %s", assets_src
            )

    write_text(output_dir / HIGHLIGHT_CSS_PATH, renderer.stylesheet)


def copy_directory(source: Path, destination: Path) -> None:
    """Copy ``source`` recursively into ``destination``, overwriting files."""
    logger.debug("Copying %s to %s", source, destination)
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except OSError as exc:
        msg = f"Failed to copy {source} to {destination}: {exc}"
        raise FileSystemError(msg, path=source) from exc


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` as UTF-8, creating parent directories first."""
    _make_dirs(path.parent)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        logger.error(msg)
        raise FileSystemError(msg, path=path) from exc
    return path


def write_node(node: ContentNode, output_dir: Path) -> Path:
    """Write a rendered node to ``output_dir / node.output_path``."""
    return write_text(output_dir / node.output_path, node.rendered_body)


def write_tree(tree: ContentTree, output_dir: Path) -> list[Path]:
    """Write the homepage, then each section's index page and pages.

    Returns
    -------
    list[Path]
        Paths written, in the same order as :meth:`ContentTree.iter_nodes`.
    """
    return [write_node(node, output_dir) for node in tree.iter_nodes()]


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create directory {path}: {exc}"
        logger.error(msg)
        raise FileSystemError(msg, path=path) from exc


__all__ = ["copy_directory", "prepare_output", "write_node", "write_text", "write_tree"]
