"""Create a starter zoe project: config, example content, templates and styles."""

from __future__ import annotations

import json
import logging
import shutil
import typing as typ
from pathlib import Path

from zoe._constants import CONFIG_FILENAME, DEFAULT_OUTPUT_DIR
from zoe.config.models import DEFAULT_ASSETS_DIR, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_DIR = Path("zoe-website")
DEFAULT_SITE_NAME = "my-zoe-site"
STARTER_DIR = Path(__file__).parent / "starter"
STARTER_DESCRIPTION = "A site built with Zoe"

# Packaged name -> name written into the new project.
RENAMED_FILES: dict[str, str] = {"gitignore": ".gitignore"}


def starter_config(site_name: str, base_url: str) -> dict[str, typ.Any]:
    """Return the ``zoe-config.json`` payload written for a new project."""
    return {
        "site": {
            "title": site_name,
            "description": STARTER_DESCRIPTION,
            "base_url": base_url,
        },
        "build": {
            "output_dir": DEFAULT_OUTPUT_DIR,
            "assets_dir": DEFAULT_ASSETS_DIR,
        },
    }


def scaffold_project(
    directory: Path = DEFAULT_PROJECT_DIR,
    *,
    site_name: str = DEFAULT_SITE_NAME,
    base_url: str = DEFAULT_BASE_URL,
) -> list[Path]:
    """Write a new project into ``directory``.

    Parameters
    ----------
    directory : Path, optional
        Project directory to create; it must not exist yet.
    site_name : str, optional
        Site title stored in ``zoe-config.json``.
    base_url : str, optional
        Base URL stored in ``zoe-config.json``.

    Returns
    -------
    list[Path]
        Every file written, config first.

    Raises
    ------
    FileExistsError
        If ``directory`` already exists.
    """
    logger.info("Initializing new Zoe project %s in %s", site_name, directory)
    directory.mkdir(parents=True)

    config_path = directory / CONFIG_FILENAME
    payload = starter_config(site_name, base_url)
    config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    written = [config_path]

    for source in sorted(STARTER_DIR.rglob("*")):
        if not source.is_file():
            continue
        relative = source.relative_to(STARTER_DIR)
        target = directory / relative.with_name(
            RENAMED_FILES.get(relative.name, relative.name)
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        written.append(target)

    (directory / DEFAULT_ASSETS_DIR / "images").mkdir(parents=True, exist_ok=True)
    return written


__all__ = [
    "DEFAULT_PROJECT_DIR",
    "DEFAULT_SITE_NAME",
    "scaffold_project",
    "starter_config",
]
