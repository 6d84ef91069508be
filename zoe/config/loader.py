"""Load ``zoe-config.json`` into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from zoe._constants import DEFAULT_OUTPUT_DIR

from .models import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_BASE_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_PYGMENTS_STYLE,
    DEFAULT_TITLE,
    BuildSettings,
    SiteConfig,
    SiteConfigError,
    normalize_base_url,
)

logger = logging.getLogger(__name__)


def load_site_config(path: Path) -> SiteConfig:
    """Load the JSON configuration describing the site and its build.

    JSON is read with ruamel.yaml's YAML 1.2 safe loader; every JSON document
    is valid YAML 1.2, so hand-edited files may also use YAML syntax.

    Parameters
    ----------
    path : Path
        Filesystem path to ``zoe-config.json``. Its parent directory becomes
        the project root that ``content/``, ``templates/`` and the output
        directory resolve against.

    Returns
    -------
    SiteConfig
        Parsed configuration. When ``path`` does not exist, a configuration
        made entirely of defaults is returned.

    Raises
    ------
    SiteConfigError
        If the file cannot be parsed, is not a mapping, or lacks the
        ``site.title`` / ``site.base_url`` fields.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_site_config(Path("missing/zoe-config.json"))
    >>> config.base_url
    'http://localhost:8080'
    """
    root = path.parent
    if not path.exists():
        logger.info("No configuration file found at %s, using defaults", path)
        return SiteConfig(root=root)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' could not be parsed: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site = _require_mapping(raw, "site")
    title = _require_str(site, "title", section="site")
    base_url = _require_str(site, "base_url", section="site")
    description = site.get("description") or DEFAULT_DESCRIPTION

    build_raw = raw.get("build") or {}
    if not isinstance(build_raw, dict):
        msg = "The 'build' section must be a mapping."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=title or DEFAULT_TITLE,
        description=str(description),
        base_url=normalize_base_url(base_url) or DEFAULT_BASE_URL,
        build=_build_settings(build_raw),
        root=root,
    )


def _build_settings(payload: typ.Mapping[str, typ.Any]) -> BuildSettings:
    """Build a BuildSettings instance from the ``build`` mapping."""
    output_dir = payload.get("output_dir")
    if not output_dir:
        logger.info("No 'output_dir' specified, using default: %s", DEFAULT_OUTPUT_DIR)
        output_dir = DEFAULT_OUTPUT_DIR
    assets_dir = payload.get("assets_dir", DEFAULT_ASSETS_DIR)
    return BuildSettings(
        output_dir=Path(str(output_dir)),
        assets_dir=Path(str(assets_dir)) if assets_dir else None,
        pygments_style=str(payload.get("pygments_style") or DEFAULT_PYGMENTS_STYLE),
    )


def _require_mapping(raw: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return ``raw[key]`` when it is a mapping, raising otherwise."""
    value = raw.get(key)
    if not isinstance(value, dict):
        msg = f"Configuration is missing the '{key}' section."
        raise SiteConfigError(msg)
    return dict(value)


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, *, section: str) -> str:
    """Return a non-empty string field or raise SiteConfigError."""
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        msg = f"Configuration field '{section}.{key}' is required."
        raise SiteConfigError(msg)
    return value.strip()


__all__ = ["load_site_config"]
