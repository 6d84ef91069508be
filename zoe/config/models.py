"""Typed dataclasses describing the zoe site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from zoe._constants import CONTENT_DIR, DEFAULT_OUTPUT_DIR, TEMPLATES_DIR
from zoe.errors import SiteConfigError

DEFAULT_TITLE = "My Site"
DEFAULT_DESCRIPTION = "Built with Zoe"
DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_ASSETS_DIR = "static"
DEFAULT_PYGMENTS_STYLE = "default"


@dc.dataclass(slots=True)
class BuildSettings:
    """Output locations and rendering options from the ``build`` block."""

    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    assets_dir: Path | None = Path(DEFAULT_ASSETS_DIR)
    pygments_style: str = DEFAULT_PYGMENTS_STYLE


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition.

    Attributes
    ----------
    title : str
        Human-readable site name.
    description : str
        Short site description.
    base_url : str
        Scheme and host prefixed to every sitemap URL, without a trailing
        slash.
    build : BuildSettings
        Output and asset locations.
    root : Path
        Project directory; relative paths resolve against it.
    """

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    base_url: str = DEFAULT_BASE_URL
    build: BuildSettings = dc.field(default_factory=BuildSettings)
    root: Path = Path()

    @property
    def content_dir(self) -> Path:
        """Return the fixed ``content/`` directory of the project."""
        return self.root / CONTENT_DIR

    @property
    def templates_dir(self) -> Path:
        """Return the fixed ``templates/`` directory of the project."""
        return self.root / TEMPLATES_DIR

    @property
    def output_dir(self) -> Path:
        """Return the output directory, resolved against the project root."""
        return self.root / self.build.output_dir

    @property
    def assets_dir(self) -> Path | None:
        """Return the static assets directory, if one is configured."""
        if self.build.assets_dir is None:
            return None
        return self.root / self.build.assets_dir

    def with_overrides(
        self, *, title: str | None = None, base_url: str | None = None
    ) -> SiteConfig:
        """Return a copy with CLI overrides applied."""
        return dc.replace(
            self,
            title=title or self.title,
            base_url=normalize_base_url(base_url) if base_url else self.base_url,
        )


def normalize_base_url(value: str) -> str:
    """Strip whitespace and trailing slashes so ``base_url + "/x/"`` is clean."""
    return value.strip().rstrip("/")


__all__ = [
    "DEFAULT_ASSETS_DIR",
    "DEFAULT_BASE_URL",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_PYGMENTS_STYLE",
    "DEFAULT_TITLE",
    "BuildSettings",
    "SiteConfig",
    "SiteConfigError",
    "normalize_base_url",
]
