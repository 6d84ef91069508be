"""Load and validate the ``zoe-config.json`` site configuration.

The loader reads the project's configuration file, applies defaults for
anything omitted, and produces the :class:`SiteConfig` dataclass that the
build pipeline consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from zoe.config import load_site_config
>>> site = load_site_config(Path("zoe-config.json"))  # doctest: +SKIP
>>> site.base_url  # doctest: +SKIP
'http://localhost:8080'
"""

from .loader import load_site_config
from .models import BuildSettings, SiteConfig, SiteConfigError

__all__ = [
    "BuildSettings",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
