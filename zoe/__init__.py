"""Zoe: build a static site from a directory of Markdown sections.

The package turns ``content/`` into section and page nodes, renders each node
through the project's ``templates/`` and writes the pages plus a sitemap into
the output directory.

Exports
-------
- ``app``: Cyclopts application behind the ``zoe`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``build_site``: Run a complete build for a :class:`~zoe.config.SiteConfig`.

Examples
--------
>>> from zoe import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .pipeline import build_site

__all__ = ["app", "build_site", "main"]
