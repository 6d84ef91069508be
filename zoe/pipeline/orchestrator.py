"""Run the five build stages in order over a single build context.

The stages are:

1. ``setup-directories``: create the output tree and copy static files.
2. ``process-content``: map ``content/`` onto a content tree.
3. ``apply-templates``: render every node through its page template.
4. ``write-output``: persist each rendered node.
5. ``generate-sitemap``: write ``sitemap.xml``.

The first failing stage stops the run. Files written before the failure stay
on disk, and output left over from deleted sources is never removed.

Example
-------
>>> from pathlib import Path
>>> from zoe.config import load_site_config
>>> from zoe.pipeline import build_site
>>> result = build_site(load_site_config(Path("zoe-config.json")))  # doctest: +SKIP
>>> result.sitemap_path  # doctest: +SKIP
PosixPath('public/sitemap.xml')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from zoe.content import ContentTreeBuilder
from zoe.sitemap import project_sitemap, write_sitemap
from zoe.templating import TemplateEngine

from .context import BuildContext, BuildResult
from .output import prepare_output, write_tree

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from zoe.config import SiteConfig

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Stage:
    """A named step of the build."""

    name: str
    run: cabc.Callable[[BuildContext], None]


def setup_directories(context: BuildContext) -> None:
    prepare_output(context.config, context.renderer)


def process_content(context: BuildContext) -> None:
    builder = ContentTreeBuilder(context.renderer)
    context.tree = builder.build(context.config.content_dir)


def apply_templates(context: BuildContext) -> None:
    """Render the homepage, every section index, then every page.

    Each section index sees its section's pages, newest first, for the
    duration of its own render only.
    """
    engine = TemplateEngine(context.config.templates_dir)
    context.templates = engine
    engine.ensure_base_template()

    tree = context.require_tree()
    if tree.homepage is not None:
        engine.apply(tree.homepage)
    for section in tree.sections.values():
        index_page = section.index_page
        if index_page is None:
            continue
        index_page.attached_listing = section.sorted_pages()
        try:
            engine.apply(index_page)
        finally:
            index_page.attached_listing = None
    for section in tree.sections.values():
        for page in section.pages:
            engine.apply(page)


def write_output(context: BuildContext) -> None:
    tree = context.require_tree()
    context.written = write_tree(tree, context.config.output_dir)
    logger.debug("Wrote %d pages", len(context.written))


def generate_sitemap(context: BuildContext) -> None:
    tree = context.require_tree()
    entries = project_sitemap(tree, context.config.base_url)
    context.sitemap_path = write_sitemap(entries, context.config.output_dir)


DEFAULT_STAGES: tuple[Stage, ...] = (
    Stage("setup-directories", setup_directories),
    Stage("process-content", process_content),
    Stage("apply-templates", apply_templates),
    Stage("write-output", write_output),
    Stage("generate-sitemap", generate_sitemap),
)


class Pipeline:
    """Sequence the build stages over ``context``.

    Parameters
    ----------
    context : BuildContext
        A fresh context; it is consumed by :meth:`run`.
    stages : tuple[Stage, ...], optional
        Stages to run, defaulting to :data:`DEFAULT_STAGES`.
    """

    def __init__(
        self, context: BuildContext, stages: tuple[Stage, ...] = DEFAULT_STAGES
    ) -> None:
        self.context = context
        self.stages = stages

    def run(self) -> BuildResult:
        """Run every stage in order and summarize the build.

        Returns
        -------
        BuildResult
            Written page paths and the sitemap location.

        Raises
        ------
        BuildContextError
            If the context was already used or closed.
        Exception
            The first stage failure, re-raised unchanged apart from a note
            naming the stage. ``context.failed_stage`` records the stage.
        """
        self.context.begin()
        for stage in self.stages:
            logger.info("Running stage: %s", stage.name)
            try:
                stage.run(self.context)
            except Exception as exc:
                logger.error("Stage '%s' failed: %s", stage.name, exc)
                self.context.failed_stage = stage.name
                exc.add_note(f"zoe build stage: {stage.name}")
                raise
        result = self.context.result()
        logger.info(
            "Built %d pages into %s", result.page_count, result.output_dir
        )
        return result


def build_site(config: SiteConfig) -> BuildResult:
    """Build the site described by ``config`` in a fresh build context."""
    with BuildContext(config) as context:
        return Pipeline(context).run()


__all__ = [
    "DEFAULT_STAGES",
    "Pipeline",
    "Stage",
    "apply_templates",
    "build_site",
    "generate_sitemap",
    "process_content",
    "setup_directories",
    "write_output",
]
