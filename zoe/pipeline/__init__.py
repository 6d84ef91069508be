"""Build pipeline: stages, the per-build context and the one-call entry point."""

from __future__ import annotations

from .context import BuildContext, BuildResult
from .orchestrator import DEFAULT_STAGES, Pipeline, Stage, build_site

__all__ = [
    "DEFAULT_STAGES",
    "BuildContext",
    "BuildResult",
    "Pipeline",
    "Stage",
    "build_site",
]
