"""Resolution pipeline: Phase 1 passes and the build planner."""

from classforge.core.pipeline.passes import ErrorCollector
from classforge.core.pipeline.planner import BuildPlan, BuildPlanner

__all__ = [
    "BuildPlan",
    "BuildPlanner",
    "ErrorCollector",
]
