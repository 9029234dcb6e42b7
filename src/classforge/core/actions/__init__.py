"""Build action synthesis (``javac`` and ``combineJar``).

Submodules:
    models   -- CompileAction, CombineAction, ModuleActions
    compile  -- CompileActionSynthesizer
    combine  -- ArtifactCombiner
"""

from classforge.core.actions.combine import ArtifactCombiner
from classforge.core.actions.compile import CompileActionSynthesizer, render_flag
from classforge.core.actions.models import (
    COMBINE_JAR_RULE,
    JAVAC_RULE,
    CombineAction,
    CompileAction,
    ModuleActions,
)

__all__ = [
    "COMBINE_JAR_RULE",
    "JAVAC_RULE",
    "ArtifactCombiner",
    "CombineAction",
    "CompileAction",
    "CompileActionSynthesizer",
    "ModuleActions",
    "render_flag",
]
