"""Module graph and classpath resolution.

Submodules:
    graph    -- ModuleGraph (variant index, edges, cycles, visitation order)
    models   -- Classpath, ResolvedClasspaths
    builder  -- ClasspathBuilder
"""

from classforge.core.classpath.builder import ClasspathBuilder
from classforge.core.classpath.graph import ModuleGraph
from classforge.core.classpath.models import Classpath, ResolvedClasspaths

__all__ = [
    "Classpath",
    "ClasspathBuilder",
    "ModuleGraph",
    "ResolvedClasspaths",
]
