"""Module records and the static module-kind registry.

Submodules:
    models    -- ModuleKind, Variant, ModuleProperties, ModuleDeclaration, Module
    registry  -- ModuleKindRegistry and the built-in kind constructors
"""

from classforge.core.modules.models import (
    LIST_PROPERTIES,
    SCALAR_PROPERTIES,
    DependencyEdge,
    DependencyRole,
    Module,
    ModuleDeclaration,
    ModuleKind,
    ModuleProperties,
    OsClass,
    Variant,
)
from classforge.core.modules.registry import (
    ModuleKindRegistry,
    RegisteredKind,
    default_registry,
)

__all__ = [
    "LIST_PROPERTIES",
    "SCALAR_PROPERTIES",
    "DependencyEdge",
    "DependencyRole",
    "Module",
    "ModuleDeclaration",
    "ModuleKind",
    "ModuleKindRegistry",
    "ModuleProperties",
    "OsClass",
    "RegisteredKind",
    "Variant",
    "default_registry",
]
