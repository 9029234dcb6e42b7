"""classforge exception hierarchy.

All public exceptions inherit from ClassforgeError, giving callers a single
base class to catch when they want to handle any classforge-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from collections.abc import Sequence


class ClassforgeError(Exception):
    """Base exception for all classforge errors."""


class ModuleDeclarationError(ClassforgeError):
    """Raised when a module declaration is malformed.

    Covers unknown module kinds, duplicate names within a variant, properties
    that are not allowed on a kind, and values of the wrong type.
    """


class CyclicDefaultsError(ClassforgeError):
    """Raised when a defaults template transitively references itself."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(
            "Cyclic defaults reference: " + " -> ".join(self.cycle)
        )


class UnknownSdkVersionError(ClassforgeError):
    """Raised when an SDK selector is unrecognized or has no registered prebuilt."""

    def __init__(self, module: str, sdk_version: str, reason: str = "") -> None:
        self.module = module
        self.sdk_version = sdk_version
        message = f"{module}: unknown sdk_version {sdk_version!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnresolvedDependencyError(ClassforgeError):
    """Raised when a named dependency has no matching module in the variant."""

    def __init__(
        self, module: str, dependency: str, role: str, variant: str | None = None
    ) -> None:
        self.module = module
        self.dependency = dependency
        self.role = role
        self.variant = variant
        where = f"{module} ({variant})" if variant else module
        super().__init__(
            f"{where}: {role} dependency {dependency!r} is not defined"
        )


class RoleConflictError(ClassforgeError):
    """Raised when a name appears in both ``libs`` and ``static_libs``."""

    def __init__(self, module: str, names: Sequence[str]) -> None:
        self.module = module
        self.names = list(names)
        super().__init__(
            f"{module}: {', '.join(repr(n) for n in self.names)} listed in "
            f"both libs and static_libs"
        )


class DependencyCycleError(ClassforgeError):
    """Raised when ``libs``/``static_libs`` edges form a cycle in one variant."""

    def __init__(self, variant: str, cycle: Sequence[str]) -> None:
        self.variant = variant
        self.cycle = list(cycle)
        super().__init__(
            f"Dependency cycle in {variant}: " + " -> ".join(self.cycle)
        )


class BuildAbortedError(ClassforgeError):
    """Raised once at the end of planning when any module failed to resolve.

    Carries every collected error so a single invocation reports the complete
    set of configuration problems. No partial plan accompanies it.
    """

    def __init__(self, errors: Sequence[ClassforgeError]) -> None:
        self.errors = list(errors)
        noun = "error" if len(self.errors) == 1 else "errors"
        super().__init__(
            f"Build aborted with {len(self.errors)} {noun}:\n"
            + "\n".join(f"  {e}" for e in self.errors)
        )
