"""Build action data models.

Actions are the hand-off to the external execution engine: plain, frozen
records naming a rule, its ordered inputs, its output and, for compiles, the
implicit inputs and rendered flag values. ``to_dict`` gives the JSON shape
used by ``classforge plan --json``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from classforge.core.classpath.models import ResolvedClasspaths

JAVAC_RULE = "javac"
COMBINE_JAR_RULE = "combineJar"


@dataclass(frozen=True)
class CompileAction:
    """Compiles a source library's ``srcs`` into its compiled jar.

    Attributes:
        module: Owning module name.
        variant: Owning variant name.
        inputs: Source files, in declaration order.
        output: The compiled jar.
        implicits: Bootclasspath (sentinel removed) ++ classpath. A change
            to any entry must trigger a rebuild.
        args: Rendered flag values, keyed ``bootClasspath`` and ``classpath``.
    """

    module: str
    variant: str
    inputs: tuple[str, ...]
    output: str
    implicits: tuple[str, ...]
    args: dict[str, str] = field(default_factory=dict)
    rule: str = JAVAC_RULE

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "module": self.module,
            "variant": self.variant,
            "inputs": list(self.inputs),
            "implicits": list(self.implicits),
            "output": self.output,
            "args": dict(self.args),
        }


@dataclass(frozen=True)
class CombineAction:
    """Merges a module's own jar with its static dependencies' artifacts.

    Attributes:
        module: Owning module name.
        variant: Owning variant name.
        inputs: Own primary artifact first, then flattened static
            dependency artifacts.
        output: The combined jar advertised to downstream modules.
    """

    module: str
    variant: str
    inputs: tuple[str, ...]
    output: str
    rule: str = COMBINE_JAR_RULE

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "module": self.module,
            "variant": self.variant,
            "inputs": list(self.inputs),
            "output": self.output,
        }


@dataclass(frozen=True)
class ModuleActions:
    """Everything Phase 2 produced for one module-variant.

    Prebuilt imports carry no actions; their ``artifacts`` are their jars.
    """

    module: str
    variant: str
    kind: str
    artifacts: tuple[str, ...]
    classpaths: ResolvedClasspaths | None = None
    compile: CompileAction | None = None
    combine: CombineAction | None = None

    @property
    def actions(self) -> list[CompileAction | CombineAction]:
        return [a for a in (self.compile, self.combine) if a is not None]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "module": self.module,
            "variant": self.variant,
            "kind": self.kind,
            "artifacts": list(self.artifacts),
            "actions": [a.to_dict() for a in self.actions],
        }
        if self.classpaths is not None:
            data["bootclasspath"] = list(self.classpaths.bootclasspath)
            data["classpath"] = list(self.classpaths.classpath)
        return data
