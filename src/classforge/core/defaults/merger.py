"""Defaults flattening.

A defaults template is a non-buildable module whose properties are folded
into every module that lists it under ``defaults``. Flattening happens as a
pure pre-pass, before variant expansion and before any dependency edge
exists, so nothing downstream ever sees a ``defaults`` reference.

Merge rule
----------
For a module ``M`` with ``defaults: [T1, T2]``:

- list properties: ``T1.list ++ T2.list ++ M.list``
- scalar properties: ``M.value`` if set, else the last set value among
  ``T1, T2`` (in that order)

Templates may reference templates; each is flattened (recursively) before
it is merged into its referrer. Flattened templates are memoized, so a
template shared by many modules is flattened once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence

from classforge.core.modules.models import (
    LIST_PROPERTIES,
    SCALAR_PROPERTIES,
    ModuleDeclaration,
    ModuleProperties,
)
from classforge.exceptions import (
    CyclicDefaultsError,
    ModuleDeclarationError,
    UnresolvedDependencyError,
)

logger = logging.getLogger(__name__)


def _is_set(name: str, value: object) -> bool:
    if value is None:
        return False
    if name == "sdk_version":
        return value != ""
    return True


def merge_properties(
    templates: Sequence[ModuleProperties], own: ModuleProperties
) -> ModuleProperties:
    """Merge already-flattened template properties with a module's own.

    Args:
        templates: Template property sets in reference order.
        own: The referencing module's declared properties.

    Returns:
        The effective property set, with an empty ``defaults`` list.
    """
    lists = {
        name: tuple(
            item
            for props in (*templates, own)
            for item in getattr(props, name)
        )
        for name in LIST_PROPERTIES
    }

    scalars: dict[str, object] = {}
    for name in SCALAR_PROPERTIES:
        value = getattr(own, name)
        if not _is_set(name, value):
            for props in templates:
                if _is_set(name, getattr(props, name)):
                    value = getattr(props, name)
        scalars[name] = value

    return ModuleProperties(defaults=(), **lists, **scalars)  # type: ignore[arg-type]


class DefaultsMerger:
    """Flattens defaults templates into the modules that reference them.

    Args:
        declarations: Every declaration of the build, templates included.
            Names are looked up by ``name`` alone; templates are not
            variant-specific.
    """

    def __init__(self, declarations: Iterable[ModuleDeclaration]) -> None:
        self._by_name: dict[str, ModuleDeclaration] = {}
        for decl in declarations:
            # Non-template duplicates are legal here (source vs. prebuilt);
            # only templates are looked up through this index.
            if decl.is_defaults or decl.name not in self._by_name:
                self._by_name[decl.name] = decl
        self._flattened: dict[str, ModuleProperties] = {}

    @property
    def templates(self) -> Mapping[str, ModuleDeclaration]:
        return {n: d for n, d in self._by_name.items() if d.is_defaults}

    def flatten(self, declaration: ModuleDeclaration) -> ModuleDeclaration:
        """Return ``declaration`` with every referenced template merged in.

        Raises:
            CyclicDefaultsError: If a template transitively references itself.
            UnresolvedDependencyError: If a referenced template does not exist.
            ModuleDeclarationError: If a referenced module is not a template.
        """
        if not declaration.properties.defaults:
            return declaration
        props = self._flatten_properties(declaration)
        logger.debug(
            "Flattened %d defaults into %s",
            len(declaration.properties.defaults),
            declaration.name,
        )
        return declaration.with_properties(props)

    def _template(self, referrer: str, name: str) -> ModuleDeclaration:
        template = self._by_name.get(name)
        if template is None:
            raise UnresolvedDependencyError(referrer, name, role="defaults")
        if not template.is_defaults:
            raise ModuleDeclarationError(
                f"{referrer}: {name!r} is a {template.kind_tag}, "
                f"not a defaults module"
            )
        return template

    def _flatten_properties(self, declaration: ModuleDeclaration) -> ModuleProperties:
        # One frame per template being flattened; ``path`` mirrors the stack.
        path = [declaration.name]
        stack: list[tuple[ModuleDeclaration, Iterator[str], list[ModuleProperties]]] = [
            (declaration, iter(declaration.properties.defaults), [])
        ]
        while True:
            current, refs, resolved = stack[-1]
            for ref in refs:
                if ref in path:
                    raise CyclicDefaultsError(path[path.index(ref):] + [ref])
                cached = self._flattened.get(ref)
                if cached is not None:
                    resolved.append(cached)
                    continue
                template = self._template(current.name, ref)
                stack.append((template, iter(template.properties.defaults), []))
                path.append(ref)
                break
            else:
                stack.pop()
                path.pop()
                props = merge_properties(resolved, current.properties)
                if current.is_defaults:
                    self._flattened[current.name] = props
                if not stack:
                    return props
                stack[-1][2].append(props)
