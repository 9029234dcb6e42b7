"""Classpath data models.

``Classpath`` is an ordered, path-deduplicated sequence of artifact paths.
``ResolvedClasspaths`` pairs the bootclasspath and classpath computed for
one module-variant and derives the implicit-input list from them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from classforge.core.sdk.resolver import NO_BOOTCLASSPATH, SdkResolution


class Classpath:
    """An ordered sequence of artifact paths with first-seen deduplication."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = []
        self._seen: set[str] = set()
        self.extend(entries)

    def add(self, path: str) -> bool:
        """Append ``path`` unless already present. Returns True if appended."""
        if path in self._seen:
            return False
        self._seen.add(path)
        self._entries.append(path)
        return True

    def extend(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.add(path)

    def __contains__(self, path: object) -> bool:
        return path in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Classpath({self._entries!r})"

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)


@dataclass(frozen=True)
class ResolvedClasspaths:
    """Bootclasspath and classpath of one module-variant.

    Attributes:
        bootclasspath: Bootclasspath entries; may be exactly the
            no-bootclasspath sentinel.
        classpath: Classpath entries, never overlapping ``bootclasspath``.
        sdk: The SDK resolution the bootclasspath was derived from.
    """

    bootclasspath: tuple[str, ...]
    classpath: tuple[str, ...]
    sdk: SdkResolution

    @property
    def bootclasspath_dependencies(self) -> tuple[str, ...]:
        """Bootclasspath entries that are real artifacts (sentinel removed)."""
        return tuple(p for p in self.bootclasspath if p != NO_BOOTCLASSPATH)

    @property
    def implicits(self) -> tuple[str, ...]:
        """Upstream artifacts a compile must be rebuilt for, in order."""
        return self.bootclasspath_dependencies + self.classpath
