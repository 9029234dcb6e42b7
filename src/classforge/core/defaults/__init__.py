"""Defaults-template flattening (``java_defaults``)."""

from classforge.core.defaults.merger import DefaultsMerger, merge_properties

__all__ = [
    "DefaultsMerger",
    "merge_properties",
]
