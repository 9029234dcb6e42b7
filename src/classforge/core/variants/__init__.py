"""Variant expansion (device / host) and output path convention."""

from classforge.core.variants.selector import VariantSelector

__all__ = ["VariantSelector"]
