"""Dotted field paths into a product under construction.

WHY: Shape wiring addresses nested fields with strings such as
"vote.total.for" so one flat assembler can fill a nested dict without a
fixed schema. Splitting that string on every commit is wasteful and
hides the structure, so the path is parsed once into segments.

HOW: FieldPath is a frozen value holding an ordered tuple of segments.
assign() walks the segments, creating intermediate dicts on demand, and
writes the value at the last one. The empty path addresses the product
itself.

RULES:
- "" parses to the root path; assigning to it replaces the whole product
- Intermediate dicts are created lazily and reused by later assignments
- Walking through an existing non-dict value raises FieldConflictError
- Empty segments ("a..b") are rejected at parse time
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nationscript.errors import ConfigurationError, FieldConflictError


@dataclass(frozen=True)
class FieldPath:
    """Location of a (possibly nested) field within a product."""

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, dotted: str) -> FieldPath:
        if not isinstance(dotted, str):
            raise ConfigurationError(f"Invalid target product field: {dotted!r}")
        if dotted == "":
            return cls()
        segments = tuple(dotted.split("."))
        if any(not s for s in segments):
            raise ConfigurationError(f"Invalid target product field: {dotted!r}")
        return cls(segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def assign(self, product: Any, value: Any) -> Any:
        """Write value at this path and return the (possibly new) product.

        A root path returns value itself. Otherwise product must be a dict,
        which is updated in place.
        """
        if self.is_root:
            return value
        if not isinstance(product, dict):
            raise FieldConflictError(
                f"Cannot set {self} on non-composite product {product!r}"
            )

        node = product
        for depth, segment in enumerate(self.segments[:-1]):
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                walked = ".".join(self.segments[: depth + 1])
                raise FieldConflictError(
                    f"Cannot set {self}: {walked} already holds {child!r}"
                )
            node = child
        node[self.segments[-1]] = value
        return product

    def lookup(self, product: Any) -> Any:
        """Return the value at this path, or None where any step is missing."""
        node = product
        for segment in self.segments:
            if not isinstance(node, dict):
                return None
            node = node.get(segment)
        return node

    def __str__(self) -> str:
        return ".".join(self.segments)
