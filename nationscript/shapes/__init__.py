"""Response shapes: wiring functions configuring an Assembler per document type.

Each module exposes create(attrs) returning the root assembler for one
kind of API document. match_shape() picks the wiring from the root tag
when the caller did not supply one.
"""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes
from nationscript.shapes import card, nation, region, wa, world

_SHAPES = {
    "NATION": nation.create,
    "REGION": region.create,
    "WORLD": world.create,
    "CARD": card.create,
    "CARDS": card.create_world,
    "WA": wa.create,
}


def match_shape(name: str, attrs: Attributes) -> Assembler | None:
    """Return the wiring for a root tag, or None for an unknown document."""
    create = _SHAPES.get(name)
    if create is None:
        return None
    return create(attrs)


__all__ = ["match_shape"]
