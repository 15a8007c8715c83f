"""Wiring for the daily data dumps.

Dumps hold every nation, region or card in the game, so each wiring is a
FilteredListAssembler: items the predicate rejects are dropped as soon as
they are complete and never accumulate.
"""

from __future__ import annotations

from nationscript.core.assembler import Assembler, FilteredListAssembler, Predicate
from nationscript.shapes import card, nation, region


def create_nations(predicate: Predicate) -> FilteredListAssembler:
    return FilteredListAssembler(predicate).on_child("NATION", "", nation.create)


def create_regions(predicate: Predicate) -> FilteredListAssembler:
    return FilteredListAssembler(predicate).on_child("REGION", "", region.create)


def create_cards(predicate: Predicate) -> Assembler:
    # The cards sit inside a <SET> wrapper below the <CARDS> root.
    return Assembler().on_child(
        "SET", "",
        lambda _: FilteredListAssembler(predicate).on_child("CARD", "", card.create_dump_card),
    )
