"""Wiring for trading card documents (<CARD> and <CARDS> roots).

WHY: Card responses describe a nation as it was depicted when the card
was minted. Those fields arrive as siblings of the card's own fields, so
they are gathered under one "depicted" dict with dotted targets.

RULES:
- Markets and trades are lists of composites
- A trade inside <CARDS> carries the traded card's id, rarity and season
  as siblings; they are gathered under "card"
"""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import convert_number


def convert_price(value):
    """Unsold gifts carry an empty PRICE; treat it as 0.0."""
    return convert_number(value) if str(value).strip() else 0.0


def convert_is_ask(value) -> bool:
    return str(value).strip() == "ask"


def create_market(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("NATION", "nation")
        .on_field("PRICE", "bank", convert_number)
        .on_field("TYPE", "is_ask", convert_is_ask)
        .on_field("TIMESTAMP", "timestamp", convert_number)
    )


def create_trade_cardbound(attrs: Attributes) -> Assembler:
    """<TRADE> inside a single card's TRADES shard."""
    return (
        Assembler()
        .on_field("BUYER", "buyer")
        .on_field("SELLER", "seller")
        .on_field("PRICE", "price", convert_price)
        .on_field("TIMESTAMP", "timestamp", convert_number)
    )


def create_trade(attrs: Attributes) -> Assembler:
    """<TRADE> inside the world-wide <CARDS> trades shard."""
    return (
        create_trade_cardbound(attrs)
        .on_field("CARDID", "card.id", convert_number)
        .on_field("CATEGORY", "card.rarity")
        .on_field("SEASON", "card.season", convert_number)
    )


def create_card_list_item(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("CARDID", "id", convert_number)
        .on_field("CATEGORY", "rarity")
        .on_field("SEASON", "season", convert_number)
    )


def create_dump_card(attrs: Attributes) -> Assembler:
    """<CARD> inside a card dump, where the depicted fields are named differently."""
    return (
        Assembler()
        .on_field("ID", "id", convert_number)
        .on_field("NAME", "depicted.name")
        .on_field("TYPE", "depicted.pretitle")
        .on_field("MOTTO", "depicted.motto")
        .on_field("CATEGORY", "depicted.category")
        .on_field("REGION", "depicted.region")
        .on_field("FLAG", "depicted.flag")
        .on_field("CARDCATEGORY", "rarity")
        .on_field("DESCRIPTION", "description")
    )


def create(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("CARDID", "id", convert_number)
        .on_field("CATEGORY", "rarity")
        .on_field("MARKET_VALUE", "value", convert_number)
        .on_field("SEASON", "season", convert_number)
        .on_field("FLAG", "depicted.flag")
        .on_field("GOVT", "depicted.category")
        .on_field("NAME", "depicted.name")
        .on_field("REGION", "depicted.region")
        .on_field("SLOGAN", "depicted.motto")
        .on_field("TYPE", "depicted.pretitle")
        .on_child("OWNERS", "owners", lambda _: ListAssembler.simple("OWNER"))
        .on_child("MARKETS", "markets", lambda _: ListAssembler.complex("MARKET", create_market))
        .on_child("TRADES", "trades", lambda _: ListAssembler.complex("TRADE", create_trade_cardbound))
    )


def create_world(attrs: Attributes) -> Assembler:
    """<CARDS>: deck listings and world-wide trades."""
    return (
        Assembler()
        .on_child("DECK", "cards", lambda _: ListAssembler.complex("CARD", create_card_list_item))
        .on_child("TRADES", "trades", lambda _: ListAssembler.complex("TRADE", create_trade))
    )
