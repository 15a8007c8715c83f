"""Wiring for small shapes shared by several API responses.

Each create() takes the attributes of the tag it is delegated for and
returns a configured Assembler. Field names are snake_case.
"""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import convert_list, convert_number


def create_happening(attrs: Attributes) -> Assembler:
    """<EVENT>/<HAPPENING>: timestamp and text."""
    assembler = (
        Assembler()
        .on_field("TIMESTAMP", "timestamp", convert_number)
        .on_field("TEXT", "text")
    )
    if "id" in attrs:
        assembler.set("id", attrs["id"], convert_number)
    return assembler


def create_census_nation(attrs: Attributes) -> Assembler:
    """<SCALE> inside a nation's CENSUS shard."""
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("SCORE", "score", convert_number)
        .on_field("RANK", "rank_world", convert_number)
        .on_field("PRANK", "rank_world_percent", convert_number)
        .on_field("RRANK", "rank_region", convert_number)
        .on_field("PRRANK", "rank_region_percent", convert_number)
    )


def create_census_region(attrs: Attributes) -> Assembler:
    """<SCALE> inside a region's CENSUS shard."""
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("SCORE", "average", convert_number)
        .on_field("RANK", "rank", convert_number)
        .on_field("PRANK", "rank_percent", convert_number)
    )


def create_census_rank(attrs: Attributes) -> Assembler:
    """<NATION> inside CENSUSRANKS."""
    return (
        Assembler()
        .on_field("NAME", "nation")
        .on_field("RANK", "rank", convert_number)
        .on_field("SCORE", "score", convert_number)
    )


def create_census_ranks(attrs: Attributes) -> Assembler:
    """<CENSUSRANKS>: the ranked nations sit in a pass-through <NATIONS> wrapper."""
    return Assembler().on_child(
        "NATIONS", "", lambda _: ListAssembler.complex("NATION", create_census_rank)
    )


def create_dispatch_list_item(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("TITLE", "title")
        .on_field("AUTHOR", "author")
        .on_field("CATEGORY", "category")
        .on_field("SUBCATEGORY", "subcategory")
        .on_field("CREATED", "posted", convert_number)
        .on_field("EDITED", "edited", convert_number)
        .on_field("VIEWS", "views", convert_number)
        .on_field("SCORE", "score", convert_number)
    )


def create_embassy(attrs: Attributes) -> Assembler:
    """<EMBASSY type="...">: the region name is the tag's own text."""
    return Assembler().set("type", attrs.get("type", "established")).build("region")


def create_officer(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("NATION", "nation")
        .on_field("OFFICE", "office")
        .on_field("BY", "appointer")
        .on_field("AUTHORITY", "authorities", convert_list(""))
        .on_field("TIME", "appointed", convert_number)
        .on_field("ORDER", "order", convert_number)
    )


def create_poll_option(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("OPTIONTEXT", "text")
        .on_field("VOTES", "votes", convert_number)
        .on_field("VOTERS", "voters", convert_list(":"))
    )


def create_poll(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("TITLE", "title")
        .on_field("TEXT", "description")
        .on_field("AUTHOR", "author")
        .on_field("REGION", "region")
        .on_field("START", "opens", convert_number)
        .on_field("STOP", "closes", convert_number)
        .on_child("OPTIONS", "options", lambda _: ListAssembler.complex("OPTION", create_poll_option))
    )


def create_vote_tally(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("FOR", "for", convert_number)
        .on_field("AGAINST", "against", convert_number)
    )
