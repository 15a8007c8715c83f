"""Wiring for <WORLD> documents returned by the world API."""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import convert_list, convert_number
from nationscript.shapes.common import (
    create_census_ranks,
    create_dispatch_list_item,
    create_happening,
    create_poll,
)


def create_banner(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"))
        .on_field("NAME", "name")
        .on_field("VALIDITY", "condition")
    )


def create_census_world(attrs: Attributes) -> Assembler:
    return Assembler().set("id", attrs.get("id"), convert_number).on_field("SCORE", "average", convert_number)


def create_census_description(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("NDESC", "national")
        .on_field("RDESC", "regional")
    )


def create_dispatch(attrs: Attributes) -> Assembler:
    return create_dispatch_list_item(attrs).on_field("TEXT", "body")


def create_faction_list_item(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .on_field("NAME", "name")
        .on_field("SCORE", "score", convert_number)
        .on_field("REGION", "region")
        .on_field("NATIONS", "members_num", convert_number)
    )


def create_new_nation(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("nation", attrs.get("name"))
        .on_field("REGION", "region")
        .on_field("FOUNDEDTIME", "founded", convert_number)
    )


def create_tg_queue(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("MANUAL", "manual", convert_number)
        .on_field("MASS", "mass", convert_number)
        .on_field("API", "api", convert_number)
    )


def create(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("CENSUSID", "census_id", convert_number)
        .on_field("FEATUREDREGION", "featured")
        .on_field("LASTEVENTID", "last_event_id", convert_number)
        .on_field("NATIONS", "nations", convert_list(","))
        .on_field("NEWNATIONS", "nations_new", convert_list(","))
        .on_field("NUMNATIONS", "nations_num", convert_number)
        .on_field("NUMREGIONS", "regions_num", convert_number)
        .on_field("CENSUSSCALE", "census_scale")
        .on_field("CENSUSTITLE", "census_title")
        .on_child("BANNERS", "banners", lambda _: ListAssembler.complex("BANNER", create_banner))
        .on_child("CENSUS", "census_averages", lambda _: ListAssembler.complex("SCALE", create_census_world))
        .on_child("CENSUSDESC", "census_description", create_census_description)
        .on_child("CENSUSRANKS", "census_ranks", create_census_ranks)
        .on_child("DISPATCH", "dispatch", create_dispatch)
        .on_child(
            "DISPATCHLIST", "dispatch_list",
            lambda _: ListAssembler.complex("DISPATCH", create_dispatch_list_item),
        )
        .on_child("FACTIONS", "factions", lambda _: ListAssembler.complex("FACTION", create_faction_list_item))
        .on_child("HAPPENINGS", "happenings", lambda _: ListAssembler.complex("EVENT", create_happening))
        .on_child("NEWNATIONDETAILS", "nations_new_details", lambda _: ListAssembler.complex("NEWNATION", create_new_nation))
        .on_child("POLL", "poll", create_poll)
        .on_child("TGQUEUE", "tg_queue", create_tg_queue)
    )
