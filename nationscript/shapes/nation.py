"""Wiring for <NATION> documents returned by the nation API.

WHY: The nation API is the most used endpoint and has the widest
response shape: scalars, delimited lists, repeated children, nested
composites, and loose tags that belong together (the HDI components).

HOW: create() returns a root Assembler whose root tag is adopted from
the document. Repeated children use ListAssembler; the HDI tags target
dotted paths so they land in one "hdi" dict.

RULES:
- id_form comes from the root tag's id attribute
- CAPITAL, LEADER and RELIGION appear twice when the matching custom
  shard was requested; the second occurrence is the custom value
"""

from __future__ import annotations

from collections.abc import Iterable

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import convert_boolean, convert_list, convert_number
from nationscript.shapes.common import (
    create_census_nation,
    create_dispatch_list_item,
    create_happening,
)

# Shards whose tag is repeated when requested together with the plain shard.
_CUSTOM_SHARDS = {
    "CAPITAL": ("customcapital", "capital"),
    "LEADER": ("customleader", "leader"),
    "RELIGION": ("customreligion", "religion"),
}


def _custom_or_plain(custom_shard: str, field: str, shards: Iterable[str]):
    wants_custom = custom_shard in {s.lower() for s in shards}

    def _handler(assembler: Assembler, attrs: Attributes) -> None:
        if wants_custom and assembler.get(field) is not None:
            assembler.build(f"{field}_custom")
        else:
            assembler.build(field)

    return _handler


def create_death_cause(attrs: Attributes) -> Assembler:
    return Assembler().set("cause", attrs.get("type")).build("percent", convert_number)


def create_unreads(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("ISSUES", "issues", convert_number)
        .on_field("TELEGRAMS", "telegrams", convert_number)
        .on_field("NOTICES", "notices", convert_number)
        .on_field("RMB", "rmb", convert_number)
        .on_field("WA", "wa", convert_number)
        .on_field("NEWS", "news", convert_number)
    )


def create_notice(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("TITLE", "title")
        .on_field("TEXT", "text")
        .on_field("TIMESTAMP", "timestamp", convert_number)
        .on_field("TYPE", "type")
        .on_field("TYPE_ICON", "icon")
        .on_field("URL", "url")
        .on_field("WHO", "who")
        .on_field("NEW", "is_new", convert_boolean)
        .on_field("OK", "ok", convert_boolean)
    )


def create(attrs: Attributes, shards: Iterable[str] | None = None) -> Assembler:
    shards = tuple(shards or ())
    assembler = (
        Assembler()
        .set("id_form", attrs.get("id"))
        .on_field("ADMIRABLE", "admirable")
        .on_child("ADMIRABLES", "admirables", lambda _: ListAssembler.simple("ADMIRABLE"))
        .on_field("ANIMAL", "animal")
        .on_field("ANIMALTRAIT", "animal_trait")
        .on_field("BANNER", "banner")
        .on_child("BANNERS", "banners", lambda _: ListAssembler.simple("BANNER"))
        .on_field("CATEGORY", "category")
        .on_field("CRIME", "crime")
        .on_field("CURRENCY", "currency")
        .on_field("DBID", "db_id", convert_number)
        .on_field("DEMONYM", "demonym_adjective")
        .on_field("DEMONYM2", "demonym_noun")
        .on_field("DEMONYM2PLURAL", "demonym_plural")
        .on_field("DISPATCHES", "dispatch_count", convert_number)
        .on_field("ENDORSEMENTS", "endorsements", convert_list(","))
        .on_field("FACTBOOKS", "factbook_count", convert_number)
        .on_field("FIRSTLOGIN", "first_login", convert_number)
        .on_field("FLAG", "flag")
        .on_field("FOUNDED", "founded")
        .on_field("FOUNDEDTIME", "founded_timestamp", convert_number)
        .on_field("FULLNAME", "full_name")
        .on_field("GAVOTE", "vote_ga")
        .on_field("GDP", "gdp", convert_number)
        .on_field("GOVTDESC", "government")
        .on_field("GOVTPRIORITY", "spending_priority")
        .on_field("INCOME", "income_average", convert_number)
        .on_field("INDUSTRYDESC", "industry_description")
        .on_field("INFLUENCE", "influence")
        .on_field("ISSUES_ANSWERED", "issues_answered", convert_number)
        .on_field("LASTACTIVITY", "last_activity")
        .on_field("LASTLOGIN", "last_login", convert_number)
        .on_child("LEGISLATION", "legislation", lambda _: ListAssembler.simple("LAW"))
        .on_field("MAJORINDUSTRY", "major_industry")
        .on_field("MOTTO", "motto")
        .on_field("NAME", "name")
        .on_field("NEXTISSUE", "next_issue")
        .on_field("NEXTISSUETIME", "next_issue_timestamp", convert_number)
        .on_field("NOTABLE", "notable")
        .on_child("NOTABLES", "notables", lambda _: ListAssembler.simple("NOTABLE"))
        .on_field("PACKS", "packs", convert_number)
        .on_field("PING", "ping", convert_boolean)
        .on_field("POOREST", "income_poorest", convert_number)
        .on_field("POPULATION", "population", convert_number)
        .on_field("PUBLICSECTOR", "public_sector", convert_number)
        .on_field("REGION", "region")
        .on_field("RICHEST", "income_richest", convert_number)
        .on_field("SCVOTE", "vote_sc")
        .on_field("SENSIBILITIES", "sensibilities", convert_list(", "))
        .on_field("TAX", "tax", convert_number)
        .on_field("TGCANCAMPAIGN", "receives_campaign", convert_boolean)
        .on_field("TGCANRECRUIT", "receives_recruit", convert_boolean)
        .on_field("TYPE", "pretitle")
        .on_field("UNSTATUS", "wa_status")
        .on_child("CENSUS", "census", lambda _: ListAssembler.complex("SCALE", create_census_nation))
        .on_child("DEATHS", "deaths", lambda _: ListAssembler.complex("CAUSE", create_death_cause))
        .on_child(
            "DISPATCHLIST", "dispatch_list",
            lambda _: ListAssembler.complex("DISPATCH", create_dispatch_list_item),
        )
        .on_child("HAPPENINGS", "happenings", lambda _: ListAssembler.complex("EVENT", create_happening))
        # Private shards, sent only to an authenticated client.
        .on_child("NOTICES", "notices", lambda _: ListAssembler.complex("NOTICE", create_notice))
        .on_child("UNREAD", "unreads", create_unreads)
        # The HDI components are siblings rather than children of one tag.
        .on_field("HDI", "hdi.score", convert_number)
        .on_field("HDI-ECONOMY", "hdi.economy", convert_number)
        .on_field("HDI-SMART", "hdi.education", convert_number)
        .on_field("HDI-LIFESPAN", "hdi.lifespan", convert_number)
    )
    for tag, (custom_shard, field) in _CUSTOM_SHARDS.items():
        assembler.on_tag(tag, _custom_or_plain(custom_shard, field, shards))
    return assembler
