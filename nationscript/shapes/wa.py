"""Wiring for <WA> documents returned by the World Assembly API.

WHY: The World Assembly endpoint answers for one council at a time
(1 = General Assembly, 2 = Security Council) and mixes council totals
with the resolution at vote and the proposals waiting for approval.

HOW: create() reads the council from the root tag's attribute. The
resolution's vote data lands under one "vote" dict through dotted
paths, since the API spreads it over sibling tags.

RULES:
- coauthors is always present on a resolution, [] when the API omits it
- legality is always present on a proposal; each of its lists is []
  until the Secretariat has ruled that way
"""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import convert_list, convert_number
from nationscript.shapes.common import create_happening


def create_delegate_vote(attrs: Attributes) -> Assembler:
    """<DELEGATE> inside DELVOTES_FOR/DELVOTES_AGAINST."""
    return (
        Assembler()
        .on_field("NATION", "delegate")
        .on_field("VOTES", "weight", convert_number)
        .on_field("TIMESTAMP", "timestamp", convert_number)
    )


def create_delegate_log_entry(attrs: Attributes) -> Assembler:
    return create_delegate_vote(attrs).on_field("ACTION", "vote")


def create_legality_decision(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("NATION", "nation")
        .on_field("DECISION", "ruling")
        .on_field("REASON", "reason")
        .on_field("T", "timestamp", convert_number)
    )


def create_legality(attrs: Attributes) -> Assembler:
    """<GENSEC>: General Secretariat rulings on a proposal."""
    return (
        Assembler()
        .set("legal", [])
        .set("illegal", [])
        .set("discard", [])
        .set("log", [])
        .on_child("LEGAL", "legal", lambda _: ListAssembler.simple("LEGAL"))
        .on_child("ILLEGAL", "illegal", lambda _: ListAssembler.simple("ILLEGAL"))
        .on_child("DISCARD", "discard", lambda _: ListAssembler.simple("DISCARD"))
        .on_child("LOG", "log", lambda _: ListAssembler.complex("ENTRY", create_legality_decision))
    )


def create_proposal(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id", attrs.get("id"))
        .set("legality", {"legal": [], "illegal": [], "discard": [], "log": []})
        .on_field("NAME", "title")
        .on_field("PROPOSED_BY", "author")
        .on_child("COAUTHORS", "coauthors", lambda _: ListAssembler.simple("N"))
        .on_field("DESC", "text")
        .on_field("APPROVALS", "approvals", convert_list(":"))
        .on_field("CREATED", "submitted", convert_number)
        .on_field("CATEGORY", "category")
        .on_field("OPTION", "option")
        .on_child("GENSEC", "legality", create_legality)
    )


def create_resolution(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("coauthors", [])
        .on_field("ID", "id")
        .on_field("COUNCILID", "id")
        .on_field("RESID", "id_overall", convert_number)
        .on_field("NAME", "title")
        .on_field("PROPOSED_BY", "author")
        .on_child("COAUTHOR", "coauthors", lambda _: ListAssembler.simple("N"))
        .on_field("DESC", "text")
        .on_field("CREATED", "submitted", convert_number)
        .on_field("PROMOTED", "promoted", convert_number)
        .on_field("IMPLEMENTED", "implemented", convert_number)
        .on_field("REPEALED_BY", "repealed", convert_number)
        .on_field("CATEGORY", "category")
        .on_field("OPTION", "option")
        .on_field("TOTAL_VOTES_FOR", "vote.total.for", convert_number)
        .on_field("TOTAL_VOTES_AGAINST", "vote.total.against", convert_number)
        # Only sent while the resolution is at vote.
        .on_field("TOTAL_NATIONS_FOR", "vote.nations_count.for", convert_number)
        .on_field("TOTAL_NATIONS_AGAINST", "vote.nations_count.against", convert_number)
        .on_child(
            "VOTE_TRACK_FOR", "vote.track.for",
            lambda _: ListAssembler.simple("N", convert_number),
        )
        .on_child(
            "VOTE_TRACK_AGAINST", "vote.track.against",
            lambda _: ListAssembler.simple("N", convert_number),
        )
        .on_child("VOTES_FOR", "vote.voters.for", lambda _: ListAssembler.simple("N"))
        .on_child("VOTES_AGAINST", "vote.voters.against", lambda _: ListAssembler.simple("N"))
        .on_child(
            "DELVOTES_FOR", "vote.delegates.for",
            lambda _: ListAssembler.complex("DELEGATE", create_delegate_vote),
        )
        .on_child(
            "DELVOTES_AGAINST", "vote.delegates.against",
            lambda _: ListAssembler.complex("DELEGATE", create_delegate_vote),
        )
        .on_child(
            "DELLOG", "vote.delegate_log",
            lambda _: ListAssembler.complex("ENTRY", create_delegate_log_entry),
        )
    )


def create(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("council", attrs.get("council"), convert_number)
        .on_field("NUMNATIONS", "member_count", convert_number)
        .on_field("NUMDELEGATES", "delegate_count", convert_number)
        .on_field("DELEGATES", "delegates", convert_list(","))
        .on_field("MEMBERS", "members", convert_list(","))
        .on_field("LASTRESOLUTION", "last_resolution")
        .on_child("HAPPENINGS", "happenings", lambda _: ListAssembler.complex("EVENT", create_happening))
        .on_child("PROPOSALS", "proposals", lambda _: ListAssembler.complex("PROPOSAL", create_proposal))
        .on_child("RESOLUTION", "resolution", create_resolution)
    )
