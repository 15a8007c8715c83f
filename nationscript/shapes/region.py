"""Wiring for <REGION> documents returned by the region API."""

from __future__ import annotations

from nationscript.core.assembler import Assembler, Attributes, ListAssembler
from nationscript.core.converters import (
    convert_boolean,
    convert_list,
    convert_null_if_zero,
    convert_number,
)
from nationscript.shapes.common import (
    create_census_ranks,
    create_census_region,
    create_embassy,
    create_happening,
    create_officer,
    create_poll,
    create_vote_tally,
)


def create_rmb_post(attrs: Attributes) -> Assembler:
    # <LIKERS> is omitted entirely when a post has no likes.
    return (
        Assembler()
        .set("id", attrs.get("id"), convert_number)
        .set("likers", [])
        .on_field("NATION", "nation")
        .on_field("MESSAGE", "text")
        .on_field("LIKES", "likes", convert_number)
        .on_field("LIKERS", "likers", convert_list(":"))
        .on_field("TIMESTAMP", "timestamp", convert_number)
        .on_field("STATUS", "status", convert_number)
        .on_field("SUPPRESSOR", "suppressor")
    )


def create_rmb_activity(attrs: Attributes) -> Assembler:
    # POSTS, LIKES and LIKED never appear together.
    return (
        Assembler()
        .on_field("NAME", "nation")
        .on_field("POSTS", "score", convert_number)
        .on_field("LIKES", "score", convert_number)
        .on_field("LIKED", "score", convert_number)
    )


def create_zombie(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .on_field("SURVIVORS", "survivors", convert_number)
        .on_field("ZOMBIES", "zombies", convert_number)
        .on_field("DEAD", "dead", convert_number)
    )


def create(attrs: Attributes) -> Assembler:
    return (
        Assembler()
        .set("id_form", attrs.get("id"))
        .on_field("BANNED", "banlist", convert_list(":"))
        .on_field("BANNER", "banner_id", convert_null_if_zero)
        .on_field("BANNERBY", "banner_creator")
        .on_field("BANNERURL", "banner_url")
        .on_field("DBID", "db_id", convert_number)
        .on_field("DISPATCHES", "pinned_dispatches", convert_list(",", convert_number))
        .on_field("DELEGATE", "delegate", convert_null_if_zero)
        .on_field("DELEGATEAUTH", "delegate_authorities", convert_list(""))
        .on_field("DELEGATEVOTES", "delegate_votes", convert_number)
        .on_field("EMBASSYRMB", "crossposting")
        .on_field("FACTBOOK", "wfe")
        .on_field("FLAG", "flag")
        .on_field("FOUNDED", "founded")
        .on_field("FOUNDER", "founder", convert_null_if_zero)
        .on_field("FOUNDEDTIME", "founded_timestamp", convert_number)
        .on_field("FRONTIER", "is_frontier", convert_boolean)
        .on_field("GOVERNOR", "governor", convert_null_if_zero)
        .on_field("LASTUPDATE", "update_last", convert_number)
        .on_field("LASTMAJORUPDATE", "update_major", convert_number)
        .on_field("LASTMINORUPDATE", "update_minor", convert_number)
        .on_field("NAME", "name")
        .on_field("NATIONS", "nations", convert_list(":"))
        .on_field("NUMNATIONS", "nations_num", convert_number)
        .on_field("UNNATIONS", "nations_wa", convert_list(":"))
        .on_field("NUMUNNATIONS", "nations_wa_num", convert_number)
        .on_field("POWER", "power_level")
        .on_child("TAGS", "tags", lambda _: ListAssembler.simple("TAG"))
        .on_child("CENSUS", "census", lambda _: ListAssembler.complex("SCALE", create_census_region))
        .on_child("CENSUSRANKS", "census_ranks", create_census_ranks)
        .on_child("EMBASSIES", "embassies", lambda _: ListAssembler.complex("EMBASSY", create_embassy))
        .on_child("GAVOTE", "vote_ga", create_vote_tally)
        .on_child("SCVOTE", "vote_sc", create_vote_tally)
        .on_child("HAPPENINGS", "happenings", lambda _: ListAssembler.complex("EVENT", create_happening))
        .on_child("HISTORY", "history", lambda _: ListAssembler.complex("EVENT", create_happening))
        .on_child("MESSAGES", "messages", lambda _: ListAssembler.complex("POST", create_rmb_post))
        .on_child("MOSTPOSTS", "rmb_most_posts", lambda _: ListAssembler.complex("NATION", create_rmb_activity))
        .on_child("MOSTLIKES", "rmb_most_likes_received", lambda _: ListAssembler.complex("NATION", create_rmb_activity))
        .on_child("MOSTLIKED", "rmb_most_likes_given", lambda _: ListAssembler.complex("NATION", create_rmb_activity))
        .on_child("OFFICERS", "officers", lambda _: ListAssembler.complex("OFFICER", create_officer))
        .on_child("POLL", "poll", create_poll)
        .on_child("ZOMBIE", "zombie", create_zombie)
    )
