"""Tests for the response shape wirings against sample API documents.

HOW: Each sample is a trimmed copy of a real API response layout, run
through assemble() with the shape's create function.
"""

from nationscript.core.reader import assemble
from nationscript.shapes import card, match_shape, nation, region, world
from nationscript.shapes.dump import create_cards, create_nations

NATION_DOC = b"""<NATION id="testlandia">
<NAME>Testlandia</NAME>
<TYPE>Hive Mind</TYPE>
<FULLNAME>The Hive Mind of Testlandia</FULLNAME>
<POPULATION>44245</POPULATION>
<ENDORSEMENTS>alpha,beta,gamma</ENDORSEMENTS>
<ADMIRABLES><ADMIRABLE>efficient</ADMIRABLE><ADMIRABLE>safe</ADMIRABLE></ADMIRABLES>
<TGCANRECRUIT>1</TGCANRECRUIT>
<HDI>81.25</HDI>
<HDI-ECONOMY>70</HDI-ECONOMY>
<HDI-SMART>92.5</HDI-SMART>
<HDI-LIFESPAN>80</HDI-LIFESPAN>
<CENSUS>
  <SCALE id="0"><SCORE>12.5</SCORE><RANK>4</RANK><RRANK>1</RRANK></SCALE>
  <SCALE id="46"><SCORE>3</SCORE><RANK>100</RANK><RRANK>2</RRANK></SCALE>
</CENSUS>
<HAPPENINGS>
  <EVENT><TIMESTAMP>1700000000</TIMESTAMP><TEXT>@@testlandia@@ did a thing.</TEXT></EVENT>
</HAPPENINGS>
<UNKNOWNSHARD><DEEP>skipped</DEEP></UNKNOWNSHARD>
</NATION>"""


class TestNation:
    """The nation shape maps scalars, lists, composites and HDI siblings."""

    def test_full_document(self):
        product = assemble(NATION_DOC, lambda tag, attrs: nation.create(attrs))
        assert product["id_form"] == "testlandia"
        assert product["name"] == "Testlandia"
        assert product["pretitle"] == "Hive Mind"
        assert product["population"] == 44245
        assert product["endorsements"] == ["alpha", "beta", "gamma"]
        assert product["admirables"] == ["efficient", "safe"]
        assert product["receives_recruit"] is True
        assert product["hdi"] == {"score": 81.25, "economy": 70, "education": 92.5, "lifespan": 80}
        assert product["census"] == [
            {"id": 0, "score": 12.5, "rank_world": 4, "rank_region": 1},
            {"id": 46, "score": 3, "rank_world": 100, "rank_region": 2},
        ]
        assert product["happenings"] == [
            {"timestamp": 1700000000, "text": "@@testlandia@@ did a thing."}
        ]
        assert "UNKNOWNSHARD" not in product and "deep" not in product

    def test_custom_capital_kept_apart(self):
        doc = b"<NATION><CAPITAL>Testopolis</CAPITAL><CAPITAL>New Test</CAPITAL></NATION>"
        product = assemble(doc, lambda tag, attrs: nation.create(attrs, ["capital", "customcapital"]))
        assert product["capital"] == "Testopolis"
        assert product["capital_custom"] == "New Test"

    def test_plain_capital_without_custom_shard(self):
        doc = b"<NATION><CAPITAL>Testopolis</CAPITAL></NATION>"
        product = assemble(doc, lambda tag, attrs: nation.create(attrs))
        assert product["capital"] == "Testopolis"
        assert "capital_custom" not in product

    def test_private_shards(self):
        doc = b"""<NATION id="testlandia">
<NEXTISSUETIME>1700003600</NEXTISSUETIME>
<PACKS>3</PACKS>
<UNREAD><ISSUES>2</ISSUES><TELEGRAMS>0</TELEGRAMS><NOTICES>5</NOTICES></UNREAD>
<NOTICES>
  <NOTICE><TITLE>New endorsement</TITLE><TIMESTAMP>1700000000</TIMESTAMP><NEW>1</NEW><WHO>alpha</WHO></NOTICE>
</NOTICES>
</NATION>"""
        product = assemble(doc, match_shape)
        assert product["next_issue_timestamp"] == 1700003600
        assert product["packs"] == 3
        assert product["unreads"] == {"issues": 2, "telegrams": 0, "notices": 5}
        assert product["notices"] == [
            {"title": "New endorsement", "timestamp": 1700000000, "is_new": True, "who": "alpha"}
        ]


class TestRegion:

    def test_region_document(self):
        doc = b"""<REGION id="the_pacific">
<NAME>The Pacific</NAME>
<DELEGATE>0</DELEGATE>
<DELEGATEAUTH>XWCE</DELEGATEAUTH>
<NATIONS>a:b:c</NATIONS>
<TAGS><TAG>Large</TAG><TAG>Feeder</TAG></TAGS>
<GAVOTE><FOR>3</FOR><AGAINST>1</AGAINST></GAVOTE>
<EMBASSIES><EMBASSY>Lazarus</EMBASSY><EMBASSY type="pending">Osiris</EMBASSY></EMBASSIES>
<OFFICERS><OFFICER><NATION>alpha</NATION><OFFICE>Minister</OFFICE><AUTHORITY>CE</AUTHORITY>
<TIME>1600000000</TIME><BY>beta</BY><ORDER>1</ORDER></OFFICER></OFFICERS>
<CENSUSRANKS id="0"><NATIONS>
  <NATION><NAME>alpha</NAME><RANK>1</RANK><SCORE>99.5</SCORE></NATION>
  <NATION><NAME>beta</NAME><RANK>2</RANK><SCORE>98</SCORE></NATION>
</NATIONS></CENSUSRANKS>
<MESSAGES><POST id="5"><NATION>alpha</NATION><MESSAGE>Hello</MESSAGE><LIKES>0</LIKES></POST></MESSAGES>
</REGION>"""
        product = assemble(doc, lambda tag, attrs: region.create(attrs))
        assert product["id_form"] == "the_pacific"
        assert product["name"] == "The Pacific"
        assert product["delegate"] is None
        assert product["delegate_authorities"] == ["X", "W", "C", "E"]
        assert product["nations"] == ["a", "b", "c"]
        assert product["tags"] == ["Large", "Feeder"]
        assert product["vote_ga"] == {"for": 3, "against": 1}
        assert product["embassies"] == [
            {"type": "established", "region": "Lazarus"},
            {"type": "pending", "region": "Osiris"},
        ]
        assert product["officers"] == [{
            "nation": "alpha", "office": "Minister", "authorities": ["C", "E"],
            "appointed": 1600000000, "appointer": "beta", "order": 1,
        }]
        assert product["census_ranks"] == [
            {"nation": "alpha", "rank": 1, "score": 99.5},
            {"nation": "beta", "rank": 2, "score": 98},
        ]
        assert product["messages"] == [
            {"id": 5, "likers": [], "nation": "alpha", "text": "Hello", "likes": 0}
        ]


class TestWorldAndCards:

    def test_world_document(self):
        doc = b"""<WORLD><NUMNATIONS>250000</NUMNATIONS><FEATUREDREGION>the_north_pacific</FEATUREDREGION>
<NEWNATIONS>a,b</NEWNATIONS>
<POLL id="9"><TITLE>Q?</TITLE><OPTIONS>
<OPTION id="0"><OPTIONTEXT>Yes</OPTIONTEXT><VOTES>2</VOTES><VOTERS>a:b</VOTERS></OPTION>
</OPTIONS></POLL></WORLD>"""
        product = assemble(doc, lambda tag, attrs: world.create(attrs))
        assert product["nations_num"] == 250000
        assert product["featured"] == "the_north_pacific"
        assert product["nations_new"] == ["a", "b"]
        assert product["poll"] == {
            "id": 9, "title": "Q?",
            "options": [{"id": 0, "text": "Yes", "votes": 2, "voters": ["a", "b"]}],
        }

    def test_card_document(self):
        doc = b"""<CARD><CARDID>1</CARDID><CATEGORY>legendary</CATEGORY><SEASON>2</SEASON>
<NAME>Testlandia</NAME><REGION>Testregionia</REGION><MARKET_VALUE>12.34</MARKET_VALUE>
<OWNERS><OWNER>alpha</OWNER><OWNER>beta</OWNER></OWNERS>
<MARKETS><MARKET><NATION>gamma</NATION><PRICE>1.50</PRICE><TYPE>ask</TYPE>
<TIMESTAMP>1700000000</TIMESTAMP></MARKET></MARKETS>
<TRADES><TRADE><BUYER>alpha</BUYER><SELLER>beta</SELLER><PRICE></PRICE>
<TIMESTAMP>1600000000</TIMESTAMP></TRADE></TRADES></CARD>"""
        product = assemble(doc, lambda tag, attrs: card.create(attrs))
        assert product["id"] == 1
        assert product["rarity"] == "legendary"
        assert product["value"] == 12.34
        assert product["depicted"] == {"name": "Testlandia", "region": "Testregionia"}
        assert product["owners"] == ["alpha", "beta"]
        assert product["markets"] == [
            {"nation": "gamma", "bank": 1.5, "is_ask": True, "timestamp": 1700000000}
        ]
        assert product["trades"] == [
            {"buyer": "alpha", "seller": "beta", "price": 0.0, "timestamp": 1600000000}
        ]

    def test_world_trades_carry_card(self):
        doc = b"""<CARDS><TRADES><TRADE><BUYER>a</BUYER><SELLER>b</SELLER><PRICE>0.5</PRICE>
<TIMESTAMP>1</TIMESTAMP><CARDID>7</CARDID><CATEGORY>rare</CATEGORY><SEASON>3</SEASON>
</TRADE></TRADES></CARDS>"""
        product = assemble(doc, match_shape)
        assert product["trades"][0]["card"] == {"id": 7, "rarity": "rare", "season": 3}


class TestWorldAssembly:
    """The WA shape gathers council totals, the resolution at vote and proposals."""

    def test_resolution_at_vote(self):
        doc = b"""<WA council="2">
<NUMNATIONS>27000</NUMNATIONS>
<NUMDELEGATES>600</NUMDELEGATES>
<DELEGATES>alpha,beta</DELEGATES>
<RESOLUTION>
  <CATEGORY>Commendation</CATEGORY>
  <CREATED>1700000000</CREATED>
  <NAME>Commend Testlandia</NAME>
  <OPTION>N:testlandia</OPTION>
  <PROPOSED_BY>alpha</PROPOSED_BY>
  <TOTAL_NATIONS_AGAINST>10</TOTAL_NATIONS_AGAINST>
  <TOTAL_NATIONS_FOR>30</TOTAL_NATIONS_FOR>
  <TOTAL_VOTES_AGAINST>100</TOTAL_VOTES_AGAINST>
  <TOTAL_VOTES_FOR>300</TOTAL_VOTES_FOR>
  <VOTE_TRACK_FOR><N>1</N><N>5</N></VOTE_TRACK_FOR>
  <DELVOTES_FOR>
    <DELEGATE><NATION>beta</NATION><VOTES>12</VOTES><TIMESTAMP>1700000100</TIMESTAMP></DELEGATE>
  </DELVOTES_FOR>
</RESOLUTION>
</WA>"""
        product = assemble(doc, match_shape)
        assert product["council"] == 2
        assert product["member_count"] == 27000
        assert product["delegate_count"] == 600
        assert product["delegates"] == ["alpha", "beta"]
        assert product["resolution"] == {
            "coauthors": [],
            "category": "Commendation",
            "submitted": 1700000000,
            "title": "Commend Testlandia",
            "option": "N:testlandia",
            "author": "alpha",
            "vote": {
                "nations_count": {"against": 10, "for": 30},
                "total": {"against": 100, "for": 300},
                "track": {"for": [1, 5]},
                "delegates": {"for": [{"delegate": "beta", "weight": 12, "timestamp": 1700000100}]},
            },
        }

    def test_proposals_with_and_without_ruling(self):
        doc = b"""<WA council="1"><PROPOSALS>
<PROPOSAL id="ga_test_1700000000">
  <NAME>Ban Tests</NAME>
  <APPROVALS>beta:gamma</APPROVALS>
  <COAUTHORS><N>delta</N></COAUTHORS>
  <GENSEC>
    <LEGAL><LEGAL>beta</LEGAL></LEGAL>
    <LOG><ENTRY><NATION>beta</NATION><DECISION>Legal</DECISION><REASON/><T>1700000050</T></ENTRY></LOG>
  </GENSEC>
</PROPOSAL>
<PROPOSAL id="ga_two"><NAME>Second</NAME></PROPOSAL>
</PROPOSALS></WA>"""
        proposals = assemble(doc, match_shape)["proposals"]
        assert proposals[0] == {
            "id": "ga_test_1700000000",
            "legality": {
                "legal": ["beta"],
                "illegal": [],
                "discard": [],
                "log": [{"nation": "beta", "ruling": "Legal", "reason": "", "timestamp": 1700000050}],
            },
            "title": "Ban Tests",
            "approvals": ["beta", "gamma"],
            "coauthors": ["delta"],
        }
        assert proposals[1] == {
            "id": "ga_two",
            "legality": {"legal": [], "illegal": [], "discard": [], "log": []},
            "title": "Second",
        }


class TestMatchShape:

    def test_known_roots(self):
        for tag in ("NATION", "REGION", "WORLD", "WA", "CARD", "CARDS"):
            assert match_shape(tag, {}) is not None

    def test_unknown_root(self):
        assert match_shape("TELEGRAM", {}) is None


class TestDumpWiring:
    """Dump wirings filter items while the document streams."""

    def test_nations_filtered(self):
        doc = b"""<NATIONS>
<NATION><NAME>Alpha</NAME><POPULATION>10</POPULATION></NATION>
<NATION><NAME>Beta</NAME><POPULATION>20</POPULATION></NATION>
<NATION><NAME>Gamma</NAME><POPULATION>30</POPULATION></NATION>
</NATIONS>"""
        product = assemble(doc, lambda tag, attrs: create_nations(lambda n: n["population"] >= 20))
        assert [n["name"] for n in product] == ["Beta", "Gamma"]

    def test_cards_inside_set_wrapper(self):
        doc = b"""<CARDS><SET season="1">
<CARD><ID>1</ID><NAME>Alpha</NAME><CARDCATEGORY>common</CARDCATEGORY></CARD>
<CARD><ID>2</ID><NAME>Beta</NAME><CARDCATEGORY>epic</CARDCATEGORY></CARD>
</SET></CARDS>"""
        product = assemble(doc, lambda tag, attrs: create_cards(lambda c: c["rarity"] == "epic"))
        assert product == [{"id": 2, "depicted": {"name": "Beta"}, "rarity": "epic"}]
