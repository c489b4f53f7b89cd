"""Tests for epvotes.meps module."""

import pytest

from epvotes.errors import InvalidArgument, MalformedResponse, UnknownParty
from epvotes.meps import (
    OpenDataRoster,
    load_mep,
    load_meps,
    parse_membership,
    parse_party,
)
from epvotes.models import Membership

EP_GROUP = "http://publications.europa.eu/resource/authority/corporate-body-classification/EP_GROUP"
COMMITTEE = (
    "http://publications.europa.eu/resource/authority/corporate-body-classification/COMMITTEE_PARLIAMENTARY_STANDING"
)


def membership_document(body=EP_GROUP, org="http://data.europarl.europa.eu/org/5153", end_date=None):
    period = {"@id": "period", "@type": "dcterms:PeriodOfTime", "startDate": "2019-07-02"}
    if end_date:
        period["endDate"] = end_date
    return {
        "@graph": [
            {"@id": "membership", "@type": "org:Membership"},
            {
                "@id": "role",
                "@type": ["skos:Concept", "euvoc:Role"],
                "prefLabel": [
                    {"@language": "fr", "@value": "Membre"},
                    {"@language": "en", "@value": "Member"},
                ],
            },
            {
                "@id": org,
                "@type": "org:Organization",
                "prefLabel": [{"@language": "en", "@value": "Group of the European People's Party"}],
            },
            {"@id": body, "@type": "euvoc:CorporateBodyClassification"},
            period,
        ]
    }


def mep_profile(memberships):
    return {
        "data": [
            {
                "identifier": "101",
                "label": "Anna Doe",
                "img": "https://www.europarl.europa.eu/mepphoto/101.jpg",
                "hasEmail": "mailto:anna.doe@europarl.europa.eu",
                "citizenship": "http://publications.europa.eu/resource/authority/country/DEU",
                "bday": "1970-05-04",
                "account": [
                    {
                        "id": "https://twitter.com/annadoe",
                        "dcterms_type": "http://publications.europa.eu/resource/authority/account-type/TWITTER",
                    }
                ],
                "hasMembership": memberships,
            }
        ]
    }


class TestParseMembership:
    def test_current_group_membership(self):
        membership = parse_membership(membership_document())

        assert membership.role == "Member"
        assert membership.corporate_body == EP_GROUP
        assert membership.org == "http://data.europarl.europa.eu/org/5153"
        assert membership.start_date == "2019-07-02"
        assert membership.end_date is None

    def test_ended_membership(self):
        membership = parse_membership(membership_document(end_date="2020-01-31"))

        assert membership.end_date == "2020-01-31"

    def test_missing_graph(self):
        with pytest.raises(MalformedResponse):
            parse_membership({"data": []})

    def test_missing_role(self):
        document = membership_document()
        document["@graph"] = [node for node in document["@graph"] if node["@id"] != "role"]

        with pytest.raises(MalformedResponse):
            parse_membership(document)


class TestParseParty:
    def test_current_group(self):
        memberships = [
            Membership(corporate_body=COMMITTEE, role="Member", org="org/1234"),
            Membership(corporate_body=EP_GROUP, role="Member", org="http://data.europarl.europa.eu/org/5704"),
        ]

        assert parse_party(memberships) == "RENEW"

    def test_ended_group_is_ignored(self):
        memberships = [
            Membership(corporate_body=EP_GROUP, role="Member", org="org/5153", end_date="2020-01-31"),
            Membership(corporate_body=EP_GROUP, role="Member", org="org/6259"),
        ]

        assert parse_party(memberships) == "LEFT"

    def test_no_current_group(self):
        assert parse_party([Membership(corporate_body=COMMITTEE, role="Member", org="org/1")]) == ""
        assert parse_party([]) == ""

    def test_unknown_group(self):
        with pytest.raises(UnknownParty, match="Unknown party 9999"):
            parse_party([Membership(corporate_body=EP_GROUP, role="Member", org="org/9999")])


class TestLoadMeps:
    @pytest.mark.asyncio
    async def test_current_members(self, fetcher, mock_api):
        meps = await load_meps(fetcher, limit=5, term=0)

        assert [mep.id for mep in meps.meps] == [101, 102, 103, 104, 105]
        assert meps.meps[2].full_name == "Petr Škoda"
        assert meps.term == 0
        assert mock_api.requests[-1].url.path == "/api/v1/meps/show-current"

    @pytest.mark.asyncio
    async def test_members_of_a_term(self, fetcher, mock_api):
        meps = await load_meps(fetcher, limit=2, term=9)

        assert [mep.full_name for mep in meps.meps] == ["Anna Doe", "Hans Müller"]
        assert mock_api.requests[-1].url.params["parliamentary-term"] == "9"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", [-1, 10])
    async def test_invalid_term(self, term, fetcher):
        with pytest.raises(InvalidArgument, match="Invalid term number"):
            await load_meps(fetcher, term=term)

    @pytest.mark.asyncio
    async def test_with_details(self, mock_api, fetcher):
        for identifier, name in [("101", "Anna Doe"), ("102", "Hans Müller")]:
            mock_api.json_routes[f"/api/v1/meps/{identifier}"] = {
                "data": [{"identifier": identifier, "label": name}]
            }

        meps = await load_meps(fetcher, limit=2, term=9, load_details=True)

        assert meps.with_details is True
        assert [mep.id for mep in meps.meps] == [101, 102]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entry",
        [{"identifier": "101"}, {"label": "Anna Doe"}, {"identifier": "x", "label": "Anna Doe"}],
    )
    async def test_incomplete_listing_entry(self, entry, mock_api, fetcher):
        mock_api.json_routes["/api/v1/meps/show-current"] = {"data": [entry]}

        with pytest.raises(MalformedResponse):
            await load_meps(fetcher, term=0)

    @pytest.mark.asyncio
    async def test_roster_provider(self, fetcher):
        roster = await OpenDataRoster(fetcher).load_roster(1000, 0)

        assert len(roster) == 5


class TestLoadMep:
    @pytest.mark.asyncio
    async def test_id_must_be_numeric(self, fetcher):
        with pytest.raises(InvalidArgument, match="Id is not a number"):
            await load_mep(fetcher, "abc")

    @pytest.mark.asyncio
    async def test_profile_with_inline_memberships(self, mock_api, fetcher):
        mock_api.json_routes["/api/v1/meps/101"] = mep_profile(
            [
                {
                    "id": "membership/1",
                    "membershipClassification": EP_GROUP,
                    "role": "Member",
                    "organization": "org/5153",
                    "memberDuring": {"startDate": "2019-07-02"},
                }
            ]
        )

        mep = await load_mep(fetcher, "101")

        assert mep.full_name == "Anna Doe"
        assert mep.party == "EPP"
        assert mep.email == "mailto:anna.doe@europarl.europa.eu"
        assert mep.age is not None and mep.age > 50
        assert mep.accounts[0].type == "TWITTER"
        assert mep.accounts[0].url == "https://twitter.com/annadoe"
        assert mep.memberships[0].start_date == "2019-07-02"

    @pytest.mark.asyncio
    async def test_profile_with_membership_documents(self, mock_api, fetcher):
        base = "https://data.europarl.europa.eu/api/v1/memberships"
        mock_api.json_routes["/api/v1/meps/101"] = mep_profile(
            [{"id": f"{base}/{n}"} for n in range(1, 5)]
        )
        mock_api.json_routes["/api/v1/memberships/1"] = membership_document(body=COMMITTEE, org="org/1")
        mock_api.json_routes["/api/v1/memberships/2"] = membership_document()
        mock_api.json_routes["/api/v1/memberships/3"] = membership_document(end_date="2019-01-01")

        mep = await load_mep(fetcher, "101", load_membership_data=True)

        assert len(mep.memberships) == 3
        assert mep.party == "EPP"
        paths = [request.url.path for request in mock_api.requests]
        assert "/api/v1/memberships/4" not in paths
