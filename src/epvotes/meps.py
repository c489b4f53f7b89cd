"""Members of the European Parliament from the open-data API."""

import asyncio
from datetime import date
from typing import Any, Protocol

from .errors import InvalidArgument, MalformedResponse, UnknownParty
from .fetcher import Fetcher
from .models import Account, Member, Meps, Membership
from .settings import settings

# Political group organisation ids. Ids change between terms, so this
# table only covers the groups of the current term.
PARTIES = {
    "5148": "ECR",
    "5152": "NI",
    "5153": "EPP",
    "5154": "SD",
    "5155": "GREEN_EFA",
    "5704": "RENEW",
    "6259": "LEFT",
    "5588": "ID",
}

CURRENT_TERM = 0
LABEL_LANGUAGE = "en"


class RosterProvider(Protocol):
    async def load_roster(self, limit: int, term: int) -> list[Member]: ...


def _listing(payload: Any) -> list[dict[str, Any]]:
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise MalformedResponse("Expected a list under 'data'")
    return data


async def load_meps(
    fetcher: Fetcher,
    limit: int = 5,
    term: int = 9,
    load_details: bool = False,
    load_membership_data: bool = False,
) -> Meps:
    """Load MEPs of a parliamentary term.

    Args:
        fetcher: Fetcher used for the API calls
        limit: Maximum number of MEPs to load
        term: Parliamentary term 1-9, or 0 for the sitting members
        load_details: Load the full profile of every MEP instead of id and name
        load_membership_data: Resolve membership documents for each profile

    Raises:
        InvalidArgument: term is outside 0-9.
    """
    if 0 < term < 10:
        url = f"{settings.OPEN_DATA_API_URL}/meps"
        params = {"limit": limit, "parliamentary-term": term}
    elif term == CURRENT_TERM:
        url = f"{settings.OPEN_DATA_API_URL}/meps/show-current"
        params = {"limit": limit}
    else:
        raise InvalidArgument("Invalid term number")

    entries = _listing(await fetcher.load_json(url, params))
    try:
        summaries = [(int(entry["identifier"]), entry["label"]) for entry in entries]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"MEP listing entry without identifier or label: {e}") from e

    if load_details:
        meps = list(
            await asyncio.gather(
                *(load_mep(fetcher, mep_id, load_membership_data) for mep_id, _ in summaries)
            )
        )
    else:
        meps = [Member(id=mep_id, full_name=label) for mep_id, label in summaries]

    return Meps(meps=meps, term=term, with_details=load_details, with_data=load_membership_data)


async def load_mep(fetcher: Fetcher, identifier: str, load_membership_data: bool = False) -> Member:
    """Load the profile of one MEP."""
    try:
        mep_id = int(identifier)
    except (TypeError, ValueError) as e:
        raise InvalidArgument("Id is not a number") from e

    payload = await fetcher.load_json(f"{settings.OPEN_DATA_API_URL}/meps/{identifier}")
    entries = _listing(payload)
    if not entries:
        raise MalformedResponse(f"No profile returned for MEP {identifier}")
    mep = entries[0]

    bday = mep.get("bday")
    age = date.today().year - int(bday[:4]) if bday else None

    accounts = [
        Account(type=account["dcterms_type"].split("/")[-1], url=account["id"])
        for account in mep.get("account") or []
    ]

    if load_membership_data:
        urls = [
            element.get("id") if isinstance(element, dict) else element
            for element in mep.get("hasMembership") or []
        ]
        memberships = await load_memberships(fetcher, [url for url in urls if url])
    else:
        memberships = [
            Membership(
                corporate_body=element.get("membershipClassification"),
                role=element.get("role", ""),
                org=element.get("organization", ""),
                start_date=(element.get("memberDuring") or {}).get("startDate"),
                end_date=(element.get("memberDuring") or {}).get("endDate"),
            )
            for element in mep.get("hasMembership") or []
            if isinstance(element, dict)
        ]

    return Member(
        id=mep_id,
        full_name=mep.get("label", ""),
        img=mep.get("img"),
        homepage=mep.get("homepage"),
        email=mep.get("hasEmail"),
        citizenship=mep.get("citizenship"),
        party=parse_party(memberships),
        bday=bday,
        age=age,
        accounts=accounts,
        memberships=memberships,
    )


async def load_memberships(fetcher: Fetcher, membership_urls: list[str], limit: int = 3) -> list[Membership]:
    """Fetch and parse the first `limit` membership documents."""
    documents = await asyncio.gather(
        *(fetcher.load_json(url) for url in membership_urls[:limit])
    )
    return [parse_membership(document) for document in documents]


def _types(node: dict[str, Any]) -> list[str]:
    node_type = node.get("@type", [])
    return [node_type] if isinstance(node_type, str) else list(node_type)


def _find_node(graph: list[dict[str, Any]], type_name: str) -> dict[str, Any] | None:
    return next((node for node in graph if type_name in _types(node)), None)


def _label(node: dict[str, Any] | None) -> str | None:
    if node is None:
        return None
    return next(
        (
            label["@value"]
            for label in node.get("prefLabel", [])
            if label.get("@language") == LABEL_LANGUAGE
        ),
        None,
    )


def parse_membership(document: dict[str, Any]) -> Membership:
    """Parse a JSON-LD membership document.

    The corporate body and organisation are kept as their resource ids, so
    parse_party can read them, falling back to the English label when a node
    has no id. The role is the English label.
    """
    graph = document.get("@graph")
    if not isinstance(graph, list):
        raise MalformedResponse("Membership document has no @graph")

    role = _label(_find_node(graph, "euvoc:Role"))
    org_node = _find_node(graph, "org:Organization")
    if role is None or org_node is None:
        raise MalformedResponse("Membership document lacks a role or organization")

    body_node = _find_node(graph, "euvoc:CorporateBodyClassification")
    period = _find_node(graph, "dcterms:PeriodOfTime") or {}
    return Membership(
        corporate_body=(body_node or {}).get("@id") or _label(body_node),
        role=role,
        org=org_node.get("@id") or _label(org_node) or "",
        start_date=period.get("startDate"),
        end_date=period.get("endDate"),
    )


def parse_party(memberships: list[Membership]) -> str:
    """Return the political group of the current EP_GROUP membership.

    Returns an empty string when the member has no current group.

    Raises:
        UnknownParty: the group id is not in PARTIES.
    """
    current = next(
        (
            membership
            for membership in memberships
            if membership.corporate_body
            and "EP_GROUP" in membership.corporate_body
            and membership.end_date is None
        ),
        None,
    )
    if current is None:
        return ""

    party_id = (current.org or "").split("/")[-1]
    if party_id not in PARTIES:
        raise UnknownParty(f"Unknown party {party_id}")
    return PARTIES[party_id]


class OpenDataRoster:
    """RosterProvider backed by the open-data MEP listing."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    async def load_roster(self, limit: int, term: int) -> list[Member]:
        return (await load_meps(self.fetcher, limit=limit, term=term)).meps
