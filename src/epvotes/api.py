"""Entry points that fetch remote records and run the vote pipeline."""

import asyncio
import logging

from .documents import document_url
from .errors import FetchFailure, InvalidArgument, MalformedResponse
from .fetcher import DocumentFetcher, Fetcher
from .meps import CURRENT_TERM, OpenDataRoster, RosterProvider
from .models import Proposal
from .settings import settings
from .votes import build_proposals

logger = logging.getLogger(__name__)

RCV_WORK_TYPE = "PLENARY_RCV_EP"


async def get_votes_for_document(
    document_id: str | None,
    fetcher: DocumentFetcher | None = None,
    roster_provider: RosterProvider | None = None,
) -> list[Proposal]:
    """Fetch an RCV document and return its tallied proposals.

    The document and the current roster are fetched concurrently. When no
    fetcher is given a Fetcher is opened for the duration of the call, and
    the roster defaults to the open-data MEP listing.

    Raises:
        InvalidArgument: document_id is empty or None.
        FetchFailure: the document request returned a non-2xx status.
    """
    if not document_id:
        raise InvalidArgument("Invalid id")

    if fetcher is None:
        async with Fetcher() as own_fetcher:
            return await get_votes_for_document(document_id, own_fetcher, roster_provider)

    if roster_provider is None:
        roster_provider = OpenDataRoster(fetcher)

    url = document_url(document_id)
    (status, body), roster = await asyncio.gather(
        fetcher.fetch(url),
        roster_provider.load_roster(settings.ROSTER_LIMIT, CURRENT_TERM),
    )
    if not 200 <= status < 300:
        raise FetchFailure(f"HTTP error {status}", status=status, url=url)

    proposals = build_proposals(body, roster, document_id)
    logger.info(
        f"Parsed {len(proposals)} proposals from {document_id}",
        extra={"document": document_id, "votes": sum(len(p.votes) for p in proposals)},
    )
    return proposals


async def get_document_identifiers(limit: int | None, fetcher: Fetcher | None = None) -> list[str]:
    """List RCV document identifiers from the open-data API.

    Raises:
        InvalidArgument: limit is None or negative.
        MalformedResponse: the listing is not an array of documents.
    """
    if limit is None or limit < 0:
        raise InvalidArgument("Invalid limit")

    if fetcher is None:
        async with Fetcher() as own_fetcher:
            return await get_document_identifiers(limit, own_fetcher)

    params = {"work-type": RCV_WORK_TYPE, "offset": 0, "limit": limit}
    payload = await fetcher.load_json(f"{settings.OPEN_DATA_API_URL}/documents", params)
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise MalformedResponse("Votes is not an array")
    try:
        return [document["identifier"] for document in data]
    except (KeyError, TypeError) as e:
        raise MalformedResponse(f"Document listing entry without identifier: {e}") from e
