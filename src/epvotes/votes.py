"""Parsing, tallying and grouping of roll-call votes.

Raw HTML -> VoteBlock -> RawVote (names) -> Vote (member ids) -> Proposal.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from datetime import date

from .errors import ParseSkip
from .markup import VoteBlock, extract_vote_blocks
from .models import Member, Proposal, RawVote, Vote, VoteResult
from .names import matches_any, name_tokens, normalize_candidates

logger = logging.getLogger(__name__)

# A9-0001/2024 style ids and RC-B9-0123/2024 style ids
PROPOSAL_ID_PATTERN = re.compile(
    r"([A-Z]{1,2}-[A-Z0-9]{1,3}-[0-9]{4}/[0-9]{4})|([A-Z][0-9]-[0-9]{4}/[0-9]{4})"
)
DOCUMENT_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

TITLE_TABLE = 0
# (table index, placeholder printed when nobody voted that way)
POSITIVE_TABLE = (1, "+")
NEGATIVE_TABLE = (2, "-")
ABSTENTION_TABLE = (3, "0")


def find_proposal_id(text: str) -> str:
    match = PROPOSAL_ID_PATTERN.search(text)
    return match.group(0) if match else ""


def parse_document_date(document_id: str) -> date | None:
    """Return the sitting date embedded in ids like PV-9-2023-06-01-RCV."""
    match = DOCUMENT_DATE_PATTERN.search(document_id or "")
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def _names_from_table(block: VoteBlock, index: int, placeholder: str) -> list[str]:
    table = block.child_tables_at(index)
    names = []
    for row in block.rows_of(table):
        for piece in block.cell_text(row, 1).split(","):
            name = piece.strip()
            if name and name != placeholder:
                names.append(name)
    return names


def parse_vote_block(block: VoteBlock) -> RawVote:
    """Parse one vote block into a RawVote.

    The proposal id is taken from the first link of the title table, or
    failing that from an id-shaped string inside the title.

    Raises:
        ParseSkip: the block lacks a table or cell, or has no title.
    """
    title_table = block.child_tables_at(TITLE_TABLE)
    title = "".join(block.texts_of(title_table, "span"))
    if not title:
        raise ParseSkip("Vote block has an empty title")

    links = block.texts_of(title_table, "a")
    proposal_id = links[0] if links else find_proposal_id(title)

    return RawVote(
        proposal_id=proposal_id,
        title=title,
        positive=_names_from_table(block, *POSITIVE_TABLE),
        negative=_names_from_table(block, *NEGATIVE_TABLE),
        abstention=_names_from_table(block, *ABSTENTION_TABLE),
    )


def parse_votes(html: str | None) -> list[RawVote]:
    """Parse every vote block of a page, skipping blocks that fail."""
    raw_votes = []
    for position, block in enumerate(extract_vote_blocks(html)):
        try:
            raw_votes.append(parse_vote_block(block))
        except ParseSkip as e:
            logger.warning(f"Error parsing vote: {e}", extra={"block": position})
    return raw_votes


def tally(
    roster: Iterable[Member],
    positive_names: Iterable[str],
    negative_names: Iterable[str],
    abstention_names: Iterable[str],
) -> VoteResult:
    """Assign every roster member to exactly one outcome.

    Positive is checked first, then negative, then abstention; members
    matching none of them did not vote.
    """
    outcomes = [
        normalize_candidates(positive_names),
        normalize_candidates(negative_names),
        normalize_candidates(abstention_names),
    ]
    result = VoteResult()
    buckets = [result.positive, result.negative, result.abstention]
    for member in roster:
        tokens = name_tokens(member.full_name)
        for candidates, bucket in zip(outcomes, buckets):
            if matches_any(tokens, candidates):
                bucket.append(member.id)
                break
        else:
            result.no_vote.append(member.id)
    return result


def tally_vote(raw_vote: RawVote, roster: Sequence[Member], document_id: str = "") -> Vote:
    return Vote(
        proposal_id=raw_vote.proposal_id,
        title=raw_vote.title,
        result=tally(roster, raw_vote.positive, raw_vote.negative, raw_vote.abstention),
        document_id=document_id,
        date=parse_document_date(document_id),
    )


def segment(votes: Iterable[Vote]) -> list[Proposal]:
    """Group consecutive votes into proposals.

    A proposal id that has not been seen before closes the open proposal
    and starts a new one. An id that was seen before, even one belonging to
    an already closed proposal, is added to the proposal currently open.
    """
    proposals: list[Proposal] = []
    seen_ids: list[str] = []
    current: Proposal | None = None

    for vote in votes:
        if current is None:
            current = Proposal(id=vote.proposal_id, title=vote.title)
            seen_ids.append(vote.proposal_id)
        elif vote.proposal_id not in seen_ids:
            current.final_vote_index = len(current.votes) - 1
            proposals.append(current)
            seen_ids.append(vote.proposal_id)
            current = Proposal(id=vote.proposal_id, title=vote.title)
        current.votes.append(vote)

    if current is not None:
        current.final_vote_index = len(current.votes) - 1
        proposals.append(current)
    return proposals


def build_proposals(html: str | None, roster: Sequence[Member], document_id: str = "") -> list[Proposal]:
    """Parse a rendered RCV document into tallied proposals."""
    votes = [tally_vote(raw_vote, roster, document_id) for raw_vote in parse_votes(html)]
    return segment(votes)
