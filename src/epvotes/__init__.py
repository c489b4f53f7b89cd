from .api import get_document_identifiers, get_votes_for_document
from .cli import cli
from .fetcher import Fetcher
from .hookspecs import hookimpl
from .models import Member, Proposal, RawVote, Vote, VoteResult
from .names import resolve
from .votes import build_proposals, parse_votes, segment, tally


def main():
    cli()


__all__ = [
    "Fetcher",
    "Member",
    "Proposal",
    "RawVote",
    "Vote",
    "VoteResult",
    "build_proposals",
    "cli",
    "get_document_identifiers",
    "get_votes_for_document",
    "hookimpl",
    "main",
    "parse_votes",
    "resolve",
    "segment",
    "tally",
]
