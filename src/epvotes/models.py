"""Dataclasses for members, votes, proposals and documents."""

import datetime
import enum
from dataclasses import asdict, dataclass, field
from typing import Any


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


class Serializable:
    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible dict of this record."""
        return _jsonable(asdict(self))  # type: ignore[call-overload]


@dataclass
class Account(Serializable):
    type: str
    url: str


@dataclass
class Membership(Serializable):
    """A membership of an MEP in a corporate body.

    end_date is None while the member still belongs to the body.
    """

    corporate_body: str | None
    role: str
    org: str
    start_date: str | None = None
    end_date: str | None = None


@dataclass
class Member(Serializable):
    """A voting member. Only id and full_name matter for tallying."""

    id: int
    full_name: str
    img: str | None = None
    homepage: str | None = None
    email: str | None = None
    citizenship: str | None = None
    party: str | None = None
    bday: str | None = None
    age: int | None = None
    accounts: list[Account] = field(default_factory=list)
    memberships: list[Membership] = field(default_factory=list)


@dataclass
class Meps(Serializable):
    meps: list[Member]
    term: int
    with_details: bool = False
    with_data: bool = False


@dataclass
class RawVote(Serializable):
    """A parsed vote block whose result lists still hold member names."""

    proposal_id: str
    title: str
    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)
    abstention: list[str] = field(default_factory=list)


@dataclass
class VoteResult(Serializable):
    """Member ids per outcome. The four lists partition the roster."""

    positive: list[int] = field(default_factory=list)
    negative: list[int] = field(default_factory=list)
    abstention: list[int] = field(default_factory=list)
    no_vote: list[int] = field(default_factory=list)


@dataclass
class Vote(Serializable):
    proposal_id: str
    title: str
    result: VoteResult
    document_id: str = ""
    date: datetime.date | None = None


@dataclass
class Proposal(Serializable):
    """Consecutive votes on one legislative item.

    final_vote_index points at the last vote recorded before the
    proposal id changed.
    """

    id: str
    title: str
    votes: list[Vote] = field(default_factory=list)
    final_vote_index: int = 0

    @property
    def final_vote(self) -> Vote:
        return self.votes[self.final_vote_index]


class DocumentType(enum.Enum):
    REPORT = "report"
    MOTION = "motion"
    OTHER = "other"


@dataclass
class Document(Serializable):
    id: str
    url: str
    type: DocumentType
    content: str
