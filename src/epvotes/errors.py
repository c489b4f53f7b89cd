"""Error taxonomy for epvotes.

InvalidArgument, FetchFailure and MalformedResponse propagate to the caller.
ParseSkip is raised for a single vote block and recovered by the parser.
"""


class EPVotesError(Exception):
    """Base class for all epvotes errors."""


class InvalidArgument(EPVotesError, ValueError):
    """A caller-supplied identifier, limit or parameter is invalid."""


class FetchFailure(EPVotesError):
    """The remote returned a non-2xx status or could not be reached."""

    def __init__(self, message: str, status: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class ParseSkip(EPVotesError):
    """A single vote block could not be parsed and should be skipped."""


class MalformedResponse(EPVotesError):
    """A payload does not have the expected shape."""


class UnknownParty(EPVotesError):
    """A political group id is missing from the party table."""
