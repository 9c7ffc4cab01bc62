"""
Exceptions raised while ranking candidate events.
"""


class RecommendationError(Exception):
    """Base class for recommendation failures."""


class EmptyCandidateSet(RecommendationError):
    """No events are left to rank; callers should render an empty state."""

    def __init__(self, message: str = "No candidate events to rank"):
        super().__init__(message)


class ExternalCallError(RecommendationError):
    """The external ranking collaborator failed (network, provider, timeout)."""


class UnparseableRankingOutput(RecommendationError):
    """The external ranker answered, but not with a sequence of event IDs."""

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output
