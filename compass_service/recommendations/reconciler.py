"""
Reconciles an external event ranking with the candidate set.

The external ranker (usually an LLM) is opaque and untrusted: it may fail, time
out, answer with prose, invent IDs or skip events. Whatever it does, the result
is a permutation of the candidates. When it cannot produce an ID sequence the
deterministic fallback score decides the order instead.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, List, Optional, Sequence, Tuple, Union

from ..models import (
    Event,
    FallbackKind,
    RankingResult,
    UserProfile,
    UserRating,
    coerce_ranked_ids,
    parse_ranked_ids,
)
from .errors import EmptyCandidateSet, ExternalCallError, UnparseableRankingOutput
from .scoring import FallbackScorer

_LOG = logging.getLogger("reconciler")

DEFAULT_TIMEOUT_SECONDS = 8.0

# Returns event IDs, or raw text holding a JSON array of them
ExternalRank = Callable[
    [UserProfile, Sequence[Event], Sequence[UserRating]],
    Union[Sequence[str], str],
]


class RecommendationReconciler:
    """Orders candidate events using an injected ranker with a scored fallback."""

    def __init__(
        self,
        external_rank: ExternalRank,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        scorer: Optional[FallbackScorer] = None,
    ):
        self.external_rank = external_rank
        self.timeout = timeout
        self.scorer = scorer or FallbackScorer()

    def reconcile(
        self,
        profile: UserProfile,
        events: Sequence[Event],
        ratings: Sequence[UserRating] = (),
        career_data_considered: bool = False,
    ) -> RankingResult:
        """Rank ``events`` for ``profile``.

        Args:
            profile: Student profile, passed through to the ranker as context
            events: Candidate events with unique IDs, already status-filtered
            ratings: The user's past ratings, passed through to the ranker
            career_data_considered: Whether career-path data was available
                upstream; only changes the reported fallback kind

        Raises:
            EmptyCandidateSet: if ``events`` is empty (the ranker is not called)
            ValueError: if two candidates share an ID
        """
        candidates = tuple(events)
        if not candidates:
            raise EmptyCandidateSet()
        _check_unique_ids(candidates)
        ratings = tuple(ratings)

        try:
            raw_output = self._call_external(profile, candidates, ratings)
            ranked_ids = _parse_output(raw_output)
        except Exception as exc:  # any ranker failure routes to the fallback
            _LOG.warning(
                "External ranking failed (%s: %s), using fallback scoring",
                type(exc).__name__, exc,
            )
            return self._fallback(candidates, career_data_considered)

        ordered = merge_ranking(candidates, ranked_ids)
        _LOG.info("Ranked %d events with external ranker", len(ordered))
        return RankingResult(
            ordered_events=tuple(ordered),
            used_fallback=False,
            fallback_kind=FallbackKind.NONE,
        )

    __call__ = reconcile

    def _call_external(
        self,
        profile: UserProfile,
        events: Tuple[Event, ...],
        ratings: Tuple[UserRating, ...],
    ):
        if self.timeout is None:
            return self.external_rank(profile, events, ratings)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="external-rank")
        try:
            future = executor.submit(self.external_rank, profile, events, ratings)
            try:
                return future.result(timeout=self.timeout)
            except FuturesTimeoutError as e:
                future.cancel()
                raise ExternalCallError(
                    f"External ranker timed out after {self.timeout:g}s"
                ) from e
        finally:
            # Do not wait for an abandoned call
            executor.shutdown(wait=False)

    def _fallback(self, events: Tuple[Event, ...], career_data_considered: bool) -> RankingResult:
        scores = self.scorer.score_all(events)
        ordered = sorted(events, key=lambda e: scores[e.id], reverse=True)
        kind = FallbackKind.CAREER_AND_RATINGS if career_data_considered else FallbackKind.RATINGS_ONLY
        _LOG.info("Fallback ranked %d events (%s)", len(ordered), kind.value)
        return RankingResult(
            ordered_events=tuple(ordered),
            used_fallback=True,
            fallback_kind=kind,
            scores=scores,
        )


def reconcile(
    profile: UserProfile,
    events: Sequence[Event],
    ratings: Sequence[UserRating],
    external_rank: ExternalRank,
    career_data_considered: bool = False,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> RankingResult:
    """Functional shortcut for a one-off :class:`RecommendationReconciler`."""
    reconciler = RecommendationReconciler(external_rank, timeout=timeout)
    return reconciler.reconcile(profile, events, ratings, career_data_considered)


def merge_ranking(events: Sequence[Event], ranked_ids: Sequence[str]) -> List[Event]:
    """Reorder ``events`` by ``ranked_ids``.

    Unknown and repeated IDs are dropped; events the ranking omits are appended
    in their original relative order.
    """
    by_id = {event.id: event for event in events}
    matched: List[Event] = []
    seen = set()
    for event_id in ranked_ids:
        event = by_id.get(event_id)
        if event is None:
            _LOG.debug("Dropping unknown event id from ranking: %r", event_id)
            continue
        if event_id in seen:
            continue
        seen.add(event_id)
        matched.append(event)

    missed = [event for event in events if event.id not in seen]
    return matched + missed


def _parse_output(raw_output) -> List[str]:
    try:
        if isinstance(raw_output, str):
            return parse_ranked_ids(raw_output)
        return coerce_ranked_ids(raw_output)
    except ValueError as e:
        raise UnparseableRankingOutput(str(e), raw_output=str(raw_output)) from e


def _check_unique_ids(events: Sequence[Event]) -> None:
    seen = set()
    for event in events:
        if event.id in seen:
            raise ValueError(f"Duplicate event id in candidates: {event.id}")
        seen.add(event.id)
