"""
LLM-backed implementation of the external ranking capability.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from langchain_core.messages import HumanMessage
from langchain_core.prompts import PromptTemplate

from ..llm_utils import llm_invoke
from ..models import Event, UserProfile, UserRating, parse_ranked_ids
from .errors import ExternalCallError, UnparseableRankingOutput

_LOG = logging.getLogger("llm_ranker")

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
PROMPT_FILE = "rank_events.md"


class LLMRanker:
    """Asks a text-generation model to order events by relevance.

    Instances are callables matching the reconciler's ``external_rank``
    contract: they return a list of event IDs or raise.
    """

    def __init__(
        self,
        llm_config,
        prompts_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
    ):
        self.llm_config = llm_config
        self.prompts_dir = Path(prompts_dir) if prompts_dir else DEFAULT_PROMPTS_DIR
        # The provider call must not outlive the caller's deadline
        self.timeout = llm_config.timeout if timeout is None else min(llm_config.timeout, timeout)

    def __call__(
        self,
        profile: UserProfile,
        events: Sequence[Event],
        ratings: Sequence[UserRating],
    ) -> List[str]:
        prompt = self.build_prompt(profile, events, ratings)

        _LOG.info("Calling %s to rank %d events for %s",
                  self.llm_config.provider, len(events), profile.career_goal or "unknown goal")
        try:
            response = llm_invoke(
                [HumanMessage(content=prompt)],
                api_key=self.llm_config.api_key,
                base_url=self.llm_config.base_url,
                provider=self.llm_config.provider,
                model=self.llm_config.model,
                temperature=self.llm_config.temperature,
                timeout=self.timeout,
            )
        except Exception as e:
            raise ExternalCallError(f"{self.llm_config.provider} call failed: {e}") from e

        text = str(response.content).strip()
        _LOG.debug("Ranker response: %s", text)
        try:
            return parse_ranked_ids(text)
        except ValueError as e:
            raise UnparseableRankingOutput(str(e), raw_output=text) from e

    def build_prompt(
        self,
        profile: UserProfile,
        events: Sequence[Event],
        ratings: Sequence[UserRating],
    ) -> str:
        template = PromptTemplate.from_file(self.prompts_dir / PROMPT_FILE, encoding="utf-8")
        return template.format(
            major=profile.major,
            career_goal=profile.career_goal,
            history_context=format_history(ratings),
            event_blocks="---\n".join(
                format_event(event, index) for index, event in enumerate(events, start=1)
            ),
            event_count=len(events),
        )


def format_history(ratings: Sequence[UserRating]) -> str:
    if not ratings:
        return ""
    lines = [
        f'- Rated "{r.event_title or r.event_id}" {r.rating}/5 stars' for r in ratings
    ]
    return "User's past ratings:\n" + "\n".join(lines) + "\n"


def format_event(event: Event, index: int) -> str:
    rating = f"{event.average_rating:.1f}/5" if event.average_rating else "No rating"
    return (
        f"\nEvent {index}\n"
        f"- Title: {event.title}\n"
        f"- ID: {event.id}\n"
        f"- Description: {event.description}\n"
        f"- Career Paths: {', '.join(event.career_paths) or 'N/A'}\n"
        f"- Skills Learned: {', '.join(event.skills_learned) or 'N/A'}\n"
        f"- Date: {event.date or 'TBD'}\n"
        f"- Location: {event.location or 'TBD'}\n"
        f"- Event Rating: {rating}\n"
        f"- Club: {event.club}\n"
    )
