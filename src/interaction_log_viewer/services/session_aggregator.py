"""Session header metrics from a page of interactions and an optional summary.

Summary values are authoritative. Any total the summary lacks, or every total
when there is no summary, is derived from the current page only
(``SessionHeader.is_page_scoped``), so it is a partial view that changes as
other pages are loaded.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from interaction_log_viewer.services.fallback import first_of
from interaction_log_viewer.services.message_extractor import extract_for_interaction
from interaction_log_viewer.services.savings_calculator import calculate_session_savings, resolve_baseline_cost
from interaction_log_viewer.types.interactions import Interaction, RequestType, SessionSummary
from interaction_log_viewer.types.metrics import SessionHeader
from interaction_log_viewer.types.pagination import PaginationMeta
from interaction_log_viewer.utils.decimals import sum_decimal_strings
from interaction_log_viewer.utils.text import truncate

logger = logging.getLogger(__name__)

# User messages containing this are the harness asking for a session title
TITLE_PROMPT_MARKER = "Please write a 5-10 word title"
MIN_TITLE_MESSAGE_LENGTH = 10
MAX_TITLE_LENGTH = 100

MAIN_LABEL = "Main"
SUBAGENT_LABEL = "Subagent"

# Summary fields with a page-derived fallback
SUMMARY_TOTALS = (
    "total_input_tokens",
    "total_output_tokens",
    "models",
    "first_request_time",
    "last_request_time",
    "total_cost",
    "total_baseline_cost",
    "total_toon_cost_savings",
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def aggregate_session(
    interactions: Sequence[Interaction],
    summary: Optional[SessionSummary] = None,
    pagination: Optional[PaginationMeta] = None,
    title_max_length: int = MAX_TITLE_LENGTH,
) -> SessionHeader:
    """Build the session header.

    Each total uses the summary value when it has one and a page-only figure
    otherwise. Pure: the same page, summary and pagination always give an
    equal header.
    """
    interactions = tuple(interactions or ())
    if summary is None:
        logger.debug("No session summary; deriving header from %d page rows", len(interactions))
        summary = SessionSummary(session_id="")
    page_scoped = is_partial_summary(summary)

    page_times = [_aware(i.created_at) for i in interactions if i.created_at is not None]
    total_cost = first_of([summary.total_cost, lambda: sum_decimal_strings(i.cost for i in interactions)])
    total_baseline_cost = first_of([
        summary.total_baseline_cost,
        lambda: sum_decimal_strings(resolve_baseline_cost(i) for i in interactions),
    ])

    return SessionHeader(
        session_id=summary.session_id or _page_session_id(interactions),
        total_requests=first_of(
            [summary.request_count, pagination.total if pagination else None, len(interactions)],
            default=0,
        ),
        total_input_tokens=first_of(
            [summary.total_input_tokens, lambda: sum(i.input_tokens or 0 for i in interactions)],
        ),
        total_output_tokens=first_of(
            [summary.total_output_tokens, lambda: sum(i.output_tokens or 0 for i in interactions)],
        ),
        models=first_of([summary.models, lambda: page_models(interactions)]),
        first_request=first_of([summary.first_request_time, lambda: min(page_times, default=None)]),
        last_request=first_of([summary.last_request_time, lambda: max(page_times, default=None)]),
        total_cost=total_cost,
        total_baseline_cost=total_baseline_cost,
        total_toon_cost_savings=first_of([
            summary.total_toon_cost_savings,
            lambda: sum_decimal_strings(i.toon_cost_savings for i in interactions),
        ]),
        savings_percent=calculate_session_savings(total_cost, total_baseline_cost),
        title=derive_title(interactions, summary, max_length=title_max_length),
        root_interaction=select_root_interaction(interactions),
        profile_name=summary.profile_name,
        user_names=tuple(summary.user_names),
        session_source=summary.session_source,
        is_page_scoped=page_scoped,
    )


def is_partial_summary(summary: SessionSummary) -> bool:
    """True when any session total has to come from the current page instead."""
    return any(getattr(summary, name) is None for name in SUMMARY_TOTALS)


def page_models(interactions: Sequence[Interaction]) -> tuple[str, ...]:
    """Distinct models on the page in first-seen order."""
    return tuple(dict.fromkeys(i.model for i in interactions if i.model))


def title_candidates(
    interactions: Sequence[Interaction],
    summary: Optional[SessionSummary] = None,
    max_length: int = MAX_TITLE_LENGTH,
) -> list:
    """Title sources in priority order; the message scan runs only if needed."""
    return [
        summary.claude_code_title if summary else None,
        summary.conversation_title if summary else None,
        lambda: title_from_messages(interactions, max_length=max_length),
    ]


def derive_title(
    interactions: Sequence[Interaction],
    summary: Optional[SessionSummary] = None,
    max_length: int = MAX_TITLE_LENGTH,
) -> Optional[str]:
    return first_of(title_candidates(interactions, summary, max_length=max_length))


def title_from_messages(interactions: Sequence[Interaction], max_length: int = MAX_TITLE_LENGTH) -> Optional[str]:
    """First meaningful user message, oldest interaction first.

    Skips short messages and the harness's own title-generation prompt.
    """
    ordered = sorted(interactions, key=lambda i: _aware(i.created_at) if i.created_at else _EPOCH)
    for interaction in ordered:
        message = extract_for_interaction(interaction).last_user_message
        if is_title_worthy(message):
            return truncate(message, max_length)
    return None


def is_title_worthy(message: Optional[str]) -> bool:
    return (
        message is not None
        and len(message) > MIN_TITLE_MESSAGE_LENGTH
        and TITLE_PROMPT_MARKER not in message
    )


def is_root_candidate(interaction: Interaction) -> bool:
    """Main requests, or labelled requests that are not part of a delegation chain."""
    if interaction.request_type == RequestType.MAIN:
        return True
    return bool(interaction.external_agent_id_label) and not interaction.is_delegated


def select_root_interaction(interactions: Sequence[Interaction]) -> Optional[Interaction]:
    """The interaction a session summary links to, in page order."""
    for interaction in interactions:
        if is_root_candidate(interaction):
            return interaction
    return None


def label_candidates(interaction: Interaction) -> list:
    return [
        interaction.external_agent_id_label,
        interaction.external_agent_id,
        MAIN_LABEL if interaction.request_type == RequestType.MAIN else SUBAGENT_LABEL,
    ]


def display_label(interaction: Interaction) -> str:
    return first_of(label_candidates(interaction), default=MAIN_LABEL)


def _page_session_id(interactions: Sequence[Interaction]) -> Optional[str]:
    for interaction in interactions:
        if interaction.session_id:
            return interaction.session_id
    return None


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)
