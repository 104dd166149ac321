"""Derived per-interaction and per-session views."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from interaction_log_viewer.types.interactions import Interaction, SessionSource


@dataclass(frozen=True)
class ExtractedMessages:
    last_user_message: Optional[str] = None
    tool_names_used: tuple[str, ...] = ()


@dataclass(frozen=True)
class SavingsBreakdown:
    percent: Optional[float]
    toon_tokens_saved: int
    effective_baseline_cost: str
    cost: str = "0"
    cost_savings: str = "0"
    toon_cost_savings: Optional[str] = None
    skip_reason: Optional[str] = None
    baseline_model: Optional[str] = None
    actual_model: Optional[str] = None

    @property
    def model_substituted(self) -> bool:
        return bool(self.baseline_model) and bool(self.actual_model) and self.baseline_model != self.actual_model


@dataclass(frozen=True)
class SessionHeader:
    """Session-level metrics for the detail header.

    When ``is_page_scoped`` is True the totals were summed over the current
    page only and will differ once other pages are taken into account.
    """
    session_id: Optional[str]
    total_requests: int
    total_input_tokens: int
    total_output_tokens: int
    models: tuple[str, ...]
    first_request: Optional[datetime]
    last_request: Optional[datetime]
    total_cost: Optional[str]
    total_baseline_cost: Optional[str]
    total_toon_cost_savings: Optional[str]
    savings_percent: Optional[float]
    title: Optional[str]
    root_interaction: Optional[Interaction]
    profile_name: Optional[str] = None
    user_names: tuple[str, ...] = ()
    session_source: Optional[SessionSource] = None
    is_page_scoped: bool = False


@dataclass(frozen=True)
class InteractionRow:
    """Display-ready fields for one row of the interactions table."""
    id: str
    created_at: Optional[datetime]
    label: str
    has_agent_label: bool
    model_name: str
    user_message: Optional[str]
    message_preview: str
    visible_tools: tuple[str, ...]
    hidden_tool_count: int
    savings: SavingsBreakdown

    @property
    def tool_overflow_label(self) -> str:
        return f"+{self.hidden_tool_count}" if self.hidden_tool_count else ""
