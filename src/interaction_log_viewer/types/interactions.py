"""Interaction records and authoritative session summaries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class RequestType(str, Enum):
    MAIN = "main"
    OTHER = "other"


class SessionSource(str, Enum):
    CLAUDE_CODE = "claude_code"
    HEADER = "header"
    OPENAI_USER = "openai_user"
    UNKNOWN = "unknown"


# Separator used in delegation chains, e.g. "Planner → Coder"
DELEGATION_SEPARATOR = "→"


@dataclass(frozen=True)
class Interaction:
    """One logged request/response cycle through the proxy or tool gateway."""
    id: str
    session_id: Optional[str] = None
    created_at: Optional[datetime] = None
    model: Optional[str] = None
    baseline_model: Optional[str] = None
    cost: Optional[str] = None
    baseline_cost: Optional[str] = None
    toon_cost_savings: Optional[str] = None
    toon_tokens_saved: Optional[int] = None
    toon_skip_reason: Optional[str] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    request_type: RequestType = RequestType.MAIN
    external_agent_id: Optional[str] = None
    external_agent_id_label: Optional[str] = None
    raw_payload: Any = field(default=None, compare=False, repr=False)

    @property
    def is_delegated(self) -> bool:
        return bool(self.external_agent_id_label) and DELEGATION_SEPARATOR in self.external_agent_id_label


@dataclass(frozen=True)
class SessionSummary:
    """Server-side rollup of a whole session. Takes precedence over page data."""
    session_id: str
    profile_name: Optional[str] = None
    user_names: tuple[str, ...] = ()
    session_source: Optional[SessionSource] = None
    claude_code_title: Optional[str] = None
    conversation_title: Optional[str] = None
    total_input_tokens: Optional[int] = None
    total_output_tokens: Optional[int] = None
    models: Optional[tuple[str, ...]] = None
    first_request_time: Optional[datetime] = None
    last_request_time: Optional[datetime] = None
    request_count: Optional[int] = None
    total_cost: Optional[str] = None
    total_baseline_cost: Optional[str] = None
    total_toon_cost_savings: Optional[str] = None
