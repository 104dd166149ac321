"""Type definitions for Interaction Log Viewer."""

from interaction_log_viewer.types.interactions import (
    DELEGATION_SEPARATOR,
    Interaction,
    RequestType,
    SessionSource,
    SessionSummary,
)
from interaction_log_viewer.types.transcript import (
    AssistantText,
    ToolCall,
    ToolResult,
    TranscriptEntry,
    UserText,
)
from interaction_log_viewer.types.pagination import InteractionPage, PageWindow, PaginationMeta
from interaction_log_viewer.types.metrics import (
    ExtractedMessages,
    InteractionRow,
    SavingsBreakdown,
    SessionHeader,
)

__all__ = [
    "DELEGATION_SEPARATOR",
    "Interaction",
    "RequestType",
    "SessionSource",
    "SessionSummary",
    "AssistantText",
    "ToolCall",
    "ToolResult",
    "TranscriptEntry",
    "UserText",
    "InteractionPage",
    "PageWindow",
    "PaginationMeta",
    "ExtractedMessages",
    "InteractionRow",
    "SavingsBreakdown",
    "SessionHeader",
]
