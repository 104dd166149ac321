"""Extract the last user message and the tools used from an interaction payload."""

from typing import Any, Iterable

from interaction_log_viewer.services.transcript_normalizer import normalize_payload
from interaction_log_viewer.types.interactions import Interaction
from interaction_log_viewer.types.metrics import ExtractedMessages
from interaction_log_viewer.types.transcript import (
    AssistantText,
    ToolCall,
    ToolResult,
    TranscriptEntry,
    UserText,
)
from interaction_log_viewer.utils.text import sanitize_text


def extract_messages(raw_payload: Any) -> ExtractedMessages:
    """Derive the per-row message fields from a raw payload.

    Empty, missing or unreadable payloads give (None, ()).
    """
    entries = normalize_payload(raw_payload)
    return ExtractedMessages(
        last_user_message=last_user_message(entries),
        tool_names_used=tool_names_used(entries),
    )


def extract_for_interaction(interaction: Interaction) -> ExtractedMessages:
    return extract_messages(interaction.raw_payload)


def last_user_message(entries: Iterable[TranscriptEntry]) -> str | None:
    """Most recent user-authored text, with internal markup stripped."""
    for entry in reversed(list(entries)):
        if isinstance(entry, UserText):
            text = sanitize_text(entry.text)
            if text:
                return text
    return None


def tool_names_used(entries: Iterable[TranscriptEntry]) -> tuple[str, ...]:
    """Tool names from calls and named results, first-seen order, no duplicates."""
    seen: dict[str, None] = {}
    for entry in entries:
        if isinstance(entry, ToolCall):
            seen.setdefault(entry.name, None)
        elif isinstance(entry, ToolResult):
            if entry.name:
                seen.setdefault(entry.name, None)
        elif isinstance(entry, (UserText, AssistantText)):
            continue
    return tuple(seen)
