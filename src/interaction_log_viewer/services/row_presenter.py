"""Display-ready fields for the rows of an interactions table."""

from typing import Sequence

from interaction_log_viewer.services.message_extractor import extract_for_interaction
from interaction_log_viewer.services.savings_calculator import calculate_savings
from interaction_log_viewer.services.session_aggregator import display_label
from interaction_log_viewer.types.interactions import Interaction
from interaction_log_viewer.types.metrics import InteractionRow
from interaction_log_viewer.utils.text import truncate

MAX_VISIBLE_TOOLS = 2
MESSAGE_PREVIEW_LENGTH = 80
UNKNOWN_MODEL = "Unknown"


def build_interaction_row(
    interaction: Interaction,
    *,
    max_visible_tools: int = MAX_VISIBLE_TOOLS,
    message_preview_length: int = MESSAGE_PREVIEW_LENGTH,
) -> InteractionRow:
    extracted = extract_for_interaction(interaction)
    tools = extracted.tool_names_used
    visible = tools[:max(max_visible_tools, 0)]
    return InteractionRow(
        id=interaction.id,
        created_at=interaction.created_at,
        label=display_label(interaction),
        has_agent_label=bool(interaction.external_agent_id_label),
        model_name=interaction.model or UNKNOWN_MODEL,
        user_message=extracted.last_user_message,
        message_preview=truncate(extracted.last_user_message, message_preview_length),
        visible_tools=visible,
        hidden_tool_count=len(tools) - len(visible),
        savings=calculate_savings(interaction),
    )


def build_interaction_rows(
    interactions: Sequence[Interaction],
    *,
    max_visible_tools: int = MAX_VISIBLE_TOOLS,
    message_preview_length: int = MESSAGE_PREVIEW_LENGTH,
) -> list[InteractionRow]:
    return [
        build_interaction_row(
            i,
            max_visible_tools=max_visible_tools,
            message_preview_length=message_preview_length,
        )
        for i in interactions
    ]
