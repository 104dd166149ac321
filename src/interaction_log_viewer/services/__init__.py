"""Services for Interaction Log Viewer."""

from interaction_log_viewer.services.message_extractor import extract_messages
from interaction_log_viewer.services.savings_calculator import calculate_savings, format_percent
from interaction_log_viewer.services.session_aggregator import (
    aggregate_session,
    display_label,
    select_root_interaction,
)
from interaction_log_viewer.services.pagination import compute_window, navigate
from interaction_log_viewer.services.row_presenter import build_interaction_row, build_interaction_rows
from interaction_log_viewer.services.record_parser import (
    parse_interactions_response,
    parse_sessions_response,
)
from interaction_log_viewer.services.session_loader import build_session_view, load_session_detail

__all__ = [
    "extract_messages",
    "calculate_savings",
    "format_percent",
    "aggregate_session",
    "display_label",
    "select_root_interaction",
    "compute_window",
    "navigate",
    "build_interaction_row",
    "build_interaction_rows",
    "parse_interactions_response",
    "parse_sessions_response",
    "build_session_view",
    "load_session_detail",
]
