"""Qt models for Interaction Log Viewer."""

from interaction_log_viewer.models.interaction_model import InteractionModel
from interaction_log_viewer.models.session_detail_model import SessionDetailModel

__all__ = ["InteractionModel", "SessionDetailModel"]
