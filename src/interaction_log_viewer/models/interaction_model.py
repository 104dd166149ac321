"""QAbstractListModel for the interactions table of a session."""

from PySide6.QtCore import QAbstractListModel, QModelIndex, Qt, Slot

from interaction_log_viewer.services.savings_calculator import format_percent
from interaction_log_viewer.types import InteractionRow


class InteractionModel(QAbstractListModel):
    """Exposes InteractionRows to QML."""

    InteractionIdRole = Qt.UserRole + 1
    TimestampRole = Qt.UserRole + 2
    LabelRole = Qt.UserRole + 3
    HasAgentLabelRole = Qt.UserRole + 4
    ModelNameRole = Qt.UserRole + 5
    UserMessageRole = Qt.UserRole + 6
    MessagePreviewRole = Qt.UserRole + 7
    ToolsRole = Qt.UserRole + 8
    ToolOverflowRole = Qt.UserRole + 9
    SavingsPercentRole = Qt.UserRole + 10
    CostRole = Qt.UserRole + 11
    BaselineCostRole = Qt.UserRole + 12
    ToonTokensSavedRole = Qt.UserRole + 13
    SkipReasonRole = Qt.UserRole + 14
    ModelSubstitutedRole = Qt.UserRole + 15

    def __init__(self, parent=None):
        super().__init__(parent)
        self._rows: list[InteractionRow] = []

    def roleNames(self):
        return {
            self.InteractionIdRole: b"interactionId",
            self.TimestampRole: b"timestamp",
            self.LabelRole: b"label",
            self.HasAgentLabelRole: b"hasAgentLabel",
            self.ModelNameRole: b"modelName",
            self.UserMessageRole: b"userMessage",
            self.MessagePreviewRole: b"messagePreview",
            self.ToolsRole: b"tools",
            self.ToolOverflowRole: b"toolOverflow",
            self.SavingsPercentRole: b"savingsPercent",
            self.CostRole: b"cost",
            self.BaselineCostRole: b"baselineCost",
            self.ToonTokensSavedRole: b"toonTokensSaved",
            self.SkipReasonRole: b"skipReason",
            self.ModelSubstitutedRole: b"modelSubstituted",
        }

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or index.row() >= len(self._rows):
            return None

        row = self._rows[index.row()]

        if role == self.InteractionIdRole:
            return row.id
        elif role == self.TimestampRole:
            return row.created_at.isoformat() if row.created_at else ""
        elif role == self.LabelRole:
            return row.label
        elif role == self.HasAgentLabelRole:
            return row.has_agent_label
        elif role == self.ModelNameRole:
            return row.model_name
        elif role == self.UserMessageRole:
            return row.user_message or ""
        elif role == self.MessagePreviewRole:
            return row.message_preview
        elif role == self.ToolsRole:
            return list(row.visible_tools)
        elif role == self.ToolOverflowRole:
            return row.tool_overflow_label
        elif role == self.SavingsPercentRole:
            return format_percent(row.savings.percent)
        elif role == self.CostRole:
            return row.savings.cost
        elif role == self.BaselineCostRole:
            return row.savings.effective_baseline_cost
        elif role == self.ToonTokensSavedRole:
            return row.savings.toon_tokens_saved
        elif role == self.SkipReasonRole:
            return row.savings.skip_reason or ""
        elif role == self.ModelSubstitutedRole:
            return row.savings.model_substituted
        elif role == Qt.DisplayRole:
            return row.message_preview or row.label
        return None

    def set_rows(self, rows: list[InteractionRow]):
        """Replace the entire row list."""
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    @Slot(int, result=str)
    def get_interaction_id(self, index: int) -> str:
        """Get interaction ID by row (for opening the detail view)."""
        if 0 <= index < len(self._rows):
            return self._rows[index].id
        return ""
