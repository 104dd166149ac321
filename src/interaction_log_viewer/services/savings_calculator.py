"""Cost-savings figures for a single interaction or a whole session."""

from decimal import Decimal
from typing import Optional

from interaction_log_viewer.services.fallback import first_of
from interaction_log_viewer.types.interactions import Interaction
from interaction_log_viewer.types.metrics import SavingsBreakdown
from interaction_log_viewer.utils.decimals import ZERO, format_decimal, is_nonzero, to_decimal

NO_PERCENT = "—"


def baseline_cost_candidates(interaction: Interaction) -> list:
    """Ordered sources for the baseline cost: real baseline, own cost, zero.

    A baseline of "0" is skipped so that a missing baseline never shows as
    100% savings.
    """
    return [
        interaction.baseline_cost if is_nonzero(interaction.baseline_cost) else None,
        interaction.cost,
        "0",
    ]


def resolve_baseline_cost(interaction: Interaction) -> str:
    return first_of(baseline_cost_candidates(interaction), default="0")


def savings_percent(cost, baseline_cost) -> Optional[float]:
    """(baseline - cost) / baseline * 100 clamped to [0, 100]; None for a zero baseline."""
    baseline = to_decimal(baseline_cost)
    if baseline == ZERO:
        return None
    percent = (baseline - to_decimal(cost)) / baseline * Decimal(100)
    percent = max(ZERO, min(Decimal(100), percent))
    return float(percent)


def calculate_savings(interaction: Interaction) -> SavingsBreakdown:
    """Savings for one interaction.

    A skip reason does not suppress the numbers; it is passed along so the
    caller can show it next to them.
    """
    cost = interaction.cost or "0"
    baseline = resolve_baseline_cost(interaction)
    saved = to_decimal(baseline) - to_decimal(cost)
    return SavingsBreakdown(
        percent=savings_percent(cost, baseline),
        toon_tokens_saved=interaction.toon_tokens_saved or 0,
        effective_baseline_cost=baseline,
        cost=cost,
        cost_savings=format_decimal(max(saved, ZERO)),
        toon_cost_savings=interaction.toon_cost_savings,
        skip_reason=interaction.toon_skip_reason,
        baseline_model=interaction.baseline_model,
        actual_model=interaction.model,
    )


def calculate_session_savings(total_cost: Optional[str], total_baseline_cost: Optional[str]) -> Optional[float]:
    """Savings percent for session totals, None unless both totals are known."""
    if not is_nonzero(total_cost) or not is_nonzero(total_baseline_cost):
        return None
    return savings_percent(total_cost, total_baseline_cost)


def format_percent(percent: Optional[float]) -> str:
    if percent is None:
        return NO_PERCENT
    return f"{percent:.1f}%"
