"""Shared test helpers."""

from datetime import datetime, timedelta, timezone

from interaction_log_viewer.types import Interaction, RequestType

BASE_TIME = datetime(2026, 2, 13, 12, 0, tzinfo=timezone.utc)


def user_payload(*messages: str) -> dict:
    """OpenAI-style request payload with one user message per argument."""
    return {"request": {"messages": [{"role": "user", "content": m} for m in messages]}}


def make_interaction(
    id: str = "i-1",
    minutes: int = 0,
    message: str | None = None,
    request_type: RequestType = RequestType.MAIN,
    **kwargs,
) -> Interaction:
    """Build an Interaction created ``minutes`` after BASE_TIME."""
    if message is not None and "raw_payload" not in kwargs:
        kwargs["raw_payload"] = user_payload(message)
    kwargs.setdefault("session_id", "sess-1")
    return Interaction(
        id=id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        request_type=request_type,
        **kwargs,
    )
