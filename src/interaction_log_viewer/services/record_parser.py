"""Parse API-shaped JSON into Interaction and SessionSummary records."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

import orjson

from interaction_log_viewer.types.interactions import (
    Interaction,
    RequestType,
    SessionSource,
    SessionSummary,
)
from interaction_log_viewer.types.pagination import InteractionPage, PaginationMeta

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024

DEFAULT_LIMIT = 20


def parse_interaction(raw: Any) -> Interaction | None:
    """Parse one interaction dict. Records without an id are dropped."""
    if not isinstance(raw, dict):
        return None
    interaction_id = raw.get("id")
    if interaction_id is None or interaction_id == "":
        return None

    return Interaction(
        id=str(interaction_id),
        session_id=_str(raw.get("sessionId")),
        created_at=_parse_timestamp(raw.get("createdAt")),
        model=_str(raw.get("model")),
        baseline_model=_str(raw.get("baselineModel")),
        cost=_decimal_str(raw.get("cost")),
        baseline_cost=_decimal_str(raw.get("baselineCost")),
        toon_cost_savings=_decimal_str(raw.get("toonCostSavings")),
        toon_tokens_saved=_count(raw.get("toonTokensSaved")),
        toon_skip_reason=_str(raw.get("toonSkipReason")),
        input_tokens=_count(raw.get("inputTokens")),
        output_tokens=_count(raw.get("outputTokens")),
        request_type=_request_type(raw.get("requestType")),
        external_agent_id=_str(raw.get("externalAgentId")),
        external_agent_id_label=_str(raw.get("externalAgentIdLabel")),
        raw_payload=_raw_payload(raw),
    )


def parse_session_summary(raw: Any) -> SessionSummary | None:
    if not isinstance(raw, dict):
        return None
    session_id = _str(raw.get("sessionId"))
    if session_id is None:
        return None

    user_names = raw.get("userNames")
    models = raw.get("models")
    return SessionSummary(
        session_id=session_id,
        profile_name=_str(raw.get("profileName")),
        user_names=tuple(n for n in user_names if isinstance(n, str)) if isinstance(user_names, list) else (),
        session_source=_session_source(raw.get("sessionSource")),
        claude_code_title=_str(raw.get("claudeCodeTitle")),
        conversation_title=_str(raw.get("conversationTitle")),
        total_input_tokens=_count(raw.get("totalInputTokens")),
        total_output_tokens=_count(raw.get("totalOutputTokens")),
        models=tuple(m for m in models if isinstance(m, str) and m) if isinstance(models, list) else None,
        first_request_time=_parse_timestamp(raw.get("firstRequestTime")),
        last_request_time=_parse_timestamp(raw.get("lastRequestTime")),
        request_count=_count(raw.get("requestCount")),
        total_cost=_decimal_str(raw.get("totalCost")),
        total_baseline_cost=_decimal_str(raw.get("totalBaselineCost")),
        total_toon_cost_savings=_decimal_str(raw.get("totalToonCostSavings")),
    )


def parse_pagination(raw: Any, row_count: int = 0) -> PaginationMeta:
    """Pagination block of a list response; synthesised from the page when absent."""
    if not isinstance(raw, dict):
        limit = max(row_count, DEFAULT_LIMIT)
        return PaginationMeta(
            current_page=1,
            limit=limit,
            total=row_count,
            total_pages=1 if row_count else 0,
        )
    return PaginationMeta(
        current_page=_count(raw.get("currentPage")) or 1,
        limit=_count(raw.get("limit")) or DEFAULT_LIMIT,
        total=_count(raw.get("total")) or 0,
        total_pages=_count(raw.get("totalPages")) or 0,
        has_next=raw.get("hasNext") is True,
        has_prev=raw.get("hasPrev") is True,
    )


def parse_interactions_response(data: Any) -> InteractionPage:
    """Parse a ``{data, pagination}`` list response (dict, bytes or str).

    A bare JSON array is accepted as a single unpaginated page.
    """
    body = _load(data)
    if isinstance(body, list):
        items, raw_pagination = body, None
    elif isinstance(body, dict):
        items, raw_pagination = body.get("data"), body.get("pagination")
    else:
        return InteractionPage()

    if not isinstance(items, list):
        items = []
    interactions = tuple(i for i in (parse_interaction(item) for item in items) if i is not None)
    skipped = len(items) - len(interactions)
    if skipped:
        logger.debug("Skipped %d interaction records without an id", skipped)
    return InteractionPage(
        data=interactions,
        pagination=parse_pagination(raw_pagination, row_count=len(interactions)),
    )


def parse_sessions_response(data: Any) -> list[SessionSummary]:
    body = _load(data)
    items = body.get("data") if isinstance(body, dict) else body
    if not isinstance(items, list):
        return []
    return [s for s in (parse_session_summary(item) for item in items) if s is not None]


def load_interactions_file(file_path: str | Path) -> InteractionPage:
    """Load an export file: a JSON list response / array, or JSON Lines."""
    path = Path(file_path)
    if not path.exists():
        logger.warning("Interactions file not found: %s", path)
        return InteractionPage()

    content = path.read_bytes()
    try:
        return parse_interactions_response(orjson.loads(content))
    except orjson.JSONDecodeError:
        pass

    interactions = tuple(stream_interactions(path))
    return InteractionPage(
        data=interactions,
        pagination=parse_pagination(None, row_count=len(interactions)),
    )


def load_session_summary_file(file_path: str | Path) -> SessionSummary | None:
    """Load a session summary from a single object or a sessions list response."""
    path = Path(file_path)
    if not path.exists():
        logger.warning("Session summary file not found: %s", path)
        return None
    try:
        body = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        logger.warning("Malformed session summary file %s: %s", path.name, e)
        return None
    if isinstance(body, dict) and "data" not in body:
        return parse_session_summary(body)
    summaries = parse_sessions_response(body)
    return summaries[0] if summaries else None


def stream_interactions(file_path: str | Path) -> Iterator[Interaction]:
    """Stream-parse a JSON Lines file of interaction records.

    Malformed lines are logged and skipped.
    Lines exceeding MAX_LINE_SIZE are skipped with a warning.
    """
    path = Path(file_path)
    if not path.exists():
        logger.warning("Interactions file not found: %s", path)
        return

    line_num = 0
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line_num += 1
            line = line.strip()
            if not line:
                continue

            if len(line) > MAX_LINE_SIZE:
                logger.warning(
                    "Line %d in %s exceeds %dMB, skipping",
                    line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                )
                continue

            try:
                raw = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
                continue

            interaction = parse_interaction(raw)
            if interaction is not None:
                yield interaction


def _load(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray, str)):
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            logger.debug("Malformed JSON response: %s", e)
            return None
    return data


def _raw_payload(raw: dict) -> Any:
    """Transcript source: an explicit rawPayload, else the logged request/response."""
    if "rawPayload" in raw:
        return raw["rawPayload"]
    if "request" in raw or "response" in raw:
        return {"request": raw.get("request"), "response": raw.get("response")}
    if "toolCall" in raw or "toolName" in raw:
        return {"toolCall": raw.get("toolCall"), "toolName": raw.get("toolName")}
    return None


def _request_type(value: Any) -> RequestType:
    try:
        return RequestType(value)
    except ValueError:
        return RequestType.MAIN


def _session_source(value: Any) -> SessionSource | None:
    if value is None:
        return None
    try:
        return SessionSource(value)
    except ValueError:
        return SessionSource.UNKNOWN


def _str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _decimal_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _count(value: Any) -> int | None:
    """Non-negative integer field; anything else is treated as absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdecimal()):
            return None
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def _parse_timestamp(ts_value: Any) -> datetime | None:
    """Parse a timestamp from various formats into an aware UTC datetime."""
    if isinstance(ts_value, bool):
        return None
    if isinstance(ts_value, (int, float)):
        try:
            return datetime.fromtimestamp(ts_value / 1000 if ts_value > 1e12 else ts_value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(ts_value, str) and ts_value:
        try:
            # ISO 8601 format: "2026-02-13T12:00:00.000Z"
            dt = datetime.fromisoformat(ts_value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return None
