"""Normalize raw interaction payloads into a closed set of transcript entries.

Payload shape depends on the provider and the agent that produced it. This
module knows about the OpenAI chat/responses, Anthropic messages and Gemini
shapes plus tool-gateway records, and reduces any of them to a flat list of
UserText / AssistantText / ToolCall / ToolResult entries. Pieces it does not
recognise are skipped.
"""

import logging
from typing import Any, Iterator

import orjson

from interaction_log_viewer.types.transcript import (
    AssistantText,
    ToolCall,
    ToolResult,
    TranscriptEntry,
    UserText,
)

logger = logging.getLogger(__name__)

USER_ROLES = frozenset({"user", "human"})
ASSISTANT_ROLES = frozenset({"assistant", "model"})
TOOL_ROLES = frozenset({"tool", "function"})

TEXT_BLOCK_TYPES = frozenset({"text", "input_text", "output_text"})


def normalize_payload(raw_payload: Any) -> list[TranscriptEntry]:
    """Flatten a raw payload into transcript entries in conversation order.

    Never raises: a payload that cannot be read yields whatever was collected
    before the problem, usually an empty list.
    """
    entries: list[TranscriptEntry] = []
    payload = _decode(raw_payload)
    try:
        _walk_payload(payload, entries)
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug("Stopped normalizing malformed payload: %s", e)
    return entries


def _decode(raw_payload: Any) -> Any:
    """Payloads stored as JSON text are decoded; anything else passes through."""
    if isinstance(raw_payload, (bytes, bytearray, memoryview)):
        raw_payload = bytes(raw_payload)
    elif not isinstance(raw_payload, str):
        return raw_payload
    try:
        return orjson.loads(raw_payload)
    except orjson.JSONDecodeError:
        return None


def _walk_payload(payload: Any, entries: list[TranscriptEntry]):
    # Envelopes can nest arbitrarily deep, so they are walked off a stack
    stack = [payload]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            _walk_messages(current, entries)
        elif isinstance(current, dict):
            stack.extend(reversed(_walk_container(current, entries)))


def _walk_container(data: dict, entries: list[TranscriptEntry]) -> tuple:
    """Read one payload object; returns the envelope sides still to walk, in order."""
    # Tool-gateway record: a single named tool invocation
    tool_call = data.get("toolCall")
    tool_name = _name(data.get("toolName"))
    if tool_name is None and isinstance(tool_call, dict):
        tool_name = _name(tool_call.get("name"))
    if tool_name is not None:
        call_id = tool_call.get("id", "") if isinstance(tool_call, dict) else ""
        entries.append(ToolCall(name=tool_name, call_id=_text(call_id)))

    # Logged interaction envelope: request side first, then response
    if "request" in data or "response" in data:
        return _decode(data.get("request")), _decode(data.get("response"))

    found = False
    for key in ("messages", "contents"):
        items = data.get(key)
        if isinstance(items, list):
            _walk_messages(items, entries)
            found = True

    input_items = data.get("input")
    if isinstance(input_items, str):
        if input_items.strip():
            entries.append(UserText(text=input_items))
        found = True
    elif isinstance(input_items, list):
        _walk_messages(input_items, entries, default_role="user")
        found = True

    choices = data.get("choices")
    if isinstance(choices, list):
        for choice in choices:
            if not isinstance(choice, dict):
                continue
            message = choice.get("message") or choice.get("delta")
            if isinstance(message, dict):
                _walk_message(message, entries, default_role="assistant")
        found = True

    candidates = data.get("candidates")
    if isinstance(candidates, list):
        for candidate in candidates:
            if isinstance(candidate, dict) and isinstance(candidate.get("content"), dict):
                _walk_message(candidate["content"], entries, default_role="model")
        found = True

    output = data.get("output")
    if isinstance(output, list):
        _walk_messages(output, entries, default_role="assistant")
        found = True

    # A single message, e.g. an Anthropic response body
    if not found and ("content" in data or "parts" in data) and "role" in data:
        _walk_message(data, entries)
    return ()


def _walk_messages(items: list, entries: list[TranscriptEntry], default_role: str | None = None):
    for item in items:
        if isinstance(item, dict):
            _walk_message(item, entries, default_role=default_role)
        else:
            logger.debug("Skipping non-object transcript item of type %s", type(item).__name__)


def _walk_message(message: dict, entries: list[TranscriptEntry], default_role: str | None = None):
    item_type = message.get("type")

    # OpenAI responses API items
    if item_type == "function_call":
        name = _name(message.get("name"))
        if name is not None:
            entries.append(ToolCall(name=name, call_id=_text(message.get("call_id") or message.get("id"))))
        return
    if item_type == "function_call_output":
        entries.append(ToolResult(
            call_id=_text(message.get("call_id")),
            text=_flatten_text(message.get("output")),
        ))
        return

    role = message.get("role") or default_role
    role = role.lower() if isinstance(role, str) else ""

    texts: list[str] = []
    nested: list[TranscriptEntry] = []
    for block in _iter_blocks(message):
        _read_block(block, texts, nested)

    # OpenAI chat tool calls and the legacy single function_call
    tool_calls = message.get("tool_calls")
    if isinstance(tool_calls, list):
        for tc in tool_calls:
            if not isinstance(tc, dict):
                continue
            function = tc.get("function")
            name = _name(function.get("name")) if isinstance(function, dict) else _name(tc.get("name"))
            if name is not None:
                nested.append(ToolCall(name=name, call_id=_text(tc.get("id"))))
    function_call = message.get("function_call")
    if isinstance(function_call, dict):
        name = _name(function_call.get("name"))
        if name is not None:
            nested.append(ToolCall(name=name))

    text = "\n".join(t for t in texts if t.strip())

    if role in USER_ROLES:
        entries.extend(nested)
        if text.strip():
            entries.append(UserText(text=text))
    elif role in ASSISTANT_ROLES:
        if text.strip():
            entries.append(AssistantText(text=text))
        entries.extend(nested)
    elif role in TOOL_ROLES:
        entries.append(ToolResult(
            call_id=_text(message.get("tool_call_id")),
            name=_name(message.get("name")),
            text=text,
        ))
        entries.extend(nested)
    else:
        # System / developer text is dropped; tool references still count
        entries.extend(nested)


def _iter_blocks(message: dict) -> Iterator[Any]:
    for key in ("content", "parts"):
        value = message.get(key)
        if isinstance(value, list):
            yield from value
        elif isinstance(value, (str, dict)):
            yield value


def _read_block(block: Any, texts: list[str], nested: list[TranscriptEntry]):
    """Sort one content block into plain text or a nested tool entry."""
    if isinstance(block, str):
        texts.append(block)
        return
    if not isinstance(block, dict):
        return

    block_type = block.get("type")
    if block_type in TEXT_BLOCK_TYPES or (block_type is None and isinstance(block.get("text"), str)):
        text = block.get("text")
        if isinstance(text, str):
            texts.append(text)
    elif block_type == "tool_use":
        name = _name(block.get("name"))
        if name is not None:
            nested.append(ToolCall(name=name, call_id=_text(block.get("id"))))
    elif block_type == "tool_result":
        nested.append(ToolResult(
            call_id=_text(block.get("tool_use_id")),
            name=_name(block.get("name")),
            text=_flatten_text(block.get("content")),
        ))
    elif isinstance(block.get("functionCall"), dict):
        name = _name(block["functionCall"].get("name"))
        if name is not None:
            nested.append(ToolCall(name=name, call_id=_text(block["functionCall"].get("id"))))
    elif isinstance(block.get("functionResponse"), dict):
        response = block["functionResponse"]
        nested.append(ToolResult(
            call_id=_text(response.get("id")),
            name=_name(response.get("name")),
            text=_flatten_text(response.get("response")),
        ))


def _flatten_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and isinstance(item.get("text"), str):
                parts.append(item["text"])
        return "\n".join(parts)
    return ""


def _name(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
