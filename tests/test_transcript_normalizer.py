"""Tests for interaction_log_viewer.services.transcript_normalizer."""

import orjson
import pytest

from interaction_log_viewer.services.transcript_normalizer import normalize_payload
from interaction_log_viewer.types.transcript import AssistantText, ToolCall, ToolResult, UserText


# ---------------------------------------------------------------------------
# 1. Degenerate payloads
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("payload", [None, "", {}, [], 42, "not json", b"\xff\xfe", {"request": None}])
def test_degenerate_payloads_yield_nothing(payload):
    assert normalize_payload(payload) == []


def test_mistyped_fields_are_skipped():
    payload = {"messages": [
        "stray string",
        {"role": 7, "content": "who knows"},
        {"role": "user", "content": 12},
        {"role": "assistant", "tool_calls": "nope"},
        {"role": "user", "content": [None, 3, {"type": "text", "text": None}]},
    ]}
    assert normalize_payload(payload) == []


# ---------------------------------------------------------------------------
# 2. OpenAI chat completions
# ---------------------------------------------------------------------------

def test_openai_chat_request_and_response():
    payload = {
        "request": {"messages": [
            {"role": "system", "content": "You are helpful."},
            {"role": "user", "content": "What's the weather?"},
            {"role": "assistant", "content": None, "tool_calls": [
                {"id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": "{}"}},
            ]},
            {"role": "tool", "tool_call_id": "call_1", "name": "get_weather", "content": "sunny"},
        ]},
        "response": {"choices": [{"message": {"role": "assistant", "content": "It is sunny."}}]},
    }
    assert normalize_payload(payload) == [
        UserText(text="What's the weather?"),
        ToolCall(name="get_weather", call_id="call_1"),
        ToolResult(call_id="call_1", name="get_weather", text="sunny"),
        AssistantText(text="It is sunny."),
    ]


def test_legacy_function_call():
    payload = {"messages": [{"role": "assistant", "function_call": {"name": "lookup", "arguments": "{}"}}]}
    assert normalize_payload(payload) == [ToolCall(name="lookup")]


# ---------------------------------------------------------------------------
# 3. Anthropic messages
# ---------------------------------------------------------------------------

def test_anthropic_blocks():
    payload = {
        "request": {"messages": [
            {"role": "user", "content": [
                {"type": "text", "text": "Read main.py"},
                {"type": "image", "source": {}},
            ]},
            {"role": "assistant", "content": [{"type": "tool_use", "id": "tu_1", "name": "Read", "input": {}}]},
            {"role": "user", "content": [
                {"type": "tool_result", "tool_use_id": "tu_1", "content": [{"type": "text", "text": "print(1)"}]},
            ]},
        ]},
        "response": {"role": "assistant", "content": [
            {"type": "text", "text": "Done."},
            {"type": "tool_use", "id": "tu_2", "name": "Edit", "input": {}},
        ]},
    }
    assert normalize_payload(payload) == [
        UserText(text="Read main.py"),
        ToolCall(name="Read", call_id="tu_1"),
        ToolResult(call_id="tu_1", text="print(1)"),
        AssistantText(text="Done."),
        ToolCall(name="Edit", call_id="tu_2"),
    ]


def test_tool_result_only_user_turn_is_not_user_text():
    payload = {"messages": [
        {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "x", "content": "ok"}]},
    ]}
    entries = normalize_payload(payload)
    assert not any(isinstance(e, UserText) for e in entries)


def test_multiple_text_blocks_are_joined():
    payload = [{"role": "user", "content": [
        {"type": "text", "text": "first"},
        {"type": "text", "text": "second"},
    ]}]
    assert normalize_payload(payload) == [UserText(text="first\nsecond")]


# ---------------------------------------------------------------------------
# 4. Gemini
# ---------------------------------------------------------------------------

def test_gemini_contents_and_candidates():
    payload = {
        "request": {"contents": [
            {"role": "user", "parts": [{"text": "Find flights"}]},
            {"role": "model", "parts": [{"functionCall": {"name": "search_flights", "args": {}}}]},
            {"role": "function", "parts": [{"functionResponse": {"name": "search_flights", "response": {}}}]},
        ]},
        "response": {"candidates": [{"content": {"role": "model", "parts": [{"text": "Found 3."}]}}]},
    }
    entries = normalize_payload(payload)
    assert entries[0] == UserText(text="Find flights")
    assert ToolCall(name="search_flights") in entries
    assert any(isinstance(e, ToolResult) and e.name == "search_flights" for e in entries)
    assert entries[-1] == AssistantText(text="Found 3.")


# ---------------------------------------------------------------------------
# 5. OpenAI responses API
# ---------------------------------------------------------------------------

def test_responses_api_items():
    payload = {
        "request": {"input": [
            {"role": "user", "content": [{"type": "input_text", "text": "Summarize the repo"}]},
            {"type": "function_call_output", "call_id": "fc_1", "output": "README contents"},
        ]},
        "response": {"output": [
            {"type": "function_call", "call_id": "fc_2", "name": "list_files"},
            {"type": "message", "role": "assistant", "content": [{"type": "output_text", "text": "Here you go"}]},
        ]},
    }
    assert normalize_payload(payload) == [
        UserText(text="Summarize the repo"),
        ToolResult(call_id="fc_1", text="README contents"),
        ToolCall(name="list_files", call_id="fc_2"),
        AssistantText(text="Here you go"),
    ]


def test_responses_api_string_input():
    assert normalize_payload({"input": "plain prompt"}) == [UserText(text="plain prompt")]


# ---------------------------------------------------------------------------
# 6. Tool gateway records and encoded payloads
# ---------------------------------------------------------------------------

def test_tool_gateway_record():
    payload = {"toolCall": {"id": "mcp-1", "name": "github__create_issue", "arguments": {}}}
    assert normalize_payload(payload) == [ToolCall(name="github__create_issue", call_id="mcp-1")]


def test_tool_name_field():
    assert normalize_payload({"toolName": "filesystem__read"}) == [ToolCall(name="filesystem__read")]


def test_json_encoded_payload():
    raw = orjson.dumps({"messages": [{"role": "user", "content": "encoded message"}]})
    assert normalize_payload(raw) == [UserText(text="encoded message")]
    assert normalize_payload(raw.decode()) == [UserText(text="encoded message")]
