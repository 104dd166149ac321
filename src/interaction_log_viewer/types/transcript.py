"""Normalized transcript entries.

A raw payload is reduced to a flat sequence of these four kinds; everything
downstream dispatches over exactly this closed set.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class UserText:
    text: str


@dataclass(frozen=True)
class AssistantText:
    text: str


@dataclass(frozen=True)
class ToolCall:
    name: str
    call_id: str = ""


@dataclass(frozen=True)
class ToolResult:
    call_id: str = ""
    name: Optional[str] = None
    text: str = ""


TranscriptEntry = Union[UserText, AssistantText, ToolCall, ToolResult]
