"""marketcard.narrative.extract

Pull free text out of whatever the analysis endpoint felt like returning.

The endpoint has shipped several response shapes over time. Each known shape is
a named matcher; matchers run in a fixed priority order and the first non-empty
string wins:

  analysis        {"analysis": "..."}
  summary         {"summary": "..."}
  text            {"text": "..."}
  result_encoded  {"result": "<json>"}           (decoded, then matched again)
  result_list     {"result": [{"analysis": ...}] | ["..."]}
  result_object   {"result": {"analysis" | "summary": ...}}
  messages        {"messages": [{"content": "..."}]}
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

_Matcher = Callable[[dict[str, Any]], str | None]


@dataclass(frozen=True, slots=True)
class ShapeMatch:
    shape: str
    text: str


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _field(name: str) -> _Matcher:
    def match(obj: dict[str, Any]) -> str | None:
        return _text(obj.get(name))

    return match


def _analysis_or_summary(obj: Any) -> str | None:
    if not isinstance(obj, dict):
        return None
    return _text(obj.get("analysis")) or _text(obj.get("summary"))


def _result_encoded(obj: dict[str, Any]) -> str | None:
    result = obj.get("result")
    if not isinstance(result, str):
        return None
    try:
        decoded = json.loads(result)
    except ValueError:
        return None
    match = match_shape({"result": decoded})
    return match.text if match else None


def _result_list(obj: dict[str, Any]) -> str | None:
    result = obj.get("result")
    if not isinstance(result, list) or not result:
        return None
    first = result[0]
    return _analysis_or_summary(first) or _text(first)


def _result_object(obj: dict[str, Any]) -> str | None:
    return _analysis_or_summary(obj.get("result"))


def _messages(obj: dict[str, Any]) -> str | None:
    messages = obj.get("messages")
    if not isinstance(messages, list):
        return None
    for m in messages:
        if isinstance(m, dict) and (content := _text(m.get("content"))):
            return content
    return None


SHAPE_MATCHERS: tuple[tuple[str, _Matcher], ...] = (
    ("analysis", _field("analysis")),
    ("summary", _field("summary")),
    ("text", _field("text")),
    ("result_encoded", _result_encoded),
    ("result_list", _result_list),
    ("result_object", _result_object),
    ("messages", _messages),
)


def match_shape(payload: Any) -> ShapeMatch | None:
    """First matching shape, or None. Non-object payloads never match."""

    if not isinstance(payload, dict):
        return None
    for shape, matcher in SHAPE_MATCHERS:
        text = matcher(payload)
        if text is not None:
            return ShapeMatch(shape=shape, text=text)
    return None


def extract_analysis_text(payload: Any) -> str | None:
    match = match_shape(payload)
    return match.text if match else None
