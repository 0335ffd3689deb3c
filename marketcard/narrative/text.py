"""marketcard.narrative.text

Analysis text cleanup: one capitalized, terminated sentence per line.
"""

from __future__ import annotations

import re

_WS = re.compile(r"\s+")
# ASCII and full-width semicolons both end a clause.
_SEMICOLONS = re.compile(r"[;\uff1b]+\s*")
_SENTENCE = re.compile(r"[^.!?]+[.!?]?")
_TERMINATED = re.compile(r"[.!?]$")


def _capitalize_first(s: str) -> str:
    for i, ch in enumerate(s):
        if not ch.isspace():
            return s[:i] + ch.upper() + s[i + 1 :]
    return s


def split_sentences(text: str) -> list[str]:
    """Sentences with their delimiter kept; blanks dropped."""

    return [s.strip() for s in _SENTENCE.findall(text) if s.strip()]


def format_analysis_text(raw: str) -> str:
    normalized = raw.replace("\u00a0", " ")
    normalized = _WS.sub(" ", normalized)
    normalized = _SEMICOLONS.sub(". ", normalized).strip()

    lines: list[str] = []
    for sentence in split_sentences(normalized):
        sentence = _capitalize_first(sentence)
        if not _TERMINATED.search(sentence):
            sentence += "."
        lines.append(sentence)
    return "\n".join(lines)
