from __future__ import annotations

from marketcard.narrative.text import format_analysis_text, split_sentences


def test_semicolons_become_sentences() -> None:
    assert format_analysis_text("hello world; this is great") == "Hello world.\nThis is great."


def test_full_width_semicolon_is_a_separator() -> None:
    assert format_analysis_text("btc holds；alts bleed") == "Btc holds.\nAlts bleed."


def test_whitespace_and_nbsp_are_collapsed() -> None:
    raw = "  wow\u00a0 such \n\t gains!  more to come"
    assert format_analysis_text(raw) == "Wow such gains!\nMore to come."


def test_existing_terminal_punctuation_is_kept() -> None:
    assert format_analysis_text("is it over? no. maybe!") == "Is it over?\nNo.\nMaybe!"


def test_empty_and_blank_input() -> None:
    assert format_analysis_text("") == ""
    assert format_analysis_text("   ;  ") == ""


def test_split_sentences_keeps_delimiters() -> None:
    assert split_sentences("a. b! c? d") == ["a.", "b!", "c?", "d"]
