"""marketcard.narrative

Prompt in, prose out. Best effort only.
"""

from .composer import NarrativeComposer
from .extract import extract_analysis_text, match_shape
from .prompt import AnalysisInput, build_prompt_text, fmt_sign, format_price
from .text import format_analysis_text

__all__ = [
    "AnalysisInput",
    "NarrativeComposer",
    "build_prompt_text",
    "extract_analysis_text",
    "fmt_sign",
    "format_analysis_text",
    "format_price",
    "match_shape",
]
