"""
Context compression strategies for long agent sessions.
"""

from .base import ContextCompressor
from .sliding_window import SlidingWindowCompressor
from .summarizing import (
    BRIEFING_TEMPLATE,
    CONVERSATION_PLACEHOLDER,
    SUMMARIZATION_PROMPT,
    SummarizingCompressor,
    build_briefing_message,
)
from .truncation import TruncationCompressor
from .utils import (
    PreservedSplit,
    format_messages_for_summary,
    is_valid_cut_point,
    split_preserved,
)

__all__ = [
    "BRIEFING_TEMPLATE",
    "CONVERSATION_PLACEHOLDER",
    "ContextCompressor",
    "PreservedSplit",
    "SUMMARIZATION_PROMPT",
    "SlidingWindowCompressor",
    "SummarizingCompressor",
    "TruncationCompressor",
    "build_briefing_message",
    "format_messages_for_summary",
    "is_valid_cut_point",
    "split_preserved",
]
