"""
pi_context — context window budgeting and compression for LLM agents.
"""

from .compression import (
    ContextCompressor,
    SlidingWindowCompressor,
    SummarizingCompressor,
    TruncationCompressor,
)
from .config import CompressionSettings, create_compressor, load_settings, should_compress
from .errors import (
    CompressionError,
    CompressionFailedError,
    EstimationFailedError,
    InvalidStructureError,
)
from .estimator import (
    ContextEstimate,
    estimate_message_tokens,
    estimate_messages_tokens,
    estimate_tokens,
)
from .stream_stats import ByteCountingStream, StreamBytesCounter, count_response_bytes
from .summarizers import CallableSummarizer, OpenAISummarizer, Promptable
from .types import (
    AssistantContent,
    AssistantMessage,
    AudioContent,
    DocumentContent,
    ImageContent,
    Message,
    ReasoningContent,
    TextContent,
    Tool,
    ToolCall,
    ToolResultContent,
    UserContent,
    UserMessage,
    VideoContent,
    assistant_message,
    serialize_tool_definitions,
    user_message,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "AssistantContent", "AssistantMessage", "AudioContent", "DocumentContent",
    "ImageContent", "Message", "ReasoningContent", "TextContent", "Tool", "ToolCall",
    "ToolResultContent", "UserContent", "UserMessage", "VideoContent",
    "assistant_message", "user_message", "serialize_tool_definitions",
    # Estimation
    "ContextEstimate", "estimate_tokens", "estimate_message_tokens", "estimate_messages_tokens",
    # Errors
    "CompressionError", "CompressionFailedError", "EstimationFailedError", "InvalidStructureError",
    # Strategies
    "ContextCompressor", "TruncationCompressor", "SlidingWindowCompressor", "SummarizingCompressor",
    # Summarizers
    "Promptable", "CallableSummarizer", "OpenAISummarizer",
    # Config
    "CompressionSettings", "load_settings", "create_compressor", "should_compress",
    # Stream stats
    "StreamBytesCounter", "ByteCountingStream", "count_response_bytes",
]
