"""
Compression settings and strategy selection.

Settings live under the ``"compression"`` key of a JSON settings file:

    {"compression": {"strategy": "summarizing", "preserveRecent": 4}}

Resolution order for the file: explicit path, $PI_CONTEXT_SETTINGS,
~/.pi/context/settings.json. Runtime overrides win over the file.
"""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any

from .compression import (
    ContextCompressor,
    SlidingWindowCompressor,
    SummarizingCompressor,
    TruncationCompressor,
)

if TYPE_CHECKING:
    from .estimator import ContextEstimate
    from .summarizers import Promptable

logger = logging.getLogger(__name__)

ENV_SETTINGS_PATH = "PI_CONTEXT_SETTINGS"
DEFAULT_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".pi", "context", "settings.json")

STRATEGIES = ("truncation", "sliding_window", "summarizing")


def _to_snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


@dataclass
class CompressionSettings:
    enabled: bool = True
    strategy: str = "sliding_window"   # truncation | sliding_window | summarizing
    threshold_percent: int = 80
    # truncation
    min_preserve: int = 1
    # sliding window / summarizing; None means the strategy's own default
    preserve_first: int | None = None
    min_recent: int = 2
    # summarizing
    preserve_recent: int = 2
    max_summary_tokens: int = 1000
    custom_prompt: str | None = None
    keep_tool_pairs: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompressionSettings":
        """Build settings from snake_case or camelCase keys; unknown keys are ignored."""
        return cls(**_normalize_keys(data))

    def merge(self, overrides: dict[str, Any]) -> "CompressionSettings":
        """Return a copy with non-None overrides applied."""
        merged = self.to_dict()
        for key, value in _normalize_keys(overrides).items():
            if value is not None:
                merged[key] = value
        return CompressionSettings(**merged)


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(CompressionSettings)}
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = key if key in known else _to_snake(key)
        if name in known:
            result[name] = value
    return result


def _load_file(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        return {}
    section = raw.get("compression", {})
    return section if isinstance(section, dict) else {}


def load_settings(
    path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> CompressionSettings:
    """Load compression settings from disk, then apply runtime overrides."""
    settings_path = path or os.environ.get(ENV_SETTINGS_PATH) or DEFAULT_SETTINGS_PATH
    settings = CompressionSettings.from_dict(_load_file(settings_path))
    if overrides:
        settings = settings.merge(overrides)
    return settings


def create_compressor(
    settings: CompressionSettings | None = None,
    summarizer: "Promptable | None" = None,
) -> ContextCompressor:
    """Instantiate the strategy named by settings."""
    s = settings or CompressionSettings()

    if s.strategy == "truncation":
        return TruncationCompressor(min_preserve=s.min_preserve, keep_tool_pairs=s.keep_tool_pairs)

    if s.strategy == "sliding_window":
        return SlidingWindowCompressor(
            preserve_first=s.preserve_first if s.preserve_first is not None else 0,
            min_recent=s.min_recent,
            keep_tool_pairs=s.keep_tool_pairs,
        )

    if s.strategy == "summarizing":
        if summarizer is None:
            raise ValueError("The summarizing strategy requires a summarizer")
        return SummarizingCompressor(
            summarizer,
            preserve_first=s.preserve_first if s.preserve_first is not None else 1,
            preserve_recent=s.preserve_recent,
            max_summary_tokens=s.max_summary_tokens,
            custom_prompt=s.custom_prompt,
        )

    raise ValueError(f"Unknown compression strategy {s.strategy!r}; expected one of {STRATEGIES}")


def should_compress(estimate: "ContextEstimate", settings: CompressionSettings | None = None) -> bool:
    """True if compression is enabled and usage has reached the threshold."""
    s = settings or CompressionSettings()
    if not s.enabled:
        return False
    return estimate.needs_compression(s.threshold_percent)
