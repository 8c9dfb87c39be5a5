# video_transcripts/transcription/schema.py
"""
Shared contracts for the transcription subsystem.

- TranscriptionConfig: explicit configuration passed in at construction time
- StrategyResult: what every strategy hands back to the orchestrator
- TranscriptSegment / VideoTranscriptResult / WindowedTranscript: the frozen
  public output models
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_CAPTION_LANGUAGES: Tuple[Optional[str], ...] = (None, "en", "en-US", "en-GB", "auto")


@dataclass(frozen=True)
class TranscriptionConfig:
    """Configuration for the extraction strategies."""
    gemini_api_key: Optional[str] = None  # None: AI strategy reports unavailable
    gemini_model: str = "gemini-2.0-flash"
    temperature: float = 0.1
    max_output_tokens: int = 8192
    max_watch_seconds: int = 300  # Only this much of the video is transcribed by the model
    min_transcript_chars: int = 100
    caption_languages: Tuple[Optional[str], ...] = DEFAULT_CAPTION_LANGUAGES
    request_timeout_sec: float = 60.0
    caption_timeout_sec: float = 15.0

    @classmethod
    def from_env(cls, **overrides) -> "TranscriptionConfig":
        """Build a config reading the Gemini credential from GEMINI_API_KEY."""
        overrides.setdefault("gemini_api_key", os.environ.get("GEMINI_API_KEY") or None)
        return cls(**overrides)


class FailureType(str, Enum):
    """Why a strategy produced nothing. Diagnostics only."""
    SOURCE_UNAVAILABLE = "source_unavailable"
    SOURCE_DECLINED = "source_declined"
    LOW_QUALITY = "low_quality"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TranscriptSegment(_FrozenModel):
    """One timed fragment of spoken content."""
    text: str = Field(min_length=1)
    duration_ms: float = Field(default=0.0, ge=0)
    offset_ms: float = Field(default=0.0, ge=0)


class VideoTranscriptResult(_FrozenModel):
    """
    Output of the top-level extractor.

    is_authentic is True only when the text came from the AI model or the
    captions service; simulated fallback content is always False.
    """
    video_id: str = Field(min_length=1)
    title: str
    duration_label: str
    transcript: str
    segments: Tuple[TranscriptSegment, ...] = ()
    is_authentic: bool
    method: Optional[str] = None  # "gemini", "captions", "simulated"


class WindowedTranscript(_FrozenModel):
    """A transcript bounded to the first N seconds of source content."""
    transcript: str
    duration_seconds: int = Field(ge=0)
    segments: Tuple[TranscriptSegment, ...] = ()
    is_authentic: bool


@dataclass
class StrategyResult:
    """Standardized result from any transcript strategy."""
    success: bool
    transcript_text: str = ""
    segments: List[TranscriptSegment] = field(default_factory=list)
    method: Optional[str] = None  # "gemini", "captions"
    failure: Optional[FailureType] = None
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    suggested_fixes: List[str] = field(default_factory=list)
    execution_time_sec: float = 0.0
