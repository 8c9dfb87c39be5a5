# video_transcripts/transcription/cleaning.py
"""
Text helpers shared by the strategies.
Single responsibility: clean raw transcript text and derive timing labels.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, List

from video_transcripts.transcription.schema import TranscriptSegment

_ANNOTATION = re.compile(r"\[[^\[\]]*\]")  # [Music], [Applause], [Sound effects] ...
_WHITESPACE = re.compile(r"\s+")
_CODE_FENCE = re.compile(r"```[\s\S]*?```")
_TRANSCRIPT_LABEL = re.compile(r"^\s*Transcript:\s*", re.IGNORECASE)
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def strip_annotations(text: str) -> str:
    return _ANNOTATION.sub(" ", text)


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_caption_text(text: str) -> str:
    """Drop bracketed sound annotations and collapse whitespace."""
    return normalize_whitespace(strip_annotations(text))


def clean_model_output(text: str) -> str:
    """
    Clean free-form model output into plain transcript prose.

    Removes fenced code blocks, a leading "Transcript:" label and bracketed
    annotations before collapsing whitespace.
    """
    text = _CODE_FENCE.sub("", text)
    text = _TRANSCRIPT_LABEL.sub("", text)
    return clean_caption_text(text)


def split_sentences(text: str) -> List[str]:
    """Split on '.', '!' or '?' followed by whitespace."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def segments_end_ms(segments: Iterable[TranscriptSegment]) -> float:
    """Latest offset + duration across segments, 0 when there are none."""
    return max((s.offset_ms + s.duration_ms for s in segments), default=0.0)


def ms_to_whole_seconds(ms: float) -> int:
    # A partially covered second still counts.
    return int(math.ceil(ms / 1000)) if ms > 0 else 0


def format_duration_label(ms: float) -> str:
    """Render milliseconds as m:ss."""
    total_seconds = int(ms // 1000)
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"
