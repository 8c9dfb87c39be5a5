# video_transcripts/transcription/gemini.py
"""
Gemini strategy: ask a hosted multimodal model to transcribe the video by URL.
Single responsibility: prompt, invoke, validate and segment the model output.

Segment timing produced here is an approximation derived from sentence
length, not measured against the video.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

from google import genai
from google.genai import types

from video_transcripts.logging_core.logger import LoggerLike, log_event
from video_transcripts.transcription.cleaning import clean_model_output, split_sentences
from video_transcripts.transcription.schema import (
    FailureType,
    StrategyResult,
    TranscriptionConfig,
    TranscriptSegment,
)
from video_transcripts.transcription.video_id import watch_url

STAGE_NAME = "gemini"

# Versioned prompt
TRANSCRIBE_PROMPT = """
Please transcribe ONLY the first {seconds} seconds of this YouTube video.

IMPORTANT REQUIREMENTS:
- Extract spoken words from ONLY the first {seconds} seconds ({minutes} minutes {remainder} seconds)
- Do NOT transcribe beyond {seconds} seconds
- Provide the transcript exactly as spoken, verbatim
- Format as continuous paragraphs with proper punctuation
- Do not summarize, do not add commentary, just transcribe what is actually spoken

Video URL: {url}
Time limit: First {seconds} seconds only
""".strip()

REFUSAL_PHRASES = (
    "cannot_access_video",
    "cannot access",
    "unable to access",
    "unable to",
    "i cannot",
    "i don't have",
    "i can't access",
    "i'm unable to",
    "i am unable to",
)

# Seconds per sentence bounds and fixed per-sentence step
MIN_SENTENCE_SEC = 2.0
MAX_SENTENCE_SEC = 8.0
CHARS_PER_SEC = 15.0
SENTENCE_STEP_MS = 4000.0

ClientFactory = Callable[[str], Any]


def default_client_factory(timeout_sec: float) -> ClientFactory:
    """Build genai clients with a bounded HTTP timeout."""

    def factory(api_key: str) -> genai.Client:
        return genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_sec * 1000)),
        )

    return factory


def build_prompt(video_id: str, seconds: int) -> str:
    return TRANSCRIBE_PROMPT.format(
        seconds=seconds,
        minutes=seconds // 60,
        remainder=seconds % 60,
        url=watch_url(video_id),
    )


def find_refusal(text: str) -> Optional[str]:
    """Return the refusal phrase the model used, if any."""
    lowered = text.lower()
    for phrase in REFUSAL_PHRASES:
        if phrase in lowered:
            return phrase
    return None


def sentence_segments(text: str) -> List[TranscriptSegment]:
    """One segment per sentence with length-proportional synthetic timing."""
    segments = []
    for index, sentence in enumerate(split_sentences(text)):
        seconds = max(MIN_SENTENCE_SEC, min(MAX_SENTENCE_SEC, len(sentence) / CHARS_PER_SEC))
        segments.append(
            TranscriptSegment(
                text=sentence,
                duration_ms=seconds * 1000,
                offset_ms=index * SENTENCE_STEP_MS,
            )
        )
    return segments


def _failure(failure: FailureType, reason: str, start: float, fixes: List[str], *, warning: bool = False) -> StrategyResult:
    return StrategyResult(
        success=False,
        method=STAGE_NAME,
        failure=failure,
        errors=[] if warning else [reason],
        warnings=[reason] if warning else [],
        suggested_fixes=fixes,
        execution_time_sec=time.time() - start,
    )


def transcribe_video(
    video_id: str,
    config: TranscriptionConfig,
    logger: LoggerLike,
    client_factory: Optional[ClientFactory] = None,
    max_watch_seconds: Optional[int] = None,
) -> StrategyResult:
    """
    Transcribe via Gemini. Never raises; failures come back as results.

    max_watch_seconds overrides config.max_watch_seconds in the prompt.
    """
    start = time.time()
    watch_seconds = max_watch_seconds or config.max_watch_seconds

    if not config.gemini_api_key:
        log_event(
            logger,
            logging.INFO,
            "Gemini API key not configured, skipping AI transcription",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id},
        )
        return _failure(
            FailureType.SOURCE_UNAVAILABLE,
            "Gemini API key not configured",
            start,
            ["Set GEMINI_API_KEY"],
            warning=True,
        )

    factory = client_factory or default_client_factory(config.request_timeout_sec)
    url = watch_url(video_id)

    log_event(
        logger,
        logging.INFO,
        "Requesting transcript from Gemini",
        stage_name=STAGE_NAME,
        event_type="start",
        metadata={"video_id": video_id, "model": config.gemini_model, "max_watch_seconds": watch_seconds},
    )

    try:
        client = factory(config.gemini_api_key)
        response = client.models.generate_content(
            model=config.gemini_model,
            contents=types.Content(
                role="user",
                parts=[
                    types.Part(file_data=types.FileData(file_uri=url, mime_type="video/*")),
                    types.Part(text=build_prompt(video_id, watch_seconds)),
                ],
            ),
            config=types.GenerateContentConfig(
                temperature=config.temperature,
                max_output_tokens=config.max_output_tokens,
            ),
        )
        text = response.text or ""
    except Exception as exc:  # pylint: disable=broad-except
        log_event(
            logger,
            logging.WARNING,
            "Gemini transcription request failed",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "exception": str(exc)},
        )
        return _failure(
            FailureType.SOURCE_UNAVAILABLE,
            f"Gemini error: {exc}",
            start,
            ["Check API key and quota", "Retry later"],
        )

    refusal = find_refusal(text)
    if refusal:
        log_event(
            logger,
            logging.WARNING,
            "Gemini declined to transcribe",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "phrase": refusal, "preview": text[:200]},
        )
        return _failure(
            FailureType.SOURCE_DECLINED,
            f"Model declined: '{refusal}'",
            start,
            ["Video may be private or region locked"],
        )

    cleaned = clean_model_output(text)
    if len(text) < config.min_transcript_chars or len(cleaned) < config.min_transcript_chars:
        log_event(
            logger,
            logging.WARNING,
            "Gemini transcript too short",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "raw_chars": len(text), "clean_chars": len(cleaned)},
        )
        return _failure(
            FailureType.LOW_QUALITY,
            f"Transcript too short: {len(cleaned)} characters",
            start,
            ["Video may have little speech"],
        )

    segments = sentence_segments(cleaned)

    log_event(
        logger,
        logging.INFO,
        "Gemini transcript received",
        stage_name=STAGE_NAME,
        event_type="success",
        metadata={"video_id": video_id, "characters": len(cleaned), "segments": len(segments)},
    )

    return StrategyResult(
        success=True,
        transcript_text=cleaned,
        segments=segments,
        method=STAGE_NAME,
        warnings=["Segment timing is approximated from sentence length"],
        execution_time_sec=time.time() - start,
    )
