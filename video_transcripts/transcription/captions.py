# video_transcripts/transcription/captions.py
"""
Caption strategy using youtube_transcript_api.
Single responsibility: sweep language hints, clean and segment captions.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from youtube_transcript_api import YouTubeTranscriptApi

from video_transcripts.logging_core.logger import LoggerLike, log_event
from video_transcripts.transcription.cleaning import clean_caption_text, normalize_whitespace
from video_transcripts.transcription.schema import (
    FailureType,
    StrategyResult,
    TranscriptionConfig,
    TranscriptSegment,
)

STAGE_NAME = "captions"


class CaptionClient(Protocol):
    """Anything that returns caption fragments as {"text", "duration", "offset"} dicts (ms)."""

    def fetch(self, video_id: str, language: Optional[str] = None) -> List[Dict[str, Any]]: ...

    def fetch_any(self, video_id: str) -> List[Dict[str, Any]]: ...


class _TimeoutAdapter(HTTPAdapter):
    """Applies a default timeout to every request on the session."""

    def __init__(self, timeout: float, *args, **kwargs) -> None:
        self._timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self._timeout
        return super().send(request, **kwargs)


class YouTubeCaptionClient:
    """Adapter over youtube_transcript_api v1.x returning millisecond fragments."""

    def __init__(self, timeout_sec: float = 15.0, api: Optional[YouTubeTranscriptApi] = None) -> None:
        if api is None:
            session = requests.Session()
            adapter = _TimeoutAdapter(timeout_sec)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
            api = YouTubeTranscriptApi(http_client=session)
        self._api = api

    def fetch(self, video_id: str, language: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Fetch captions for one language hint.

        Without a hint, take the first track the uploader published, in any
        language. The library's own default would repeat the "en" request.
        """
        if language is None:
            for transcript in self._api.list(video_id):
                if not transcript.is_generated:
                    return _raw_to_ms(transcript.fetch().to_raw_data())
            return []
        return _raw_to_ms(self._api.fetch(video_id, languages=[language]).to_raw_data())

    def fetch_any(self, video_id: str) -> List[Dict[str, Any]]:
        """Fetch the first transcript listed for the video, whatever its language."""
        for transcript in self._api.list(video_id):
            return _raw_to_ms(transcript.fetch().to_raw_data())
        return []


def _raw_to_ms(raw: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # youtube_transcript_api reports seconds
    return [
        {
            "text": item.get("text", ""),
            "duration": float(item.get("duration") or 0) * 1000,
            "offset": float(item.get("start") or 0) * 1000,
        }
        for item in raw
    ]


def _to_segments(fragments: Iterable[Any]) -> List[TranscriptSegment]:
    """
    Map untyped caption fragments onto TranscriptSegment.

    Fragments without text after cleaning are dropped; missing or invalid
    timing defaults to 0.
    """
    segments: List[TranscriptSegment] = []
    for fragment in fragments:
        if not isinstance(fragment, dict):
            continue
        text = clean_caption_text(str(fragment.get("text") or ""))
        if not text:
            continue
        segments.append(
            TranscriptSegment(
                text=text,
                duration_ms=_non_negative(fragment.get("duration")),
                offset_ms=_non_negative(fragment.get("offset")),
            )
        )
    return segments


def _non_negative(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number > 0 else 0.0


def _attempt(
    fetch,
    video_id: str,
    label: str,
    logger: LoggerLike,
    errors: List[str],
) -> List[TranscriptSegment]:
    try:
        segments = _to_segments(fetch() or [])
    except Exception as exc:  # pylint: disable=broad-except
        errors.append(f"captions[{label}]: {exc}")
        log_event(
            logger,
            logging.WARNING,
            "Caption attempt failed",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "language": label, "exception": str(exc)},
        )
        return []

    if not segments:
        log_event(
            logger,
            logging.INFO,
            "Caption attempt returned nothing",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "language": label},
        )
    return segments


def get_captions(
    video_id: str,
    client: CaptionClient,
    config: TranscriptionConfig,
    logger: LoggerLike,
) -> StrategyResult:
    """
    Fetch published captions, trying each language hint in order.

    Stops at the first hint that yields text. If every hint fails, one final
    attempt takes any available language. Never raises.
    """
    start = time.time()
    errors: List[str] = []

    log_event(
        logger,
        logging.INFO,
        "Fetching captions",
        stage_name=STAGE_NAME,
        event_type="start",
        metadata={"video_id": video_id, "languages": [lang or "unspecified" for lang in config.caption_languages]},
    )

    segments: List[TranscriptSegment] = []
    for language in config.caption_languages:
        segments = _attempt(
            lambda: client.fetch(video_id, language),
            video_id,
            language or "unspecified",
            logger,
            errors,
        )
        if segments:
            break
    else:
        segments = _attempt(lambda: client.fetch_any(video_id), video_id, "any", logger, errors)

    if not segments:
        log_event(
            logger,
            logging.WARNING,
            "No captions found",
            stage_name=STAGE_NAME,
            event_type="failure",
            metadata={"video_id": video_id, "attempts": len(config.caption_languages) + 1},
        )
        return StrategyResult(
            success=False,
            method=STAGE_NAME,
            failure=FailureType.SOURCE_UNAVAILABLE,
            warnings=["YouTube captions unavailable"],
            errors=errors,
            suggested_fixes=["Check that captions are enabled for the video"],
            execution_time_sec=time.time() - start,
        )

    text = normalize_whitespace(" ".join(segment.text for segment in segments))

    log_event(
        logger,
        logging.INFO,
        "Captions fetched",
        stage_name=STAGE_NAME,
        event_type="success",
        metadata={"video_id": video_id, "characters": len(text), "segments": len(segments)},
    )

    return StrategyResult(
        success=True,
        transcript_text=text,
        segments=segments,
        method=STAGE_NAME,
        errors=errors,
        execution_time_sec=time.time() - start,
    )
