# video_transcripts/transcription/core.py
"""
Orchestrator for transcript strategies.
Single responsibility: sequence strategies, gate quality, map to result contract.

Order: Gemini transcription, then captions, then simulated content.
"""

from __future__ import annotations

import logging
import math
import random
import time
import uuid
from typing import Optional

from video_transcripts.logging_core.logger import LoggerLike, get_logger, log_event
from video_transcripts.transcription.captions import CaptionClient, YouTubeCaptionClient, get_captions
from video_transcripts.transcription.cleaning import (
    format_duration_label,
    ms_to_whole_seconds,
    segments_end_ms,
)
from video_transcripts.transcription.gemini import ClientFactory, transcribe_video
from video_transcripts.transcription.schema import (
    StrategyResult,
    TranscriptionConfig,
    VideoTranscriptResult,
    WindowedTranscript,
)
from video_transcripts.transcription.simulated import generate_simulated_transcript

STAGE_NAME = "extractor"


class TranscriptExtractor:
    """
    Produces a VideoTranscriptResult for any video id, always.

    Every collaborator is injected here; nothing is read from the environment
    except through TranscriptionConfig.from_env() when no config is given.
    Results are never cached; every call fetches or simulates from scratch.
    """

    def __init__(
        self,
        config: Optional[TranscriptionConfig] = None,
        *,
        caption_client: Optional[CaptionClient] = None,
        gemini_client_factory: Optional[ClientFactory] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[LoggerLike] = None,
    ) -> None:
        self.config = config or TranscriptionConfig.from_env()
        self._caption_client = caption_client
        self._gemini_client_factory = gemini_client_factory
        self._rng = rng
        self._logger = logger

    def _run_logger(self) -> LoggerLike:
        return self._logger or get_logger(uuid.uuid4())

    @property
    def caption_client(self) -> CaptionClient:
        if self._caption_client is None:
            self._caption_client = YouTubeCaptionClient(timeout_sec=self.config.caption_timeout_sec)
        return self._caption_client

    def fetch_real_transcript(
        self,
        video_id: str,
        logger: Optional[LoggerLike] = None,
        max_watch_seconds: Optional[int] = None,
    ) -> StrategyResult:
        """Try Gemini, then captions. Returns the first success or a failure."""
        logger = logger or self._run_logger()
        start = time.time()
        carried = StrategyResult(success=False)

        for name, strategy in (
            (
                "gemini",
                lambda: transcribe_video(video_id, self.config, logger, self._gemini_client_factory, max_watch_seconds),
            ),
            ("captions", lambda: get_captions(video_id, self.caption_client, self.config, logger)),
        ):
            try:
                result = strategy()
            except Exception as exc:  # pylint: disable=broad-except
                log_event(
                    logger,
                    logging.ERROR,
                    "Strategy raised unexpectedly",
                    stage_name=name,
                    event_type="failure",
                    metadata={"video_id": video_id, "exception": str(exc)},
                )
                result = StrategyResult(success=False, method=name, errors=[f"{name}: {exc}"])

            if result.success and result.transcript_text:
                result.warnings.extend(carried.warnings)
                result.errors.extend(carried.errors)
                result.execution_time_sec = time.time() - start
                return result

            carried.warnings.extend(result.warnings)
            carried.errors.extend(result.errors)
            carried.suggested_fixes.extend(result.suggested_fixes)

        carried.execution_time_sec = time.time() - start
        return carried

    def extract_video_transcript(
        self, video_id: str, max_watch_seconds: Optional[int] = None
    ) -> VideoTranscriptResult:
        """
        Return an authentic transcript when one of at least min_transcript_chars
        is available, otherwise simulated content. Never raises.

        max_watch_seconds bounds how much of the video Gemini is asked to
        transcribe; config.max_watch_seconds applies when it is None.
        """
        logger = self._run_logger()
        log_event(
            logger,
            logging.INFO,
            "Starting transcript extraction",
            stage_name=STAGE_NAME,
            event_type="start",
            metadata={"video_id": video_id},
        )

        try:
            real = self.fetch_real_transcript(video_id, logger, max_watch_seconds)
            if real.success and len(real.transcript_text) >= self.config.min_transcript_chars:
                result = VideoTranscriptResult(
                    video_id=video_id,
                    title=f"Video {video_id}",
                    duration_label=format_duration_label(segments_end_ms(real.segments)) if real.segments else "Unknown",
                    transcript=real.transcript_text,
                    segments=real.segments,
                    is_authentic=True,
                    method=real.method,
                )
                log_event(
                    logger,
                    logging.INFO,
                    "Authentic transcript extracted",
                    stage_name=STAGE_NAME,
                    event_type="success",
                    metadata={"video_id": video_id, "method": real.method, "characters": len(result.transcript)},
                )
                return result

            reason = "too_short" if real.success else "no_source"
            log_event(
                logger,
                logging.WARNING,
                "No usable real transcript, using simulated content",
                stage_name=STAGE_NAME,
                event_type="fallback",
                metadata={"video_id": video_id, "reason": reason, "errors": real.errors},
            )
        except Exception as exc:  # pylint: disable=broad-except
            log_event(
                logger,
                logging.ERROR,
                "Transcript extraction failed, using simulated content",
                stage_name=STAGE_NAME,
                event_type="fallback",
                metadata={"video_id": video_id, "exception": str(exc)},
            )

        return generate_simulated_transcript(video_id, self._rng)

    def extract_transcript_for_duration(
        self, video_id: str, max_duration_seconds: Optional[float] = None
    ) -> WindowedTranscript:
        """
        Full extraction followed by windowing to the first max_duration_seconds.

        A positive window also becomes Gemini's watch limit, so windows longer
        than config.max_watch_seconds can still be filled.
        """
        watch = math.ceil(max_duration_seconds) if max_duration_seconds and max_duration_seconds > 0 else None
        full = self.extract_video_transcript(video_id, max_watch_seconds=watch)
        return window_transcript(full, max_duration_seconds)

    def extract_transcript_text(self, video_id: str) -> str:
        return self.extract_video_transcript(video_id).transcript


def window_transcript(result: VideoTranscriptResult, max_duration_seconds: Optional[float] = None) -> WindowedTranscript:
    """
    Bound a result to segments starting before max_duration_seconds.

    The duration is recomputed from the kept segments only. The input result is
    left untouched; a new WindowedTranscript is returned.
    """
    if max_duration_seconds is None:
        return WindowedTranscript(
            transcript=result.transcript,
            duration_seconds=ms_to_whole_seconds(segments_end_ms(result.segments)),
            segments=result.segments,
            is_authentic=result.is_authentic,
        )

    cutoff_ms = max(max_duration_seconds, 0) * 1000
    kept = tuple(segment for segment in result.segments if segment.offset_ms < cutoff_ms)

    return WindowedTranscript(
        transcript=" ".join(segment.text for segment in kept),
        duration_seconds=ms_to_whole_seconds(segments_end_ms(kept)),
        segments=kept,
        is_authentic=result.is_authentic,
    )


def extract_video_transcript(video_id: str, config: Optional[TranscriptionConfig] = None) -> VideoTranscriptResult:
    return TranscriptExtractor(config).extract_video_transcript(video_id)


def extract_transcript_for_duration(
    video_id: str,
    max_duration_seconds: Optional[float] = None,
    config: Optional[TranscriptionConfig] = None,
) -> WindowedTranscript:
    return TranscriptExtractor(config).extract_transcript_for_duration(video_id, max_duration_seconds)


def extract_transcript_text(video_id: str, config: Optional[TranscriptionConfig] = None) -> str:
    """Plain transcript text for features that only compare content."""
    return TranscriptExtractor(config).extract_transcript_text(video_id)


# High-Level Intent
# core.py turns any video id into a well-formed transcript result.
# Strategies return failures rather than raising; each call is still wrapped so
# an unexpected exception moves on to the next source.

# Data Flow
# extract_video_transcript(video_id)
# -> fetch_real_transcript: Gemini -> captions (first non-empty wins)
# -> quality gate (min_transcript_chars)
# -> authentic VideoTranscriptResult, or simulated fallback
# extract_transcript_for_duration adds window_transcript on top.

# Edge Cases & Failure Scenarios
# Real transcript shorter than the gate -> discarded, simulated returned.
# Empty or invalid video id -> model validation fails inside the guard -> simulated.
# Window of 0 seconds -> empty transcript, duration 0, is_authentic preserved.

# Extension Points
# Strategy order is fixed; swapping captions ahead of Gemini is a one-line change here.
