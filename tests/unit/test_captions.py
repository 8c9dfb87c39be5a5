"""Tests for the caption-extraction strategy and its youtube_transcript_api adapter."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from fakes import FakeCaptionClient
from video_transcripts.transcription.captions import (
    YouTubeCaptionClient,
    _raw_to_ms,
    _to_segments,
    get_captions,
)
from video_transcripts.transcription.schema import FailureType, TranscriptionConfig

FRAGMENTS = [
    {"text": "[Music]  hello   there", "duration": 1500, "offset": 0},
    {"text": "general kenobi [Applause]", "offset": 1500},
]


class TestLanguageSweep:
    def test_stops_at_first_successful_hint(self, config: TranscriptionConfig, quiet_logger: logging.Logger) -> None:
        client = FakeCaptionClient(
            responses={
                None: RuntimeError("no default track"),
                "en": RuntimeError("no english track"),
                "en-US": FRAGMENTS,
                "en-GB": RuntimeError("must not be called"),
                "auto": RuntimeError("must not be called"),
            }
        )

        result = get_captions("vid", client, config, quiet_logger)

        assert result.success is True
        assert client.calls == [None, "en", "en-US"]
        assert result.transcript_text == "hello there general kenobi"
        assert result.method == "captions"

    def test_first_hint_success_makes_one_call(self, config: TranscriptionConfig, quiet_logger: logging.Logger) -> None:
        client = FakeCaptionClient(responses={None: FRAGMENTS})
        result = get_captions("vid", client, config, quiet_logger)
        assert result.success is True
        assert client.calls == [None]

    def test_empty_results_move_to_next_hint(self, config: TranscriptionConfig, quiet_logger: logging.Logger) -> None:
        client = FakeCaptionClient(responses={None: [], "en": [{"text": "[Music]"}], "en-GB": FRAGMENTS})
        result = get_captions("vid", client, config, quiet_logger)
        assert result.success is True
        assert client.calls == [None, "en", "en-US", "en-GB"]

    def test_final_unhinted_attempt(self, config: TranscriptionConfig, quiet_logger: logging.Logger) -> None:
        client = FakeCaptionClient(any_response=FRAGMENTS)
        result = get_captions("vid", client, config, quiet_logger)
        assert result.success is True
        assert client.calls == [None, "en", "en-US", "en-GB", "auto", "<any>"]

    def test_total_failure_does_not_raise(self, config: TranscriptionConfig, quiet_logger: logging.Logger) -> None:
        boom = ConnectionError("network down")
        client = FakeCaptionClient(
            responses={lang: boom for lang in config.caption_languages},
            any_response=boom,
        )

        result = get_captions("vid", client, config, quiet_logger)

        assert result.success is False
        assert result.transcript_text == ""
        assert result.segments == []
        assert result.failure is FailureType.SOURCE_UNAVAILABLE
        assert len(result.errors) == 6

    def test_failed_attempt_is_logged(
        self, config: TranscriptionConfig, quiet_logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = FakeCaptionClient(responses={None: RuntimeError("boom"), "en": FRAGMENTS})
        with caplog.at_level(logging.WARNING, logger=quiet_logger.name):
            get_captions("vid", client, config, quiet_logger)
        assert any(r.getMessage() == "Caption attempt failed" for r in caplog.records)


class TestSegments:
    def test_preserves_timing_and_defaults_missing(self) -> None:
        segments = _to_segments(FRAGMENTS)
        assert [s.text for s in segments] == ["hello there", "general kenobi"]
        assert segments[0].duration_ms == 1500
        assert segments[0].offset_ms == 0
        assert segments[1].duration_ms == 0
        assert segments[1].offset_ms == 1500

    def test_invalid_payload_entries(self) -> None:
        segments = _to_segments(["junk", {"text": None}, {"text": "ok", "duration": "bad", "offset": -5}])
        assert len(segments) == 1
        assert segments[0].text == "ok"
        assert segments[0].duration_ms == 0
        assert segments[0].offset_ms == 0

    def test_raw_seconds_converted_to_ms(self) -> None:
        converted = _raw_to_ms([{"text": "hi", "start": 1.5, "duration": 2.25}])
        assert converted == [{"text": "hi", "duration": 2250.0, "offset": 1500.0}]


class TestYouTubeCaptionClient:
    def test_fetch_without_language_takes_first_published_track(self) -> None:
        generated = MagicMock(is_generated=True)
        published = MagicMock(is_generated=False)
        published.fetch.return_value.to_raw_data.return_value = [{"text": "hi", "start": 0.0, "duration": 1.0}]
        api = MagicMock()
        api.list.return_value = [generated, published]

        fragments = YouTubeCaptionClient(api=api).fetch("vid")

        api.list.assert_called_once_with("vid")
        api.fetch.assert_not_called()
        generated.fetch.assert_not_called()
        assert fragments == [{"text": "hi", "duration": 1000.0, "offset": 0.0}]

    def test_fetch_without_language_and_only_generated_tracks(self) -> None:
        api = MagicMock()
        api.list.return_value = [MagicMock(is_generated=True)]

        assert YouTubeCaptionClient(api=api).fetch("vid") == []
        api.fetch.assert_not_called()

    def test_fetch_with_language(self) -> None:
        api = MagicMock()
        api.fetch.return_value.to_raw_data.return_value = []

        YouTubeCaptionClient(api=api).fetch("vid", "en-GB")

        api.fetch.assert_called_once_with("vid", languages=["en-GB"])

    def test_fetch_any_takes_first_listed(self) -> None:
        first = MagicMock()
        first.fetch.return_value.to_raw_data.return_value = [{"text": "hola", "start": 2.0, "duration": 1.0}]
        second = MagicMock()
        api = MagicMock()
        api.list.return_value = [first, second]

        fragments = YouTubeCaptionClient(api=api).fetch_any("vid")

        assert fragments == [{"text": "hola", "duration": 1000.0, "offset": 2000.0}]
        second.fetch.assert_not_called()

    def test_fetch_any_with_no_transcripts(self) -> None:
        api = MagicMock()
        api.list.return_value = []
        assert YouTubeCaptionClient(api=api).fetch_any("vid") == []
