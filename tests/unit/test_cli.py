"""Tests for the video-transcripts CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from fakes import FakeCaptionClient
from video_transcripts.cli.transcript import app
from video_transcripts.logging_core.logger import set_log_stream
from video_transcripts.transcription.core import window_transcript
from video_transcripts.transcription.schema import TranscriptSegment, VideoTranscriptResult

runner = CliRunner()


def _result(authentic: bool = True) -> VideoTranscriptResult:
    return VideoTranscriptResult(
        video_id="dQw4w9WgXcQ",
        title="Video dQw4w9WgXcQ",
        duration_label="0:12",
        transcript="one two three four",
        segments=[
            TranscriptSegment(text=word, offset_ms=i * 3000, duration_ms=3000)
            for i, word in enumerate(["one", "two", "three", "four"])
        ],
        is_authentic=authentic,
        method="captions" if authentic else "simulated",
    )


class TestFetchCommand:
    @patch("video_transcripts.cli.transcript.TranscriptExtractor")
    def test_writes_full_result(self, mock_extractor_cls: MagicMock, tmp_path: Path) -> None:
        mock_extractor_cls.return_value.extract_video_transcript.return_value = _result()
        out = tmp_path / "nested" / "transcript.json"

        result = runner.invoke(app, ["fetch", "https://youtu.be/dQw4w9WgXcQ", "--out", str(out)])

        assert result.exit_code == 0
        mock_extractor_cls.return_value.extract_video_transcript.assert_called_once_with("dQw4w9WgXcQ")
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["videoId"] == "dQw4w9WgXcQ"
        assert payload["isAuthentic"] is True
        assert len(payload["segments"]) == 4

    @patch("video_transcripts.cli.transcript.TranscriptExtractor")
    def test_max_duration_windows_output(self, mock_extractor_cls: MagicMock, tmp_path: Path) -> None:
        extractor = mock_extractor_cls.return_value
        extractor.extract_transcript_for_duration.return_value = window_transcript(_result(), 7)
        out = tmp_path / "clip.json"

        result = runner.invoke(app, ["fetch", "dQw4w9WgXcQ", "--max-duration", "7", "--out", str(out)])

        assert result.exit_code == 0
        extractor.extract_transcript_for_duration.assert_called_once_with("dQw4w9WgXcQ", 7.0)
        extractor.extract_video_transcript.assert_not_called()
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["transcript"] == "one two three"
        assert payload["durationSeconds"] == 9
        assert payload["isAuthentic"] is True

    @patch("video_transcripts.cli.transcript.TranscriptExtractor")
    def test_simulated_output_warns(self, mock_extractor_cls: MagicMock, tmp_path: Path) -> None:
        mock_extractor_cls.return_value.extract_video_transcript.return_value = _result(authentic=False)

        result = runner.invoke(app, ["fetch", "dQw4w9WgXcQ", "--out", str(tmp_path / "t.json")])

        assert result.exit_code == 0
        assert "simulated" in result.output

    @patch("video_transcripts.cli.transcript.TranscriptExtractor")
    def test_seed_builds_rng(self, mock_extractor_cls: MagicMock, tmp_path: Path) -> None:
        mock_extractor_cls.return_value.extract_video_transcript.return_value = _result()

        runner.invoke(app, ["fetch", "dQw4w9WgXcQ", "--seed", "3", "--out", str(tmp_path / "t.json")])

        assert mock_extractor_cls.call_args.kwargs["rng"] is not None

    @patch("video_transcripts.cli.transcript.TranscriptExtractor")
    def test_invalid_input_exits_2(self, mock_extractor_cls: MagicMock) -> None:
        result = runner.invoke(app, ["fetch", "not a url!"])

        assert result.exit_code == 2
        mock_extractor_cls.assert_not_called()


class TestStdoutOutput:
    def test_stdout_is_only_the_json_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        try:
            with patch("video_transcripts.transcription.core.YouTubeCaptionClient", return_value=FakeCaptionClient()):
                result = runner.invoke(app, ["fetch", "dQw4w9WgXcQ", "--seed", "1"])
        finally:
            set_log_stream(sys.stderr)

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["videoId"] == "dQw4w9WgXcQ"
        assert payload["isAuthentic"] is False
        assert payload["transcript"]
