"""Shared fixtures for the transcript pipeline tests."""

from __future__ import annotations

import logging

import pytest

from video_transcripts.transcription.schema import TranscriptionConfig


@pytest.fixture
def quiet_logger() -> logging.Logger:
    return logging.getLogger("tests.video_transcripts")


@pytest.fixture
def config() -> TranscriptionConfig:
    return TranscriptionConfig(gemini_api_key="test-key")


@pytest.fixture
def keyless_config() -> TranscriptionConfig:
    return TranscriptionConfig(gemini_api_key=None)
