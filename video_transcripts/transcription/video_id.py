# video_transcripts/transcription/video_id.py
"""
Resolve user input to a YouTube video id.
Pure, deterministic string handling; no network calls.
"""

from __future__ import annotations

import re

# Covers watch, youtu.be, embeds, shorts and youtube-nocookie
YOUTUBE_REGEX = re.compile(
    r"(?:https?://)?"
    r"(?:www\.|m\.)?"
    r"(?:youtube\.com|youtu\.be|youtube-nocookie\.com)"
    r"/(?:watch\?(?:.*&)?v=|embed/|v/|shorts/)?([A-Za-z0-9_-]{6,})"
)
BARE_ID_REGEX = re.compile(r"^[A-Za-z0-9_-]{6,}$")


def extract_video_id(value: str) -> str:
    """
    Return the video id for a bare id or a YouTube URL.

    Raises:
        ValueError: input is empty or not recognizable.
    """
    value = (value or "").strip()
    if not value:
        raise ValueError("No video id or URL provided")

    if BARE_ID_REGEX.match(value):
        return value

    match = YOUTUBE_REGEX.search(value)
    if not match:
        raise ValueError(f"Not a YouTube video id or URL: {value}")
    return match.group(1)


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"
