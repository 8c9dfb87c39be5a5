"""Video transcript acquisition: Gemini, YouTube captions, simulated fallback."""

from video_transcripts.transcription import (
    TranscriptExtractor,
    TranscriptionConfig,
    TranscriptSegment,
    VideoTranscriptResult,
    WindowedTranscript,
    extract_transcript_for_duration,
    extract_transcript_text,
    extract_video_transcript,
)

__version__ = "0.1.0"
