from video_transcripts.transcription.core import (
    TranscriptExtractor,
    extract_transcript_for_duration,
    extract_transcript_text,
    extract_video_transcript,
    window_transcript,
)
from video_transcripts.transcription.schema import (
    FailureType,
    StrategyResult,
    TranscriptionConfig,
    TranscriptSegment,
    VideoTranscriptResult,
    WindowedTranscript,
)
from video_transcripts.transcription.video_id import extract_video_id

__all__ = [
    "FailureType",
    "StrategyResult",
    "TranscriptExtractor",
    "TranscriptSegment",
    "TranscriptionConfig",
    "VideoTranscriptResult",
    "WindowedTranscript",
    "extract_transcript_for_duration",
    "extract_transcript_text",
    "extract_video_id",
    "extract_video_transcript",
    "window_transcript",
]
