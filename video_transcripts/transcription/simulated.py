# video_transcripts/transcription/simulated.py
"""
Simulated transcript: placeholder content for when no real source works.
Single responsibility: pick a topic paragraph and chunk it into timed segments.

Output is never authentic and must not be graded against as ground truth.
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from video_transcripts.transcription.cleaning import format_duration_label
from video_transcripts.transcription.schema import TranscriptSegment, VideoTranscriptResult

WORDS_PER_SEGMENT = 5
SEGMENT_DURATION_MS = 3000

TOPICS: Tuple[Tuple[str, str], ...] = (
    (
        "CLIMATE CHANGE",
        (
            "Climate change represents one of the most pressing challenges of our "
            "time. The Earth's climate system is warming at an unprecedented rate "
            "due to human activities, particularly the emission of greenhouse "
            "gases like carbon dioxide and methane. Scientific evidence shows that "
            "global temperatures have risen by approximately 1.1 degrees Celsius "
            "since pre-industrial times. This warming is causing dramatic changes "
            "in weather patterns, including more frequent extreme weather events "
            "such as hurricanes, droughts, and floods. The Arctic ice sheets are "
            "melting at alarming rates, contributing to rising sea levels that "
            "threaten coastal communities worldwide. To address this crisis, we "
            "need immediate action on multiple fronts: transitioning to renewable "
            "energy sources, improving energy efficiency, protecting and restoring "
            "forests, and implementing carbon pricing mechanisms. Individual "
            "actions also matter - from reducing energy consumption to choosing "
            "sustainable transportation options. The Paris Agreement represents a "
            "global commitment to limiting warming to well below 2 degrees "
            "Celsius, but achieving this goal requires unprecedented cooperation "
            "and rapid transformation of our energy systems."
        ),
    ),
    (
        "TECHNOLOGY AND SOCIETY",
        (
            "The rapid advancement of technology is reshaping every aspect of our "
            "daily lives, from how we communicate and work to how we learn and "
            "entertain ourselves. Artificial intelligence and machine learning are "
            "becoming increasingly sophisticated, enabling computers to perform "
            "tasks that were once thought to be exclusively human. Social media "
            "platforms have connected billions of people across the globe, "
            "creating new opportunities for collaboration and cultural exchange, "
            "but also raising concerns about privacy, misinformation, and mental "
            "health. The rise of remote work and digital nomadism has challenged "
            "traditional notions of workplace and geography. Meanwhile, emerging "
            "technologies like virtual reality, blockchain, and quantum computing "
            "promise to unlock new possibilities we can barely imagine. However, "
            "with these advances come important questions about digital equity, "
            "cybersecurity, and the ethical implications of increasingly powerful "
            "technologies. As we navigate this digital transformation, it's "
            "crucial that we develop policies and practices that harness "
            "technology's benefits while mitigating its risks."
        ),
    ),
    (
        "SUSTAINABLE LIVING",
        (
            "Sustainable living involves making conscious choices to reduce our "
            "environmental impact while maintaining a high quality of life. This "
            "approach encompasses various aspects of daily life, including energy "
            "consumption, transportation, food choices, and waste management. "
            "Simple changes like using energy-efficient appliances, choosing "
            "renewable energy sources, and improving home insulation can "
            "significantly reduce our carbon footprint. Transportation choices "
            "also play a crucial role - walking, cycling, using public transport, "
            "or driving electric vehicles can substantially lower emissions. Our "
            "food system has a major environmental impact, so choosing "
            "locally-sourced, seasonal, and plant-based foods can make a real "
            "difference. Reducing waste through the principles of reduce, reuse, "
            "and recycle helps minimize our consumption of natural resources. "
            "Water conservation through efficient fixtures and mindful usage "
            "protects this precious resource. Supporting businesses that "
            "prioritize sustainability creates market demand for environmentally "
            "responsible practices. Sustainable living isn't about perfection, but "
            "about making thoughtful choices that collectively contribute to a "
            "healthier planet for future generations."
        ),
    ),
)


def chunk_words(text: str, words_per_segment: int = WORDS_PER_SEGMENT) -> List[TranscriptSegment]:
    """Fixed-size word chunks with fixed duration and increasing offsets."""
    words = text.split()
    segments = []
    for index, start in enumerate(range(0, len(words), words_per_segment)):
        segments.append(
            TranscriptSegment(
                text=" ".join(words[start:start + words_per_segment]),
                duration_ms=SEGMENT_DURATION_MS,
                offset_ms=index * SEGMENT_DURATION_MS,
            )
        )
    return segments


def generate_simulated_transcript(video_id: str, rng: Optional[random.Random] = None) -> VideoTranscriptResult:
    """Build placeholder content for video_id. Never fails."""
    topic, transcript = (rng or random).choice(TOPICS)
    segments = chunk_words(transcript)
    total_ms = len(segments) * SEGMENT_DURATION_MS

    return VideoTranscriptResult(
        video_id=video_id or "unknown",
        title=f"Video {video_id} - {topic}",
        duration_label=format_duration_label(total_ms),
        transcript=transcript,
        segments=segments,
        is_authentic=False,
        method="simulated",
    )
