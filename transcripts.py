"""
transcripts.py — Optimize an already-published video from its transcript.
"""

import logging
from typing import Optional

from youtube_transcript_api import YouTubeTranscriptApi

import optimizer

logger = logging.getLogger(__name__)


def fetch_transcript(video_id: str) -> dict:
    """
    Fetch the auto-generated or manual transcript for a video.
    Uses youtube-transcript-api >= 1.0.0 instance-based API.
    """
    if not video_id or not video_id.strip():
        raise optimizer.ValidationError("video_id is required")

    try:
        ytt = YouTubeTranscriptApi()
        fetched = ytt.fetch(video_id)
        raw = fetched.to_raw_data()
    except Exception as e:
        error_msg = str(e)
        if "PoToken" in error_msg:
            raise ValueError(
                f"YouTube requires bot-verification for video {video_id}. "
                "This affects some high-traffic videos. Try a different video."
            ) from e
        raise ValueError(f"Could not fetch transcript for {video_id}: {error_msg}") from e

    transcript_text = " ".join(seg.get("text", "").strip() for seg in raw).strip()
    logger.info(f"Fetched transcript for {video_id}: {len(raw)} segments")

    return {
        "video_id": video_id,
        "transcript_text": transcript_text,
        "word_count": len(transcript_text.split()) if transcript_text else 0,
        "segment_count": len(raw),
    }


def optimize_video_transcript(
    video_id: str,
    concept: str,
    keywords: Optional[dict] = None,
    target_duration: float = 10,
    content_style: str = "tutorial",
    optimization_level: str = "moderate",
) -> dict:
    """Run the script optimizer over a video's spoken transcript."""
    if not isinstance(concept, str) or not concept.strip():
        raise optimizer.ValidationError("concept is required")

    transcript = fetch_transcript(video_id)
    if not transcript["transcript_text"]:
        raise ValueError(f"Transcript for {video_id} is empty.")

    report = optimizer.optimize_script(
        script=transcript["transcript_text"],
        concept=concept,
        keywords=keywords,
        target_duration=target_duration,
        content_style=content_style,
        optimization_level=optimization_level,
    )
    return {
        "video_id": video_id,
        "segment_count": transcript["segment_count"],
        **report,
    }
