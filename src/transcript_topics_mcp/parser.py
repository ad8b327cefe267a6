"""Transcript text to time-coded segments."""

import re
from typing import Callable

from transcript_topics_mcp.models import TranscriptSegment
from transcript_topics_mcp.utils import parse_timestamp

# Optional hour on either side, independently: [HH:]MM:SS-[HH:]MM:SS
MARKER_PATTERN = re.compile(r"(?:(\d{2}):)?(\d{2}:\d{2})-(?:(\d{2}):)?(\d{2}:\d{2})")

DebugLog = Callable[..., None]


def _no_log(msg: str, *args) -> None:
    pass


def _marker_times(match: re.Match) -> tuple[int, int]:
    start_hours, start_rest, end_hours, end_rest = match.groups()
    start = f"{start_hours}:{start_rest}" if start_hours else start_rest
    end = f"{end_hours}:{end_rest}" if end_hours else end_rest
    return parse_timestamp(start), parse_timestamp(end)


def parse_transcript(text: str, log: DebugLog | None = None) -> list[TranscriptSegment]:
    """Split transcript text into segments, one per timestamp marker.

    Lines without a marker are appended to the open segment. Blank lines and
    text before the first marker are dropped. Only the first marker on a line
    counts; later ones stay in the text. Never raises.
    """
    log = log or _no_log
    segments: list[TranscriptSegment] = []
    current: dict | None = None

    for lineno, line in enumerate(text.split("\n"), start=1):
        match = MARKER_PATTERN.search(line)
        if match:
            log("Line %d: marker %s", lineno, match.group(0))
            if current is not None:
                segments.append(TranscriptSegment(**current))
            start_time, end_time = _marker_times(match)
            current = {
                "start_time": start_time,
                "end_time": end_time,
                "text": (line[:match.start()] + line[match.end():]).strip(),
                "index": len(segments),
            }
        elif current is not None and line.strip():
            log("Line %d: continuation", lineno)
            stripped = line.strip()
            current["text"] = f"{current['text']} {stripped}" if current["text"] else stripped
        else:
            log("Line %d: skipped", lineno)

    if current is not None:
        segments.append(TranscriptSegment(**current))

    log("Parsed %d segments", len(segments))
    return segments
