"""Aligning topic time ranges against transcript segments."""

from transcript_topics_mcp.models import SegmentGroup, TimeRange, Topic, TranscriptSegment
from transcript_topics_mcp.utils import parse_timestamp


def resolve_ranges(topic: Topic) -> list[TimeRange]:
    """Convert a topic's human-entered ranges to seconds, in order."""
    return [
        TimeRange(start=parse_timestamp(r.start), end=parse_timestamp(r.end))
        for r in topic.time_ranges
    ]


def in_range(segment: TranscriptSegment, ranges: list[TimeRange] | None) -> bool:
    """True if the segment overlaps any range, boundaries inclusive.

    ``ranges`` of None means no topic is selected, so nothing matches.
    """
    if ranges is None:
        return False
    for r in ranges:
        if (
            r.start <= segment.start_time <= r.end
            or r.start <= segment.end_time <= r.end
            or (segment.start_time <= r.start and segment.end_time >= r.end)
        ):
            return True
    return False


def _source_positions(all_segments: list[TranscriptSegment]) -> dict[int, int]:
    return {seg.index: pos for pos, seg in enumerate(all_segments)}


def group_consecutive(
    all_segments: list[TranscriptSegment],
    filtered_segments: list[TranscriptSegment],
) -> list[SegmentGroup]:
    """Group filtered segments into runs adjacent in ``all_segments``."""
    if not filtered_segments or not all_segments:
        return []

    positions = _source_positions(all_segments)

    def position(seg: TranscriptSegment) -> int | None:
        pos = positions.get(seg.index)
        if pos is None or all_segments[pos] != seg:
            return None
        return pos

    groups: list[SegmentGroup] = []
    current: list[TranscriptSegment] = []
    prev_pos: int | None = None

    for seg in filtered_segments:
        pos = position(seg)
        if current and not (pos is not None and prev_pos is not None and pos == prev_pos + 1):
            groups.append(SegmentGroup(segments=current))
            current = []
        current.append(seg)
        prev_pos = pos

    if current:
        groups.append(SegmentGroup(segments=current))
    return groups


def build_view(
    segments: list[TranscriptSegment],
    ranges: list[TimeRange] | None,
) -> list[TranscriptSegment] | list[SegmentGroup]:
    """Displayed content: every segment, or the matching groups for a topic."""
    if ranges is None:
        return list(segments)
    matching = [seg for seg in segments if in_range(seg, ranges)]
    return group_consecutive(segments, matching)
