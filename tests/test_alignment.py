"""Tests for range resolution, matching and grouping."""

from transcript_topics_mcp.alignment import (
    build_view,
    group_consecutive,
    in_range,
    resolve_ranges,
)
from transcript_topics_mcp.models import (
    SegmentGroup,
    TimeRange,
    Topic,
    TopicTimeRange,
    TranscriptSegment,
)
from transcript_topics_mcp.parser import parse_transcript


def _seg(start, end, index=0):
    return TranscriptSegment(start_time=start, end_time=end, text="", index=index)


class TestResolveRanges:
    def test_preserves_order(self):
        topic = Topic(
            name="t",
            time_ranges=[
                TopicTimeRange(start="10:00", end="11:00"),
                TopicTimeRange(start="00:30", end="01:00:00"),
            ],
        )
        assert resolve_ranges(topic) == [
            TimeRange(start=600, end=660),
            TimeRange(start=30, end=3600),
        ]

    def test_no_ranges(self):
        assert resolve_ranges(Topic(name="t")) == []


class TestInRange:
    def test_start_inside(self):
        assert in_range(_seg(5, 50), [TimeRange(start=0, end=10)])

    def test_end_inside(self):
        assert in_range(_seg(0, 5), [TimeRange(start=5, end=10)])

    def test_segment_contains_range(self):
        assert in_range(_seg(0, 100), [TimeRange(start=10, end=20)])

    def test_exact_bounds(self):
        assert in_range(_seg(10, 20), [TimeRange(start=10, end=20)])

    def test_no_overlap(self):
        assert not in_range(_seg(0, 5), [TimeRange(start=6, end=10)])

    def test_any_range_matches(self):
        ranges = [TimeRange(start=100, end=200), TimeRange(start=0, end=3)]
        assert in_range(_seg(2, 4), ranges)

    def test_no_topic_selected(self):
        assert not in_range(_seg(0, 5), None)

    def test_empty_ranges(self):
        assert not in_range(_seg(0, 5), [])

    def test_inverted_range_accepted(self):
        assert not in_range(_seg(50, 60), [TimeRange(start=20, end=10)])

    def test_topic_range_against_parsed_segments(self):
        segments = parse_transcript("00:00-00:05\nHello\n00:05-00:10\nWorld")
        ranges = resolve_ranges(
            Topic(name="t", time_ranges=[TopicTimeRange(start="00:00", end="00:04")])
        )
        assert in_range(segments[0], ranges)
        assert not in_range(segments[1], ranges)

    def test_shared_boundary_matches_inclusively(self):
        segments = parse_transcript("00:00-00:05\nHello\n00:05-00:10\nWorld")
        ranges = resolve_ranges(
            Topic(name="t", time_ranges=[TopicTimeRange(start="00:00", end="00:06")])
        )
        assert in_range(segments[0], ranges)
        # starts at 5, inside [0, 6]
        assert in_range(segments[1], ranges)


class TestGroupConsecutive:
    def test_empty_filtered(self, four_segments):
        assert group_consecutive(four_segments, []) == []

    def test_gap_splits_groups(self, four_segments):
        filtered = [four_segments[0], four_segments[1], four_segments[3]]
        groups = group_consecutive(four_segments, filtered)
        assert [[s.index for s in g.segments] for g in groups] == [[0, 1], [3]]
        assert groups[0].first_segment == four_segments[0]
        assert groups[0].last_segment == four_segments[1]
        assert groups[1].first_segment == groups[1].last_segment == four_segments[3]

    def test_all_adjacent(self, four_segments):
        groups = group_consecutive(four_segments, four_segments)
        assert len(groups) == 1
        assert groups[0].segments == four_segments

    def test_none_adjacent(self, four_segments):
        filtered = [four_segments[0], four_segments[2]]
        assert len(group_consecutive(four_segments, filtered)) == 2

    def test_segment_not_in_transcript_starts_new_group(self, four_segments):
        stranger = TranscriptSegment(start_time=5, end_time=10, text="other", index=1)
        groups = group_consecutive(four_segments, [four_segments[0], stranger, four_segments[2]])
        assert len(groups) == 3

    def test_adjacent_groups_never_touch(self, four_segments):
        for filtered in (
            four_segments,
            [four_segments[0], four_segments[2], four_segments[3]],
            [four_segments[1], four_segments[3]],
        ):
            groups = group_consecutive(four_segments, filtered)
            for left, right in zip(groups, groups[1:]):
                assert right.first_segment.index - left.last_segment.index != 1


class TestBuildView:
    def test_no_selection_returns_all_segments(self, sample_segments):
        view = build_view(sample_segments, None)
        assert view == sample_segments
        assert view is not sample_segments

    def test_selection_returns_groups(self, sample_segments):
        ranges = [TimeRange(start=6, end=12), TimeRange(start=185, end=190)]
        view = build_view(sample_segments, ranges)
        assert all(isinstance(g, SegmentGroup) for g in view)
        assert [[s.index for s in g.segments] for g in view] == [[1, 2], [4]]

    def test_selection_without_matches(self, sample_segments):
        assert build_view(sample_segments, [TimeRange(start=5000, end=6000)]) == []
