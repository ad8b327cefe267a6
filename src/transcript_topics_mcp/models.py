"""Data models for transcripts, topics and segment groups."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class TopicCategory(str, Enum):
    SPECIFIC = "specific"
    GENERAL = "general"


class TranscriptSegment(BaseModel):
    """One time-coded span of transcript text.

    ``index`` is the position in the parsed transcript and identifies the
    segment when deciding adjacency.
    """

    model_config = ConfigDict(frozen=True)

    start_time: int
    end_time: int
    text: str
    index: int = 0


class TimeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int


class TopicTimeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str
    end: str


class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    information: str = ""
    key_quotes: list[str] = []
    time_ranges: list[TopicTimeRange] = []
    category: TopicCategory | None = None


class TopicsDocument(BaseModel):
    specific_topics: list[Topic] = []
    general_topics: list[Topic] = []

    def topics_for(self, category: TopicCategory) -> list[Topic]:
        if category == TopicCategory.SPECIFIC:
            return self.specific_topics
        return self.general_topics

    def find(self, name: str, category: TopicCategory) -> Topic | None:
        for topic in self.topics_for(category):
            if topic.name == name:
                return topic
        return None

    @property
    def is_empty(self) -> bool:
        return not self.specific_topics and not self.general_topics


class SegmentGroup(BaseModel):
    """A run of segments adjacent in the unfiltered transcript."""

    segments: list[TranscriptSegment]

    @computed_field
    @property
    def first_segment(self) -> TranscriptSegment:
        return self.segments[0]

    @computed_field
    @property
    def last_segment(self) -> TranscriptSegment:
        return self.segments[-1]


class SelectedTopic(BaseModel):
    topic: Topic
    category: TopicCategory
    ranges: list[TimeRange] = []
