"""Per-client state: transcript, topics and the selected topic."""

import logging

from transcript_topics_mcp.alignment import build_view
from transcript_topics_mcp.errors import TopicNotFoundError
from transcript_topics_mcp.export import View
from transcript_topics_mcp.models import (
    SelectedTopic,
    TopicCategory,
    TopicsDocument,
    TranscriptSegment,
)
from transcript_topics_mcp.parser import parse_transcript
from transcript_topics_mcp.topics import TopicSelection, load_topics

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, session_id: str = "default", debug_parsing: bool = False):
        self.session_id = session_id
        self.debug_parsing = debug_parsing
        self.raw_transcript = ""
        self.segments: list[TranscriptSegment] = []
        self.topics = TopicsDocument()
        self.selection = TopicSelection()

    def load_transcript(self, text: str) -> list[TranscriptSegment]:
        log = logger.debug if self.debug_parsing else None
        self.raw_transcript = text
        self.segments = parse_transcript(text, log=log)
        logger.info(f"[{self.session_id}] transcript loaded: {len(self.segments)} segments")
        return self.segments

    def load_topics(self, raw: str | bytes) -> TopicsDocument:
        """Replace topics and reset the selection.

        On InvalidTopicsError the previous topics and selection are kept.
        """
        doc = load_topics(raw)
        self.topics = doc
        self.selection.clear()
        return doc

    def select_topic(self, name: str, category: TopicCategory) -> SelectedTopic | None:
        topic = self.topics.find(name, category)
        if topic is None:
            raise TopicNotFoundError(name, category.value)
        return self.selection.toggle(topic, category)

    def clear_transcript(self) -> None:
        self.raw_transcript = ""
        self.segments = []

    def clear_topics(self) -> None:
        self.topics = TopicsDocument()
        self.selection.clear()

    def view(self) -> View:
        return build_view(self.segments, self.selection.ranges)
