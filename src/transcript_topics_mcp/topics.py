"""Loading topics documents and tracking the selected topic."""

import logging

from pydantic import ValidationError

from transcript_topics_mcp.alignment import resolve_ranges
from transcript_topics_mcp.errors import InvalidTopicsError
from transcript_topics_mcp.models import (
    SelectedTopic,
    TimeRange,
    Topic,
    TopicCategory,
    TopicsDocument,
)

logger = logging.getLogger(__name__)


def load_topics(raw: str | bytes) -> TopicsDocument:
    """Parse a ``{specific_topics, general_topics}`` JSON document."""
    try:
        doc = TopicsDocument.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidTopicsError(f"Invalid topics JSON: {e.error_count()} error(s)") from e
    logger.info(
        f"Loaded {len(doc.specific_topics)} specific and "
        f"{len(doc.general_topics)} general topics"
    )
    return doc


class TopicSelection:
    """Either nothing selected, or one topic with its resolved ranges."""

    def __init__(self):
        self.selected: SelectedTopic | None = None

    def toggle(self, topic: Topic, category: TopicCategory) -> SelectedTopic | None:
        """Select ``topic``, or deselect it if a topic of that name is selected."""
        if self.selected is not None and self.selected.topic.name == topic.name:
            self.selected = None
            return None
        self.selected = SelectedTopic(
            topic=topic.model_copy(update={"category": category}),
            category=category,
            ranges=resolve_ranges(topic),
        )
        return self.selected

    def clear(self) -> None:
        self.selected = None

    @property
    def ranges(self) -> list[TimeRange] | None:
        if self.selected is None:
            return None
        return self.selected.ranges

    @property
    def topic(self) -> Topic | None:
        return self.selected.topic if self.selected else None
