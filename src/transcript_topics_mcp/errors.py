"""Exceptions raised by the engine."""


class TranscriptTopicsError(Exception):
    """Base class for engine errors."""


class InvalidTopicsError(TranscriptTopicsError, ValueError):
    """The topics document is not valid JSON or has the wrong shape."""


class TopicNotFoundError(TranscriptTopicsError, LookupError):
    def __init__(self, name: str, category: str):
        super().__init__(f"No {category} topic named '{name}'")
        self.name = name
        self.category = category
