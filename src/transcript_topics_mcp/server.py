"""Transcript Topics MCP Server."""

import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from pydantic import Field
from mcp.server.fastmcp import FastMCP

from transcript_topics_mcp.cache import SessionCache
from transcript_topics_mcp.config import Settings, Transport
from transcript_topics_mcp.errors import TranscriptTopicsError
from transcript_topics_mcp.export import (
    DEFAULT_GAP_SECONDS,
    PROMPT_TEMPLATES,
    View,
    fill_prompt,
    format_topic_ranges,
    render_topic_info,
    render_view,
    time_span,
)
from transcript_topics_mcp.models import SegmentGroup, TopicCategory
from transcript_topics_mcp.session import Session
from transcript_topics_mcp.utils import format_time

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("transcript-topics-mcp")

# Module-level state
_sessions = None
_settings = None
_rate_window = deque()

# Tools only touch in-memory session state
TOOL_ANNOTATIONS = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "openWorldHint": False,
}

SessionId = Annotated[str, Field(description="Session identifier; each session holds one transcript, one topics document and one selection")]


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _sessions, _settings, _rate_window
    _settings = Settings()
    _sessions = SessionCache(
        max_size=_settings.session_max_size,
        ttl=_settings.session_ttl_seconds,
        debug_parsing=_settings.debug_parsing,
    )
    _rate_window = deque()
    if _settings.debug_parsing:
        logging.getLogger("transcript_topics_mcp").setLevel(logging.DEBUG)

    logger.info("Server started")
    yield
    logger.info("Server stopped")


mcp = FastMCP(
    "Transcript Topics",
    instructions="Parse timestamped transcripts and align topics against them",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 60)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


def _session(session_id: str) -> Session:
    return _sessions.get_or_create(session_id)


def _gap_threshold() -> int:
    return _settings.gap_threshold_seconds if _settings else DEFAULT_GAP_SECONDS


def _view_to_markdown(view: View) -> str:
    """Format the view as markdown blocks with time spans."""
    blocks = []
    for item in view:
        if isinstance(item, SegmentGroup):
            span = time_span(item.first_segment.start_time, item.last_segment.end_time)
            text = " ".join(seg.text for seg in item.segments)
        else:
            span = time_span(item.start_time, item.end_time)
            text = item.text
        blocks.append(f"**[{span}]** {text}")
    return "\n\n".join(blocks)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def load_transcript(
    text: Annotated[str, Field(description="Transcript text; lines may carry a MM:SS-MM:SS or HH:MM:SS-HH:MM:SS marker")],
    session_id: SessionId = "default",
) -> str:
    """Load and parse a timestamped transcript into segments."""
    _check_rate_limit()

    segments = _session(session_id).load_transcript(text)
    if not segments:
        return "Transcript loaded, but no timestamp markers were found (0 segments)."

    return (
        f"## Transcript loaded\n"
        f"**Segments:** {len(segments)} | "
        f"**Span:** {time_span(segments[0].start_time, segments[-1].end_time)}"
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def load_topics(
    topics_json: Annotated[str, Field(description='Topics JSON document: {"specific_topics": [...], "general_topics": [...]}')],
    session_id: SessionId = "default",
) -> str:
    """Load a topics document. Clears the current topic selection."""
    _check_rate_limit()

    try:
        doc = _session(session_id).load_topics(topics_json)
    except TranscriptTopicsError as e:
        return f"Error: {e}"

    return (
        f"## Topics loaded\n"
        f"**Specific:** {len(doc.specific_topics)} | **General:** {len(doc.general_topics)}"
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def list_topics(session_id: SessionId = "default") -> str:
    """List the loaded topics by category, marking the selected one."""
    _check_rate_limit()

    session = _session(session_id)
    if session.topics.is_empty:
        return "No topics loaded."

    selected = session.selection.topic
    parts = []
    for category in TopicCategory:
        lines = []
        for topic in session.topics.topics_for(category):
            marker = "> " if selected and selected.name == topic.name else "- "
            lines.append(f"{marker}**{topic.name}** ({format_topic_ranges(topic)})")
        parts.append(f"### {category.value.title()} Topics\n" + ("\n".join(lines) or "_none_"))
    return "\n\n".join(parts)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def select_topic(
    name: Annotated[str, Field(description="Topic name exactly as it appears in the topics document")],
    category: Annotated[Literal["specific", "general"], Field(description="Category the topic belongs to")] = "specific",
    session_id: SessionId = "default",
) -> str:
    """Select a topic to filter the transcript. Selecting the selected topic again deselects it."""
    _check_rate_limit()

    session = _session(session_id)
    try:
        selected = session.select_topic(name, TopicCategory(category))
    except TranscriptTopicsError as e:
        return f"Error: {e}"

    if selected is None:
        return f"Deselected '{name}'. Showing the full transcript."

    view = session.view()
    return (
        f"Selected '{name}' ({category}): "
        f"{len(selected.ranges)} range(s), {len(view)} matching block(s)."
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def clear_selection(session_id: SessionId = "default") -> str:
    """Clear the topic selection so the full transcript is shown."""
    _check_rate_limit()

    _session(session_id).selection.clear()
    return "Selection cleared."


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_view(
    session_id: SessionId = "default",
    format: Annotated[Literal["text", "markdown"], Field(description="text for the copyable plain-text view, markdown for one block per segment or group")] = "text",
) -> str:
    """Get the current view: all segments, or the blocks matching the selected topic."""
    _check_rate_limit()

    session = _session(session_id)
    if not session.segments:
        return "No transcript loaded."

    view = session.view()
    if not view:
        return f"No segments match '{session.selection.topic.name}'."

    if format == "markdown":
        return _view_to_markdown(view)
    return render_view(view, gap_threshold=_gap_threshold())


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_topic_info(session_id: SessionId = "default") -> str:
    """Get the selected topic's information, key quotes and time ranges."""
    _check_rate_limit()

    topic = _session(session_id).selection.topic
    if topic is None:
        return "Error: No topic selected."
    return render_topic_info(topic)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def build_prompt(
    kind: Annotated[Literal["blog_article", "subtopics_tweets"], Field(description="Prompt template to fill")],
    session_id: SessionId = "default",
) -> str:
    """Fill a writing prompt with the selected topic and its transcript excerpt."""
    _check_rate_limit()

    session = _session(session_id)
    topic = session.selection.topic
    if topic is None:
        return "Error: Please select a topic first."
    return fill_prompt(PROMPT_TEMPLATES[kind], topic, session.view())


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def debug_segments(
    session_id: SessionId = "default",
    limit: Annotated[int, Field(ge=1, le=1000, description="Maximum number of segments to list")] = 50,
) -> str:
    """List parsed segments with raw and formatted times, for checking the parser."""
    _check_rate_limit()

    segments = _session(session_id).segments
    lines = [f"## Parsed Transcript Segments ({len(segments)})"]
    for seg in segments[:limit]:
        lines.append(
            f"- **{seg.index}** {format_time(seg.start_time)} ({seg.start_time}s) - "
            f"{format_time(seg.end_time)} ({seg.end_time}s): {seg.text}"
        )
    if len(segments) > limit:
        lines.append(f"... {len(segments) - limit} more")
    return "\n".join(lines)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def session_stats() -> str:
    """Session cache statistics."""
    stats = _sessions.stats()
    return (
        f"**Sessions:** {stats['size']}/{stats['max_size']} | "
        f"**Hits:** {stats['hits']} | **Misses:** {stats['misses']} | "
        f"**Hit rate:** {stats['hit_rate']}%"
    )


# -- MCP Prompts --


@mcp.prompt()
def analyze_topic(
    topic: Annotated[str, Field(description="Name of the topic to analyze")],
) -> str:
    """Walk through a topic's transcript excerpts."""
    return f"""Please use the select_topic tool to select the topic "{topic}", then use get_view to read the matching transcript blocks and get_topic_info for its notes.

Then present:
1. What is said about "{topic}" in each block, with its time span
2. Whether the key quotes actually appear in those blocks
3. Time ranges that matched no transcript text"""


# -- MCP Resources --


@mcp.resource("transcript-topics://help")
def help_resource() -> str:
    """Usage guide for the Transcript Topics MCP server."""
    return """# Transcript Topics MCP Server - Help Guide

## Transcript format
Any line may contain a time-range marker: `MM:SS-MM:SS` or `HH:MM:SS-HH:MM:SS`.
The marker starts a new segment; following lines without a marker are appended to it.

```
00:00-00:05 Hello and welcome
to the show
00:05-00:10 Today we talk about parsers
```

## Topics format
```json
{"specific_topics": [{"name": "Parsers", "information": "...", "key_quotes": ["..."],
  "time_ranges": [{"start": "00:04", "end": "00:09"}]}],
 "general_topics": []}
```

## Tools
- load_transcript / load_topics: load input into a session
- list_topics, select_topic (toggle), clear_selection
- get_view: full transcript, or matching blocks for the selected topic
- get_topic_info, build_prompt (blog_article, subtopics_tweets)
- debug_segments, session_stats
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
