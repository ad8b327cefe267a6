"""Plain-text renderings of the current view, topic info and prompts."""

from transcript_topics_mcp.models import SegmentGroup, Topic, TranscriptSegment
from transcript_topics_mcp.utils import format_time

DEFAULT_GAP_SECONDS = 120

BLOG_ARTICLE_TEMPLATE = """You are an experienced writer. Write a blog article about "{{topic}}" based on the transcript excerpt below.

Time ranges covered: {{time_range}}

Additional context:
{{additional_context}}

Transcript:
{{transcript}}

Keep the speaker's own wording for any quotes and do not invent facts that are not in the transcript."""

SUBTOPICS_TWEETS_TEMPLATE = """Break the topic "{{topic}}" into its subtopics using the transcript excerpt below, and write one tweet (max 280 characters) per subtopic.

Time ranges covered: {{time_range}}

Additional context:
{{additional_context}}

Transcript:
{{transcript}}

Return a numbered list: subtopic title, one-sentence summary, tweet."""

PROMPT_TEMPLATES = {
    "blog_article": BLOG_ARTICLE_TEMPLATE,
    "subtopics_tweets": SUBTOPICS_TWEETS_TEMPLATE,
}

View = list[TranscriptSegment] | list[SegmentGroup]


def time_span(start: int, end: int) -> str:
    return f"{format_time(start)}-{format_time(end)}"


def is_significant_gap(
    current: TranscriptSegment,
    previous: TranscriptSegment,
    threshold: int = DEFAULT_GAP_SECONDS,
) -> bool:
    return current.start_time - previous.end_time > threshold


def render_view(view: View, gap_threshold: int = DEFAULT_GAP_SECONDS) -> str:
    """Render the displayed content as copyable text.

    Groups get one header for the whole run, with a ``[MM:SS]`` marker
    before any member that follows a gap longer than ``gap_threshold``.
    """
    out = ""
    for item in view:
        if isinstance(item, SegmentGroup):
            out += time_span(item.first_segment.start_time, item.last_segment.end_time) + "\n"
            previous = None
            for seg in item.segments:
                if previous is not None and is_significant_gap(seg, previous, gap_threshold):
                    out += f"\n[{format_time(seg.start_time)}]\n"
                out += seg.text + "\n"
                previous = seg
            out += "\n"
        else:
            out += time_span(item.start_time, item.end_time) + "\n"
            out += item.text + "\n\n"
    return out.strip()


def view_text(view: View) -> str:
    """Segment text only, one line per segment."""
    lines = []
    for item in view:
        members = item.segments if isinstance(item, SegmentGroup) else [item]
        lines.extend(seg.text for seg in members)
    return "".join(line + "\n" for line in lines)


def format_topic_ranges(topic: Topic, sep: str = ", ") -> str:
    return sep.join(f"{r.start} - {r.end}" for r in topic.time_ranges)


def render_topic_info(topic: Topic) -> str:
    quotes = "\n".join(f"- {q}" for q in topic.key_quotes)
    ranges = "\n".join(f"- {r.start} - {r.end}" for r in topic.time_ranges)
    return (
        f"Topic: {topic.name}\n\n"
        f"Information:\n{topic.information}\n\n"
        f"Key Quotes:\n{quotes}\n\n"
        f"Time Ranges:\n{ranges}\n"
    )


def fill_prompt(template: str, topic: Topic, view: View) -> str:
    """Substitute the topic and the view text into a prompt template.

    Only the first occurrence of each placeholder is replaced.
    """
    return (
        template
        .replace("{{topic}}", topic.name, 1)
        .replace("{{time_range}}", format_topic_ranges(topic), 1)
        .replace("{{transcript}}", view_text(view), 1)
        .replace("{{additional_context}}", topic.information or "", 1)
    )
