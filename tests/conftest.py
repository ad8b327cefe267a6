"""Shared test fixtures."""

import json

import pytest

from transcript_topics_mcp.models import TranscriptSegment
from transcript_topics_mcp.parser import parse_transcript

SAMPLE_TRANSCRIPT = """Episode 12 notes
00:00-00:05 Hello and welcome
to the show
00:05-00:10 Today we talk about parsers

00:10-00:30 First, what is a token?
00:30-03:00 A long tangent about coffee
03:00-03:20 Back to parsers: grammars
"""


@pytest.fixture
def sample_text():
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def sample_segments():
    return parse_transcript(SAMPLE_TRANSCRIPT)


@pytest.fixture
def four_segments():
    return [
        TranscriptSegment(start_time=0, end_time=5, text="a", index=0),
        TranscriptSegment(start_time=5, end_time=10, text="b", index=1),
        TranscriptSegment(start_time=10, end_time=15, text="c", index=2),
        TranscriptSegment(start_time=15, end_time=20, text="d", index=3),
    ]


@pytest.fixture
def topics_doc():
    return {
        "specific_topics": [
            {
                "name": "Parsers",
                "information": "How the parser is built",
                "key_quotes": ["grammars"],
                "time_ranges": [
                    {"start": "00:06", "end": "00:12"},
                    {"start": "03:05", "end": "03:10"},
                ],
            },
            {
                "name": "Intro",
                "information": "",
                "key_quotes": [],
                "time_ranges": [{"start": "00:00", "end": "00:04"}],
            },
        ],
        "general_topics": [
            {
                "name": "Coffee",
                "information": "Off-topic",
                "key_quotes": ["coffee"],
                "time_ranges": [{"start": "01:00", "end": "02:00"}],
            }
        ],
    }


@pytest.fixture
def topics_json(topics_doc):
    return json.dumps(topics_doc)
