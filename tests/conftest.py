"""Shared record factories for the analytics tests."""

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from records import MentionRecord, MessageRecord

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def raw_mention(**overrides: Any) -> Dict[str, Any]:
    """A mention as the collector delivers it (camelCase JSON)."""
    data = {
        "id": "m1",
        "platform": "twitter",
        "timestamp": BASE_TIME.isoformat(),
        "author": {"displayName": "Jane Doe"},
        "content": {"text": "Loving the new release"},
        "sentiment": {"score": 0.6, "emotion": "joy"},
        "metrics": {"likes": 10, "shares": 2, "comments": 1, "reach": 1000},
        "hashtags": ["launch"],
    }
    data.update(overrides)
    return data


def raw_message(**overrides: Any) -> Dict[str, Any]:
    data = {
        "id": "c1",
        "timestamp": BASE_TIME.isoformat(),
        "channel": "email",
        "message": "Where is my order?",
        "sentimentScore": -0.4,
        "emotion": "frustration",
    }
    data.update(overrides)
    return data


def make_mention(
    id: str = "m1",
    platform: str = "twitter",
    timestamp: datetime = BASE_TIME,
    score: float = 0.6,
    emotion: str = "joy",
    likes: int = 10,
    shares: int = 2,
    comments: int = 1,
    reach: int = 1000,
    hashtags=(),
    text: str = "Loving the new release",
) -> MentionRecord:
    return MentionRecord(
        id=id,
        platform=platform,
        timestamp=timestamp,
        author={"display_name": "Jane Doe"},
        content={"text": text},
        sentiment={"score": score, "emotion": emotion},
        metrics={"likes": likes, "shares": shares, "comments": comments, "reach": reach},
        hashtags=hashtags,
    )


def make_message(
    id: str = "c1",
    channel: str = "email",
    timestamp: datetime = BASE_TIME,
    score: float = -0.4,
    emotion: str = "frustration",
    message: str = "Where is my order?",
) -> MessageRecord:
    return MessageRecord(
        id=id,
        channel=channel,
        timestamp=timestamp,
        message=message,
        sentiment_score=score,
        emotion=emotion,
    )


@pytest.fixture
def mentions():
    return [
        make_mention(id="m1", platform="twitter", score=0.6, hashtags=("launch", "ai")),
        make_mention(id="m2", platform="reddit", score=-0.5, hashtags=("launch",)),
        make_mention(id="m3", platform="twitter", score=0.05, hashtags=()),
        make_mention(id="m4", platform="instagram", score=0.3, hashtags=("ai", "launch", "beta")),
    ]


@pytest.fixture
def messages():
    return [
        make_message(id="c1", channel="email", score=-0.4),
        make_message(id="c2", channel="chat", score=0.8),
        make_message(id="c3", channel="email", score=0.2),
    ]
