from enum import Enum

class SentimentLabel(str, Enum):
    """Sentiment buckets for a numeric score"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

class FeedKind(str, Enum):
    """Record shapes that can appear in the unified feed"""
    MENTION = "mention"
    MESSAGE = "message"
