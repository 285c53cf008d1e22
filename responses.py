from typing import List
from datetime import datetime
from pydantic import BaseModel
from labels import FeedKind
from records import MentionRecord

class PlatformShare(BaseModel):
    platform: str
    count: int
    percentage: float  # share of all mentions, 0-100

class SentimentDistribution(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

class HourlyActivity(BaseModel):
    hour: str  # "9:00"
    hour_of_day: int
    mention_count: int
    average_sentiment: float

class ChannelPerformance(BaseModel):
    channel: str
    count: int
    average_sentiment_score: float

class HashtagCount(BaseModel):
    tag: str
    count: int

class UnifiedFeedItem(BaseModel):
    id: str
    kind: FeedKind
    timestamp: datetime
    source_label: str  # platform for mentions, channel for messages
    text: str
    sentiment_score: float
    emotion: str

class EngagementSummary(BaseModel):
    total_mentions: int
    total_engagement: int  # likes + shares + comments
    total_reach: int
    average_sentiment: float

class RealtimeMetrics(BaseModel):
    mentions_per_hour: int
    messages_per_hour: int
    window_end: datetime

class DashboardResponse(BaseModel):
    engagement: EngagementSummary
    platform_distribution: List[PlatformShare]
    sentiment_distribution: SentimentDistribution
    hourly_activity: List[HourlyActivity]
    channel_performance: List[ChannelPerformance]
    top_content: List[MentionRecord]
    trending_hashtags: List[HashtagCount]
    live_feed: List[UnifiedFeedItem]

