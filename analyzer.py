import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from config import Settings, get_settings
from errors import UnclassifiableFeedItemError
from labels import FeedKind, SentimentLabel
from records import FeedRecord, MentionRecord, MessageRecord
from responses import *

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Scores inside (-0.1, 0.1) are treated as noise
SENTIMENT_BAND = 0.1


@dataclass(frozen=True)
class DistributionEntry:
    key: Hashable
    count: int
    percentage: float


@dataclass
class RunningMean:
    """Count, total and mean of a numeric field, kept in step on every add."""

    count: int = 0
    total: float = 0.0
    average: float = 0.0

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.average = self.total / self.count


@dataclass(frozen=True)
class GroupMean:
    key: Hashable
    count: int
    average: float


def get_sentiment_label(score: float) -> SentimentLabel:
    """Convert a sentiment score to its label"""
    if score > SENTIMENT_BAND:
        return SentimentLabel.POSITIVE
    elif score < -SENTIMENT_BAND:
        return SentimentLabel.NEGATIVE
    else:
        return SentimentLabel.NEUTRAL


def build_distribution(records: Sequence[T], key: Callable[[T], Hashable]) -> List[DistributionEntry]:
    """
    Count records per distinct key and compute each key's share of the total.

    Entries come out in the order their key was first seen. An empty input
    gives an empty list.
    """
    counts = Counter(key(record) for record in records)
    total = len(records)
    return [
        DistributionEntry(
            key=value,
            count=count,
            percentage=(count / total * 100) if total > 0 else 0.0,
        )
        for value, count in counts.items()
    ]


def aggregate_mean(
    records: Iterable[T],
    key: Callable[[T], Hashable],
    value: Callable[[T], float],
) -> List[GroupMean]:
    """
    Group records by key and average a numeric field per group.

    Groups are returned in first-seen order.
    """
    groups: Dict[Hashable, RunningMean] = {}
    for record in records:
        groups.setdefault(key(record), RunningMean()).add(value(record))
    return [GroupMean(key=k, count=g.count, average=g.average) for k, g in groups.items()]


def top_n(records: Iterable[T], score: Callable[[T], float], n: int) -> List[T]:
    """Highest scoring records first; equal scores keep their input order."""
    if n < 0:
        raise ValueError("n must be non-negative")
    # sorted() is stable, also with reverse=True
    return sorted(records, key=score, reverse=True)[:n]


def count_frequencies(
    records: Iterable[T],
    tags: Callable[[T], Iterable[Hashable]],
    n: int,
) -> List[Tuple[Hashable, int]]:
    """
    Count every tag across all records and return the n most frequent.

    Ties are broken by the order in which tags were first seen.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    counter = Counter()
    for record in records:
        counter.update(tags(record))
    return counter.most_common(n)


def hour_of_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> int:
    # astimezone(None) converts to host local time
    return timestamp.astimezone(tz).hour


def engagement_score(mention: MentionRecord) -> int:
    return mention.metrics.likes + mention.metrics.shares


def platform_distribution(mentions: Sequence[MentionRecord]) -> List[PlatformShare]:
    return [
        PlatformShare(platform=entry.key, count=entry.count, percentage=entry.percentage)
        for entry in build_distribution(mentions, lambda m: m.platform)
    ]


def sentiment_distribution(mentions: Iterable[MentionRecord]) -> SentimentDistribution:
    counts = Counter(get_sentiment_label(m.sentiment.score) for m in mentions)
    return SentimentDistribution(
        positive=counts[SentimentLabel.POSITIVE],
        negative=counts[SentimentLabel.NEGATIVE],
        neutral=counts[SentimentLabel.NEUTRAL],
    )


def hourly_activity(mentions: Iterable[MentionRecord], tz: Optional[tzinfo] = None) -> List[HourlyActivity]:
    """
    Mention volume and mean sentiment per hour of the day.

    Hours are calendar hours in ``tz`` (host local time when None) across the
    whole snapshot, not a trailing window. Hours without mentions are left out
    and the result is ordered by the numeric hour.
    """
    groups = aggregate_mean(
        mentions,
        key=lambda m: hour_of_day(m.timestamp, tz),
        value=lambda m: m.sentiment.score,
    )
    groups.sort(key=lambda g: g.key)
    return [
        HourlyActivity(
            hour=f"{g.key}:00",
            hour_of_day=g.key,
            mention_count=g.count,
            average_sentiment=g.average,
        )
        for g in groups
    ]


def channel_performance(messages: Iterable[MessageRecord]) -> List[ChannelPerformance]:
    return [
        ChannelPerformance(channel=g.key, count=g.count, average_sentiment_score=g.average)
        for g in aggregate_mean(messages, key=lambda m: m.channel, value=lambda m: m.sentiment_score)
    ]


def top_content(mentions: Iterable[MentionRecord], n: int = 5) -> List[MentionRecord]:
    return top_n(mentions, engagement_score, n)


def trending_hashtags(mentions: Iterable[MentionRecord], n: int = 8) -> List[HashtagCount]:
    return [
        HashtagCount(tag=tag, count=count)
        for tag, count in count_frequencies(mentions, lambda m: m.hashtags, n)
    ]


def to_feed_item(record: FeedRecord) -> UnifiedFeedItem:
    if record.kind == FeedKind.MENTION:
        return UnifiedFeedItem(
            id=record.id,
            kind=FeedKind.MENTION,
            timestamp=record.timestamp,
            source_label=record.platform,
            text=record.content.text,
            sentiment_score=record.sentiment.score,
            emotion=record.sentiment.emotion,
        )
    if record.kind == FeedKind.MESSAGE:
        return UnifiedFeedItem(
            id=record.id,
            kind=FeedKind.MESSAGE,
            timestamp=record.timestamp,
            source_label=record.channel,
            text=record.message,
            sentiment_score=record.sentiment_score,
            emotion=record.emotion,
        )
    raise UnclassifiableFeedItemError()


def merge_feed(
    mentions: Sequence[MentionRecord],
    messages: Sequence[MessageRecord],
    mention_sample: int = 3,
    message_sample: int = 2,
    limit: int = 8,
) -> List[UnifiedFeedItem]:
    """
    Newest-first feed built from a recent sample of each source.

    Only the first ``mention_sample`` mentions and ``message_sample`` messages
    are considered, not the full history.
    """
    if min(mention_sample, message_sample, limit) < 0:
        raise ValueError("sample sizes and limit must be non-negative")

    items = [to_feed_item(r) for r in list(mentions[:mention_sample]) + list(messages[:message_sample])]
    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:limit]


def engagement_summary(mentions: Sequence[MentionRecord]) -> EngagementSummary:
    total_mentions = len(mentions)
    total_engagement = sum(m.metrics.likes + m.metrics.shares + m.metrics.comments for m in mentions)
    total_reach = sum(m.metrics.reach for m in mentions)
    sentiment_sum = sum(m.sentiment.score for m in mentions)

    return EngagementSummary(
        total_mentions=total_mentions,
        total_engagement=total_engagement,
        total_reach=total_reach,
        average_sentiment=(sentiment_sum / total_mentions) if total_mentions > 0 else 0.0,
    )


def realtime_metrics(
    mentions: Iterable[MentionRecord],
    messages: Iterable[MessageRecord],
    now: Optional[datetime] = None,
) -> RealtimeMetrics:
    """Records in the snapshot newer than one hour before ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()
    cutoff = now - timedelta(hours=1)

    return RealtimeMetrics(
        mentions_per_hour=sum(1 for m in mentions if m.timestamp > cutoff),
        messages_per_hour=sum(1 for m in messages if m.timestamp > cutoff),
        window_end=now,
    )


def analyze(
    mentions: Sequence[MentionRecord],
    messages: Sequence[MessageRecord],
    settings: Optional[Settings] = None,
) -> DashboardResponse:
    if settings is None:
        settings = get_settings()

    response = DashboardResponse(
        engagement=engagement_summary(mentions),
        platform_distribution=platform_distribution(mentions),
        sentiment_distribution=sentiment_distribution(mentions),
        hourly_activity=hourly_activity(mentions, settings.tzinfo),
        channel_performance=channel_performance(messages),
        top_content=top_content(mentions, settings.top_content_limit),
        trending_hashtags=trending_hashtags(mentions, settings.hashtag_limit),
        live_feed=merge_feed(
            mentions,
            messages,
            mention_sample=settings.feed_mention_sample,
            message_sample=settings.feed_message_sample,
            limit=settings.feed_limit,
        ),
    )

    logger.debug(
        "Analyzed %d mentions and %d messages: %d platforms, %d active hours, %d channels",
        len(mentions), len(messages),
        len(response.platform_distribution),
        len(response.hourly_activity),
        len(response.channel_performance),
    )
    return response
