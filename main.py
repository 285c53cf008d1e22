import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from analyzer import analyze, merge_feed, realtime_metrics
from config import get_settings
from errors import AnalyticsError
from ingestion import load_feed
from labels import FeedKind
from records import MentionRecord, MessageRecord
from responses import DashboardResponse, RealtimeMetrics, UnifiedFeedItem

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mention Analytics"
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # in dev, allow all
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SnapshotRequest(BaseModel):
    mentions: List[MentionRecord] = []
    messages: List[MessageRecord] = []


class FeedRequest(BaseModel):
    items: List[Dict[str, Any]] = []


@app.get('/')
def root():
    return {
        "message": "Welcome to the Mention Analytics API",
        "endpoints": {
            "/analytics": "Dashboard views for a mentions/messages snapshot",
            "/analytics/feed": "Unified live feed from raw mention and message records",
            "/analytics/realtime": "Mentions and messages seen in the last hour",
            "/docs": "API documentation"
        }
    }


@app.post(
    '/analytics',
    response_model=DashboardResponse,
    summary="Aggregate a snapshot into dashboard views"
)
def analytics_endpoint(snapshot: SnapshotRequest):
    """
    Compute every dashboard view over one snapshot of mentions and messages.

    **Returns:**
    - Engagement totals and average sentiment
    - Platform and sentiment distributions
    - Hourly activity
    - Channel performance
    - Top content and trending hashtags
    - A short live feed mixing recent mentions and messages
    """
    try:
        result = analyze(snapshot.mentions, snapshot.messages, settings)
        logger.info(
            "Analyzed snapshot of %d mentions and %d messages",
            len(snapshot.mentions), len(snapshot.messages)
        )
        return result

    except AnalyticsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Analytics failed")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


@app.post(
    '/analytics/feed',
    response_model=List[UnifiedFeedItem],
    summary="Merge raw records into the live feed"
)
def feed_endpoint(
    request: FeedRequest,
    limit: int = Query(
        settings.feed_limit,
        description="Maximum number of feed items",
        ge=0
    )
):
    """
    Classify raw records as mentions (they carry `platform`) or messages
    (they carry `channel`) and return the newest items first.
    """
    try:
        records = load_feed(request.items)
        mentions = [r for r in records if r.kind == FeedKind.MENTION]
        messages = [r for r in records if r.kind == FeedKind.MESSAGE]

        return merge_feed(
            mentions,
            messages,
            mention_sample=settings.feed_mention_sample,
            message_sample=settings.feed_message_sample,
            limit=limit
        )

    except AnalyticsError as e:
        logger.warning("Rejected feed payload: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Feed merge failed")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )


@app.post(
    '/analytics/realtime',
    response_model=RealtimeMetrics,
    summary="Activity in the last hour"
)
def realtime_endpoint(snapshot: SnapshotRequest):
    return realtime_metrics(snapshot.mentions, snapshot.messages)
