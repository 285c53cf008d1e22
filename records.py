"""Typed input records for the analytics engine.

Both feeds arrive as camelCase JSON from the collector; every model accepts
the camelCase alias as well as the snake_case field name. Records are frozen:
the engine reads them but never writes to them.
"""
from datetime import datetime
from typing import Annotated, Any, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _as_aware(value: datetime) -> datetime:
    # naive timestamps are local wall-clock time
    if value.tzinfo is None:
        return value.astimezone()
    return value


def _id_as_str(value: Any) -> Any:
    # collectors send numeric ids; only ids are coerced
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Author(_Record):
    display_name: str = Field(alias="displayName")


class Content(_Record):
    text: str


class Sentiment(_Record):
    score: float
    emotion: str


class Metrics(_Record):
    likes: int = Field(ge=0)
    shares: int = Field(ge=0)
    comments: int = Field(ge=0)
    reach: int = Field(ge=0)


class MentionRecord(_Record):
    """A public social-style mention of the brand."""
    kind: Literal["mention"] = "mention"
    id: str
    platform: str
    timestamp: datetime
    author: Author
    content: Content
    sentiment: Sentiment
    metrics: Metrics
    hashtags: Tuple[str, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _id_as_str(value)

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return _as_aware(value)


class MessageRecord(_Record):
    """A customer message received on a support channel."""
    kind: Literal["message"] = "message"
    id: str
    timestamp: datetime
    channel: str
    message: str
    sentiment_score: float = Field(alias="sentimentScore")
    emotion: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _id_as_str(value)

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return _as_aware(value)


FeedRecord = Annotated[Union[MentionRecord, MessageRecord], Field(discriminator="kind")]
