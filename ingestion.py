"""Turn raw collector payloads into typed records.

The collector hands over plain dicts. Mentions and messages never carry an
explicit discriminant, so the feed shape is inferred here, once, from the
fields a record exposes; everything downstream dispatches on ``kind``.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from errors import AnalyticsError, MissingFieldError, UnclassifiableFeedItemError
from labels import FeedKind
from records import FeedRecord, MentionRecord, MessageRecord

logger = logging.getLogger(__name__)

_MODELS: Dict[FeedKind, Type[BaseModel]] = {
    FeedKind.MENTION: MentionRecord,
    FeedKind.MESSAGE: MessageRecord,
}


def _validate(model: Type[BaseModel], raw: Any, index: Optional[int]):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        for error in e.errors():
            if error["type"] == "missing":
                field = ".".join(str(part) for part in error["loc"])
                raise MissingFieldError(field, index) from e
        where = f"record {index}" if index is not None else "record"
        raise AnalyticsError(f"{where} is not a valid {model.__name__}: {e}") from e


def load_mentions(raw: Iterable[Mapping[str, Any]]) -> List[MentionRecord]:
    mentions = [_validate(MentionRecord, item, i) for i, item in enumerate(raw)]
    logger.debug("Loaded %d mentions", len(mentions))
    return mentions


def load_messages(raw: Iterable[Mapping[str, Any]]) -> List[MessageRecord]:
    messages = [_validate(MessageRecord, item, i) for i, item in enumerate(raw)]
    logger.debug("Loaded %d messages", len(messages))
    return messages


def detect_kind(raw: Any, index: Optional[int] = None) -> FeedKind:
    """
    Work out which feed a raw record belongs to from the fields it exposes.

    A record exposing ``platform`` is a mention and one exposing ``channel`` is
    a message; ``platform`` is checked first, so a record carrying both is
    treated as a mention. Any ``kind`` key already on the record is ignored.
    """
    if not isinstance(raw, Mapping):
        raise UnclassifiableFeedItemError(index)

    if "platform" in raw:
        return FeedKind.MENTION
    if "channel" in raw:
        return FeedKind.MESSAGE
    raise UnclassifiableFeedItemError(index, list(raw.keys()))


def classify_feed_record(raw: Any, index: Optional[int] = None) -> FeedRecord:
    kind = detect_kind(raw, index)
    return _validate(_MODELS[kind], {**raw, "kind": kind.value}, index)


def load_feed(raw: Iterable[Any]) -> List[FeedRecord]:
    records = [classify_feed_record(item, i) for i, item in enumerate(raw)]
    logger.debug("Classified %d feed records", len(records))
    return records
