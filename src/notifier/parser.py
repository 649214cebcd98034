# src/notifier/parser.py
import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Iterator

import boto3

from .config import REGION
from .embed import UploadEvent

logger = logging.getLogger(__name__)

OBJECT_CREATED = "ObjectCreated"


@lru_cache(maxsize=1)
def default_region() -> str:
    # region the function itself runs in; used when a record carries none
    return boto3.session.Session().region_name or REGION


def rfc3339(event_time: str) -> str:
    """
    Re-render an S3 eventTime ("2024-01-01T00:00:00.123Z") as RFC 3339 at
    second precision. Anything unparseable is returned untouched.
    """
    s = (event_time or "").strip()
    if not s:
        return event_time
    try:
        dt = datetime.fromisoformat(s[:-1] + "+00:00" if s.endswith(("Z", "z")) else s)
    except ValueError:
        return event_time
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if dt.utcoffset().total_seconds() == 0:
        return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return dt.isoformat(timespec="seconds")


def _unwrap_records(event: dict) -> Iterator[dict]:
    for rec in event.get("Records") or []:
        # S3 -> SNS -> Lambda delivers the S3 notification as a JSON string
        if isinstance(rec, dict) and "Sns" in rec:
            try:
                inner = json.loads(rec["Sns"]["Message"])
            except (KeyError, TypeError, ValueError) as e:
                logger.error("SNS record does not carry an S3 notification: %s", e)
                continue
            if isinstance(inner, dict):
                yield from _unwrap_records(inner)
        else:
            yield rec


def to_upload_event(rec: dict) -> UploadEvent:
    s3 = rec["s3"]
    return UploadEvent(
        bucket=s3["bucket"]["name"],
        key=s3["object"]["key"],
        region=rec.get("awsRegion") or default_region(),
        event_time=rfc3339(rec.get("eventTime", "")),
    )


def iter_upload_events(event: dict) -> Iterator[UploadEvent]:
    for rec in _unwrap_records(event):
        try:
            name = rec.get("eventName", "")
            if name and not name.startswith(OBJECT_CREATED):
                logger.info("skipping %s record, only object creation is notified", name)
                continue
            upload = to_upload_event(rec)
        except (AttributeError, KeyError, TypeError) as e:
            logger.error("malformed S3 record skipped: %r", e)
            continue
        logger.info("detected upload of %s to %s", upload.key, upload.bucket)
        yield upload
