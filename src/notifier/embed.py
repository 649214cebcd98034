# src/notifier/embed.py
import logging
import re
from dataclasses import dataclass, field
from typing import List
from urllib.parse import quote, unquote_to_bytes

from .errors import KeyDecodeWarning

logger = logging.getLogger(__name__)

EMBED_TITLE       = "📁 S3 物件上傳通知"
EMBED_DESCRIPTION = "有一個新的檔案被上傳到 S3 Bucket 了！"
EMBED_COLOR       = 3447003

OBJECT_URL = "https://{bucket}.s3.{region}.amazonaws.com/{path}"

# a '%' that does not start a two-hex-digit escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class UploadEvent:
    bucket: str
    key: str          # as delivered by S3, still percent-encoded
    region: str
    event_time: str


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass(frozen=True)
class NotificationDocument:
    title: str
    description: str
    url: str
    color: int
    fields: List[EmbedField] = field(default_factory=list)
    timestamp: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "color": self.color,
            "fields": [f.to_dict() for f in self.fields],
            "timestamp": self.timestamp,
        }


def query_unescape(s: str) -> str:
    """
    Strict query-string unescape: '+' is a space and every '%' must start a
    valid %XX escape, otherwise KeyDecodeWarning is raised.

    Bytes that are not UTF-8 are kept as surrogate escapes, so path_escape
    turns them back into the same %XX sequences.
    """
    m = _BAD_ESCAPE.search(s)
    if m:
        raise KeyDecodeWarning(f"invalid URL escape {s[m.start():m.start() + 3]!r}")
    return unquote_to_bytes(s.replace("+", " ")).decode("utf-8", errors="surrogateescape")


def path_escape(key: str) -> str:
    # '/' stays a separator; spaces, reserved and non-ASCII characters are escaped
    return quote(key, safe="/", errors="surrogateescape")


def display_key(key: str) -> str:
    # undecodable bytes show as U+FFFD; the JSON body must be valid UTF-8
    return key.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def normalize_key(raw_key: str) -> str:
    try:
        return query_unescape(raw_key)
    except KeyDecodeWarning as e:
        logger.warning("could not URL-decode object key %r, using it as-is: %s", raw_key, e)
        return raw_key


def object_url(bucket: str, region: str, decoded_key: str) -> str:
    return OBJECT_URL.format(bucket=bucket, region=region, path=path_escape(decoded_key))


def build_document(event: UploadEvent) -> NotificationDocument:
    decoded_key = normalize_key(event.key)

    return NotificationDocument(
        title=EMBED_TITLE,
        description=EMBED_DESCRIPTION,
        url=object_url(event.bucket, event.region, decoded_key),
        color=EMBED_COLOR,
        fields=[
            EmbedField(name="Bucket 名稱", value=event.bucket, inline=True),
            EmbedField(name="Region", value=event.region, inline=True),
            EmbedField(name="檔案路徑 (Object Key)", value=f"`{display_key(decoded_key)}`", inline=False),
        ],
        timestamp=event.event_time,
    )
