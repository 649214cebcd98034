# src/notifier/process.py
import logging
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional

from .discord import DiscordClient
from .embed import UploadEvent
from .errors import NotifierError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordOutcome:
    bucket: str
    key: str
    ok: bool
    error: Optional[str] = None      # NotifierError.kind
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def process_one(event: UploadEvent, client: DiscordClient) -> RecordOutcome:
    try:
        client.send_upload(event)
    except NotifierError as e:
        logger.error("failed to send Discord notification for %s/%s [%s]: %s",
                     event.bucket, event.key, e.kind, e)
        return RecordOutcome(event.bucket, event.key, ok=False, error=e.kind, detail=str(e))
    return RecordOutcome(event.bucket, event.key, ok=True)


def process_records(events: Iterable[UploadEvent], client: DiscordClient) -> List[RecordOutcome]:
    # one record at a time; a failed delivery never stops the rest of the batch
    outcomes: List[RecordOutcome] = []
    for ev in events:
        outcomes.append(process_one(ev, client))
    return outcomes
