# src/notifier/discord.py
import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from .config import REQUEST_TIMEOUT_SEC
from .embed import NotificationDocument, UploadEvent, build_document
from .errors import SerializationError, TransportError, UnexpectedStatusError

logger = logging.getLogger(__name__)

NO_CONTENT = 204


@dataclass
class DeliveryEnvelope:
    embeds: List[NotificationDocument] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"embeds": [e.to_dict() for e in self.embeds]}


class DiscordClient:
    """
    Posts embeds to a Discord webhook.

    The HTTP session is owned by the client and may be injected, so one
    invocation reuses connections and tests can hand in a stand-in.
    Nothing is retried: send() either returns or raises a NotifierError.
    """

    def __init__(self, webhook_url: str, session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT_SEC):
        self.webhook_url = webhook_url
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def send_upload(self, event: UploadEvent) -> None:
        self.send(build_document(event), bucket=event.bucket, key=event.key)

    def send(self, doc: NotificationDocument, bucket: str = "", key: str = "") -> None:
        envelope = DeliveryEnvelope(embeds=[doc])
        try:
            body = json.dumps(envelope.to_dict(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"could not encode Discord payload as JSON: {e}") from e

        try:
            resp = self.session.post(
                self.webhook_url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"request to Discord failed: {e}") from e

        # anything but 204 is a failure, other 2xx included
        if resp.status_code != NO_CONTENT:
            raise UnexpectedStatusError(resp.status_code, resp.text)

        logger.info("sent Discord notification for %s/%s", bucket, key)
