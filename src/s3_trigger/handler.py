# src/s3_trigger/handler.py
import logging

from notifier import config
from notifier.discord import DiscordClient
from notifier.parser import iter_upload_events
from notifier.process import process_records

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)


def make_client(webhook: str) -> DiscordClient:
    return DiscordClient(webhook)


def handler(event, context):
    # ConfigurationError propagates: the invocation fails before any record is touched
    webhook = config.get_webhook_url()

    with make_client(webhook) as client:
        outcomes = process_records(iter_upload_events(event), client)

    sent = sum(1 for o in outcomes if o.ok)
    failed = len(outcomes) - sent
    if failed:
        logger.warning("%d of %d Discord notifications failed", failed, len(outcomes))
    return {"ok": True, "sent": sent, "failed": failed,
            "outcomes": [o.to_dict() for o in outcomes]}
