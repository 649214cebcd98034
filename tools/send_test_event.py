#!/usr/bin/env python3
# tools/send_test_event.py
import os, sys, json, argparse, datetime, logging
from pathlib import Path

# --- repo paths so imports work regardless of CWD
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from notifier import config
from notifier.discord import DeliveryEnvelope
from notifier.embed import build_document
from notifier.errors import ConfigurationError
from notifier.parser import iter_upload_events


def sample_event(bucket: str, key: str, region: str, event_time: str) -> dict:
    """Minimal S3 ObjectCreated:Put notification, shaped like the real thing."""
    return {
        "Records": [
            {
                "eventVersion": "2.1",
                "eventSource": "aws:s3",
                "awsRegion": region,
                "eventTime": event_time,
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "s3SchemaVersion": "1.0",
                    "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
                    "object": {"key": key, "size": 0},
                },
            }
        ]
    }


def main(argv=None):
    now = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
    ap = argparse.ArgumentParser(description="Run a sample S3 upload event through the notifier.")
    ap.add_argument("--bucket", default="my-bucket")
    ap.add_argument("--key", default="folder/my%20file.txt", help="object key as S3 delivers it (URL-encoded)")
    ap.add_argument("--region", default=config.REGION)
    ap.add_argument("--time", default=now, help="eventTime, e.g. 2024-01-01T00:00:00.000Z")
    ap.add_argument("--webhook", help=f"webhook URL (default: ${config.WEBHOOK_ENV})")
    ap.add_argument("--dry-run", action="store_true", help="print the Discord payload instead of sending it")
    args = ap.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    event = sample_event(args.bucket, args.key, args.region, args.time)

    if args.dry_run:
        docs = [build_document(u) for u in iter_upload_events(event)]
        print(json.dumps(DeliveryEnvelope(embeds=docs).to_dict(), ensure_ascii=False, indent=2))
        return 0

    if args.webhook:
        os.environ[config.WEBHOOK_ENV] = args.webhook

    from s3_trigger.handler import handler
    try:
        result = handler(event, None)
    except ConfigurationError as e:
        print(f"[send_test_event] ERROR: {e}", file=sys.stderr)
        return 2
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0 if result["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
