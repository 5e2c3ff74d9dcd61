# main.py
import argparse
import logging
import os
import sys

from google.api_core.exceptions import GoogleAPICallError

import archive
import scheduler
import sync
from config import load_config
from errors import SyncError

logger = logging.getLogger(__name__)


def setup_logging():
    # Cloud Functions picks up stderr, so basicConfig is all we need
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def entry_point(request):
    """Run one sync. This is the function Cloud Scheduler calls every hour."""
    setup_logging()
    try:
        config = load_config()
        result = sync.run_sync(config)
        archive.upload_snapshot(config.bucket_name, config.path, result.csv_text)
        return f"Sync Success: {result.commit_url}", 200
    except Exception as e:
        logger.exception("CRITICAL ERROR: %s", e)
        # a 500 lets Cloud Scheduler mark the run as failed
        return f"Error: {e}", 500


def test_connection_entry(request):
    setup_logging()
    ok, info = sync.test_connection()
    if ok:
        return "Connection OK", 200
    return f"Connection failed: {info}", 502


def install_schedule_entry(request):
    setup_logging()
    try:
        job = scheduler.install_schedule()
        return f"Schedule installed: {job.name}", 200
    except Exception as e:
        logger.exception("Could not install schedule: %s", e)
        return f"Error: {e}", 500


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Publish a Google Sheet as CSV to a GitHub repository")
    ap.add_argument("operation", choices=["run-sync", "test-connection", "install-schedule"])
    args = ap.parse_args(argv)

    setup_logging()

    if args.operation == "test-connection":
        ok, _ = sync.test_connection()
        return 0 if ok else 1

    try:
        if args.operation == "install-schedule":
            scheduler.install_schedule()
        else:
            config = load_config()
            result = sync.run_sync(config)
            archive.upload_snapshot(config.bucket_name, config.path, result.csv_text)
            print(f"Commit: {result.commit_url}")
    except (SyncError, GoogleAPICallError) as e:
        logger.error("%s failed: %s", args.operation, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
