# archive.py
import datetime
import logging

from google.cloud import storage

logger = logging.getLogger(__name__)


def snapshot_blob_name(path: str, now: datetime.datetime | None = None) -> str:
    timestamp = (now or datetime.datetime.now()).strftime("%Y-%m-%d_%H-%M")
    return f"snapshots/{timestamp}/{path}"


def upload_snapshot(bucket_name: str, path: str, csv_text: str, client=None) -> str | None:
    """Keep a copy of the published CSV in GCS for history. Returns the gs:// URI."""
    if not bucket_name:
        logger.info("Skipping snapshot upload: BUCKET_NAME is not set.")
        return None

    client = client or storage.Client()
    bucket = client.bucket(bucket_name)
    blob = bucket.blob(snapshot_blob_name(path))
    blob.upload_from_string(csv_text.encode("utf-8"), content_type="text/csv; charset=utf-8")

    uri = f"gs://{bucket_name}/{blob.name}"
    logger.info("Uploaded snapshot to %s", uri)
    return uri
