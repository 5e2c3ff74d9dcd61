# sync.py
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo

import csv_encoder
import github_contents
import sheet_source
from config import SyncConfig, load_config
from errors import ConfigurationError, SyncError, TransportError

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "Update spreadsheet data - {timestamp}"


class SyncState(str, Enum):
    IDLE = "Idle"
    CONFIG_LOADED = "ConfigLoaded"
    ENCODED_PENDING = "EncodedPending"
    RESOLVED = "Resolved"
    PUBLISHED = "Published"


@dataclass
class CommitResult:
    success: bool
    commit_url: str
    message: str
    csv_text: str = field(default="", repr=False)


def local_timestamp(tz_name: str, now: datetime | None = None) -> str:
    """'YYYY/MM/DD HH:MM:SS' in the given zone (ja-JP style)."""
    now = now or datetime.now(tz=ZoneInfo("UTC"))
    return now.astimezone(ZoneInfo(tz_name)).strftime("%Y/%m/%d %H:%M:%S")


def commit_message(config: SyncConfig, now: datetime | None = None) -> str:
    return COMMIT_MESSAGE.format(timestamp=local_timestamp(config.timezone, now))


def run_sync(config: SyncConfig | None = None, fetch=None) -> CommitResult:
    """
    One sync run: sheet -> CSV -> base64 -> resolve sha -> PUT.
    Every failure is logged with the state it happened in and re-raised;
    nothing is retried or rolled back.
    """
    fetch = fetch or sheet_source.fetch_grid
    state = SyncState.IDLE
    logger.info("Starting GitHub sync...")
    try:
        # config first, so a missing token stops us before any request
        config = config or load_config()
        state = SyncState.CONFIG_LOADED

        grid = fetch(config)
        csv_text = csv_encoder.grid_to_csv(grid)
        content = csv_encoder.encode_payload(csv_text)
        state = SyncState.ENCODED_PENDING
        logger.info("Encoded %d rows (%d bytes of CSV)", len(grid), len(csv_text.encode("utf-8")))

        url = github_contents.contents_url(config)
        headers = github_contents.build_headers(config.token)
        sha = github_contents.get_existing_file_sha(url, headers, timeout=config.timeout)
        state = SyncState.RESOLVED
        if sha:
            logger.info("Existing file sha: %s", sha)
        else:
            logger.info("%s does not exist yet, creating it", config.path)

        payload = github_contents.build_payload(
            commit_message(config),
            config.committer_name,
            config.committer_email,
            content,
            sha,
        )
        body = github_contents.put_file(url, headers, payload, timeout=config.timeout)
        state = SyncState.PUBLISHED
    except SyncError as e:
        logger.error("Sync failed in state %s: %s", state.value, e)
        raise

    commit_url = (body.get("commit") or {}).get("html_url", "")
    logger.info("GitHub sync succeeded")
    logger.info("Commit URL: %s", commit_url)
    return CommitResult(success=True, commit_url=commit_url, message="Sync complete", csv_text=csv_text)


def test_connection(config: SyncConfig | None = None) -> tuple[bool, str | None]:
    """
    Probe the target repository. Never raises; returns (ok, info).
    """
    try:
        config = config or load_config()
    except ConfigurationError as e:
        logger.error("Connection test: %s", e)
        return False, str(e)

    try:
        ok, info = github_contents.check_repo_access(config)
    except TransportError as e:
        logger.error("Connection test error: %s", e)
        return False, str(e)

    if ok:
        logger.info("Connection to %s/%s OK", config.owner, config.repo)
    else:
        logger.error("Connection test failed: %s", info)
    return ok, info

