# config.py
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from errors import ConfigurationError

# --- deployment constants (overridable via env) ---
DEFAULT_OWNER = "5dogs"
DEFAULT_REPO  = "github-spreadsheet-connect"
DEFAULT_PATH  = "data.csv"

DEFAULT_COMMITTER_NAME  = "GAS Auto Sync"
DEFAULT_COMMITTER_EMAIL = "gas-auto-sync@example.com"

DEFAULT_API_BASE   = "https://api.github.com"
DEFAULT_SHEET_NAME = "シート1"
DEFAULT_SHEET_GID  = "0"
DEFAULT_TIMEZONE   = "Asia/Tokyo"
DEFAULT_TIMEOUT    = 30

DEFAULT_SCHEDULER_LOCATION = "asia-northeast1"
DEFAULT_SCHEDULER_JOB_ID   = "spreadsheet-github-sync"


@dataclass(frozen=True)
class SyncConfig:
    owner: str
    repo: str
    path: str
    token: str
    committer_name: str = DEFAULT_COMMITTER_NAME
    committer_email: str = DEFAULT_COMMITTER_EMAIL
    api_base: str = DEFAULT_API_BASE
    sheet_file_id: str = ""
    sheet_name: str = DEFAULT_SHEET_NAME
    sheet_gid: str = DEFAULT_SHEET_GID
    timezone: str = DEFAULT_TIMEZONE
    bucket_name: str = ""
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # keep the token out of logs
        return (f"SyncConfig(owner={self.owner!r}, repo={self.repo!r}, path={self.path!r}, "
                f"committer={self.committer_name!r} <{self.committer_email}>)")


@dataclass(frozen=True)
class ScheduleConfig:
    project: str
    target_uri: str
    location: str = DEFAULT_SCHEDULER_LOCATION
    job_id: str = DEFAULT_SCHEDULER_JOB_ID
    time_zone: str = DEFAULT_TIMEZONE
    service_account: str = ""

    @property
    def parent(self) -> str:
        return f"projects/{self.project}/locations/{self.location}"

    @property
    def job_name(self) -> str:
        return f"{self.parent}/jobs/{self.job_id}"


def _get(env, key: str, default: str = "") -> str:
    return (env.get(key) or "").strip() or default


def _timezone(env) -> str:
    name = _get(env, "SYNC_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"SYNC_TIMEZONE is not a known time zone: {name!r}")
    return name


def _timeout(env) -> float:
    raw = _get(env, "HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"HTTP_TIMEOUT must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"HTTP_TIMEOUT must be positive, got {raw!r}")
    return value


def load_config(env=None) -> SyncConfig:
    """
    Build the settings for one sync run from the environment.
    GITHUB_TOKEN is required; committer name/email fall back to defaults.
    """
    env = os.environ if env is None else env

    token = _get(env, "GITHUB_TOKEN")
    if not token:
        raise ConfigurationError(
            "GitHub token is not set. Set the 'GITHUB_TOKEN' environment variable."
        )

    return SyncConfig(
        owner=_get(env, "GITHUB_OWNER", DEFAULT_OWNER),
        repo=_get(env, "GITHUB_REPO", DEFAULT_REPO),
        path=_get(env, "GITHUB_PATH", DEFAULT_PATH),
        token=token,
        committer_name=_get(env, "COMMITTER_NAME", DEFAULT_COMMITTER_NAME),
        committer_email=_get(env, "COMMITTER_EMAIL", DEFAULT_COMMITTER_EMAIL),
        api_base=_get(env, "GITHUB_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        sheet_file_id=_get(env, "SHEET_FILE_ID"),
        sheet_name=_get(env, "SHEET_NAME", DEFAULT_SHEET_NAME),
        sheet_gid=_get(env, "SHEET_GID", DEFAULT_SHEET_GID),
        timezone=_timezone(env),
        bucket_name=_get(env, "BUCKET_NAME"),
        timeout=_timeout(env),
    )


def load_schedule_config(env=None) -> ScheduleConfig:
    env = os.environ if env is None else env

    project = _get(env, "GCP_PROJECT")
    target_uri = _get(env, "SYNC_FUNCTION_URL")
    if not project:
        raise ConfigurationError("GCP_PROJECT is not set.")
    if not target_uri:
        raise ConfigurationError("SYNC_FUNCTION_URL is not set (URL of the run-sync function).")

    return ScheduleConfig(
        project=project,
        target_uri=target_uri,
        location=_get(env, "SCHEDULER_LOCATION", DEFAULT_SCHEDULER_LOCATION),
        job_id=_get(env, "SCHEDULER_JOB_ID", DEFAULT_SCHEDULER_JOB_ID),
        time_zone=_timezone(env),
        service_account=_get(env, "SCHEDULER_SERVICE_ACCOUNT"),
    )
