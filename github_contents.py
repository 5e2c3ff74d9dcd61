# github_contents.py
import logging
from urllib.parse import quote

from config import SyncConfig
from errors import RemoteAPIError
from http_client import json_object, send

logger = logging.getLogger(__name__)

ACCEPT     = "application/vnd.github.v3+json"
USER_AGENT = "GAS-GitHub-Sync"


def repo_url(config: SyncConfig) -> str:
    return f"{config.api_base}/repos/{config.owner}/{config.repo}"


def contents_url(config: SyncConfig) -> str:
    # the whole path is one encoded segment, '/' included
    return f"{repo_url(config)}/contents/{quote(config.path, safe='')}"


def build_headers(token: str) -> dict[str, str]:
    """Fresh header set per call; callers may extend it freely."""
    return {
        "Authorization": f"Bearer {token}",
        "Accept": ACCEPT,
        "User-Agent": USER_AGENT,
    }


def get_existing_file_sha(url: str, headers: dict[str, str], timeout: float = 30) -> str | None:
    """
    Look up the current blob sha of the file at `url`.
    - 200 -> sha from the body
    - 404 -> None (file does not exist yet)
    - anything else -> RemoteAPIError
    """
    r = send("GET", url, headers=headers, timeout=timeout)
    if r.status_code == 200:
        # a directory path answers with a list, which json_object rejects
        return json_object(r).get("sha")
    if r.status_code == 404:
        return None
    raise RemoteAPIError(r.status_code, r.text or "")


def build_payload(message: str, name: str, email: str, content: str, sha: str | None = None) -> dict:
    payload = {
        "message": message,
        "committer": {"name": name, "email": email},
        "content": content,
    }
    # only an update carries the sha; a create with a sha is rejected
    if sha:
        payload["sha"] = sha
    return payload


def put_file(url: str, headers: dict[str, str], payload: dict, timeout: float = 30) -> dict:
    """PUT the payload; returns the parsed body on 200/201, raises RemoteAPIError otherwise."""
    put_headers = {**headers, "Content-Type": "application/json"}
    r = send("PUT", url, headers=put_headers, json=payload, timeout=timeout)
    if r.status_code in (200, 201):
        return json_object(r)
    raise RemoteAPIError(r.status_code, r.text or "")


def check_repo_access(config: SyncConfig) -> tuple[bool, str | None]:
    """GET /repos/{owner}/{repo}; (True, None) on 200, else (False, '<code> - <body>')."""
    headers = {
        "Authorization": f"Bearer {config.token}",
        "User-Agent": USER_AGENT,
    }
    r = send("GET", repo_url(config), headers=headers, timeout=config.timeout)
    if r.status_code == 200:
        return True, None
    return False, f"{r.status_code} - {(r.text or '')[:300]}"
