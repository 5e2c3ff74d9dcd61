# tests/conftest.py
import pytest

API_BASE     = "https://api.github.com"
OWNER        = "5dogs"
REPO         = "github-spreadsheet-connect"
TOKEN        = "ghp_test_token"
CONTENTS_URL = f"{API_BASE}/repos/{OWNER}/{REPO}/contents/data.csv"
REPO_URL     = f"{API_BASE}/repos/{OWNER}/{REPO}"
SHEET_ID     = "1AbCdEfGhIjKlMnOpQrStUvWxYz"
FUNCTION_URL = "https://asia-northeast1-demo-project.cloudfunctions.net/entry_point"


@pytest.fixture(autouse=True)
def sync_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", TOKEN)
    monkeypatch.setenv("SHEET_FILE_ID", SHEET_ID)
    monkeypatch.setenv("GCP_PROJECT", "demo-project")
    monkeypatch.setenv("SYNC_FUNCTION_URL", FUNCTION_URL)
    # everything else runs on defaults
    for key in ("GITHUB_OWNER", "GITHUB_REPO", "GITHUB_PATH", "GITHUB_API_BASE",
                "COMMITTER_NAME", "COMMITTER_EMAIL", "SHEET_NAME", "SHEET_GID",
                "SYNC_TIMEZONE", "BUCKET_NAME", "HTTP_TIMEOUT",
                "SCHEDULER_LOCATION", "SCHEDULER_JOB_ID", "SCHEDULER_SERVICE_ACCOUNT"):
        monkeypatch.delenv(key, raising=False)
    yield


def contents_body(sha: str, path: str = "data.csv") -> dict:
    # trimmed GET /contents/{path} response
    return {"name": path, "path": path, "sha": sha, "type": "file", "encoding": "base64"}


def put_body(commit_sha: str = "c0ffee") -> dict:
    return {
        "content": {"name": "data.csv", "path": "data.csv", "sha": "newblob"},
        "commit": {
            "sha": commit_sha,
            "html_url": f"https://github.com/{OWNER}/{REPO}/commit/{commit_sha}",
        },
    }
