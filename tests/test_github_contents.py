# tests/test_github_contents.py
import json

import pytest
import responses

import github_contents as gh
from config import load_config
from errors import RemoteAPIError, TransportError
from tests.conftest import CONTENTS_URL, REPO_URL, TOKEN, contents_body, put_body


def test_contents_url_encodes_whole_path(monkeypatch):
    monkeypatch.setenv("GITHUB_PATH", "exports/data 1.csv")
    url = gh.contents_url(load_config())
    assert url.endswith("/contents/exports%2Fdata%201.csv")


def test_contents_url_default():
    assert gh.contents_url(load_config()) == CONTENTS_URL


def test_build_headers_returns_new_dict_each_time():
    a = gh.build_headers(TOKEN)
    b = gh.build_headers(TOKEN)
    assert a == b and a is not b
    assert a["Authorization"] == f"Bearer {TOKEN}"
    assert a["Accept"] == "application/vnd.github.v3+json"
    assert a["User-Agent"] == "GAS-GitHub-Sync"


@responses.activate
def test_get_existing_file_sha_found():
    responses.add(responses.GET, CONTENTS_URL, json=contents_body("abc123"), status=200)
    assert gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN)) == "abc123"
    assert responses.calls[0].request.headers["Authorization"] == f"Bearer {TOKEN}"


@responses.activate
def test_get_existing_file_sha_not_found():
    responses.add(responses.GET, CONTENTS_URL, json={"message": "Not Found"}, status=404)
    assert gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN)) is None


@responses.activate
def test_get_existing_file_sha_other_status_raises():
    responses.add(responses.GET, CONTENTS_URL, json={"message": "Bad credentials"}, status=401)
    with pytest.raises(RemoteAPIError) as exc:
        gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN))
    assert exc.value.status_code == 401
    assert "Bad credentials" in exc.value.body
    assert len(responses.calls) == 1  # no retry


@responses.activate
def test_get_existing_file_sha_transport_error():
    with pytest.raises(TransportError):
        gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN))


def test_build_payload_without_sha_has_no_sha_key():
    payload = gh.build_payload("msg", "n", "e@x", "Y29udGVudA==")
    assert "sha" not in payload
    assert payload == {
        "message": "msg",
        "committer": {"name": "n", "email": "e@x"},
        "content": "Y29udGVudA==",
    }


def test_build_payload_with_sha():
    assert gh.build_payload("msg", "n", "e@x", "Zg==", sha="abc123")["sha"] == "abc123"


@responses.activate
@pytest.mark.parametrize("status", [200, 201])
def test_put_file_success(status):
    responses.add(responses.PUT, CONTENTS_URL, json=put_body(), status=status)
    headers = gh.build_headers(TOKEN)
    payload = gh.build_payload("msg", "n", "e@x", "Zg==")

    body = gh.put_file(CONTENTS_URL, headers, payload)

    assert body["commit"]["html_url"].endswith("/commit/c0ffee")
    req = responses.calls[0].request
    assert req.headers["Content-Type"] == "application/json"
    assert json.loads(req.body) == payload
    # caller's headers are left alone
    assert "Content-Type" not in headers


@responses.activate
def test_put_file_conflict_raises():
    responses.add(responses.PUT, CONTENTS_URL, json={"message": "sha wasn't supplied"}, status=422)
    with pytest.raises(RemoteAPIError) as exc:
        gh.put_file(CONTENTS_URL, gh.build_headers(TOKEN), {"message": "m"})
    assert exc.value.status_code == 422
    assert str(exc.value).startswith("GitHub API error: 422")


@responses.activate
def test_check_repo_access_ok():
    responses.add(responses.GET, REPO_URL, json={"full_name": "5dogs/github-spreadsheet-connect"}, status=200)
    assert gh.check_repo_access(load_config()) == (True, None)
    req = responses.calls[0].request
    assert req.headers["Authorization"] == f"Bearer {TOKEN}"
    assert req.headers["User-Agent"] == "GAS-GitHub-Sync"


@responses.activate
def test_check_repo_access_not_found():
    responses.add(responses.GET, REPO_URL, json={"message": "Not Found"}, status=404)
    ok, info = gh.check_repo_access(load_config())
    assert ok is False
    assert info.startswith("404 - ")


@responses.activate
def test_get_existing_file_sha_non_json_body_is_remote_error():
    responses.add(responses.GET, CONTENTS_URL, body="<html>proxy error</html>", status=200)
    with pytest.raises(RemoteAPIError) as exc:
        gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN))
    assert exc.value.status_code == 200


@responses.activate
def test_get_existing_file_sha_directory_listing_is_remote_error():
    # GET /contents/<dir> returns a JSON list
    responses.add(responses.GET, CONTENTS_URL, json=[contents_body("a"), contents_body("b")], status=200)
    with pytest.raises(RemoteAPIError) as exc:
        gh.get_existing_file_sha(CONTENTS_URL, gh.build_headers(TOKEN))
    assert "list" in exc.value.body


@responses.activate
def test_put_file_non_json_success_body_is_remote_error():
    responses.add(responses.PUT, CONTENTS_URL, body="ok", status=201)
    with pytest.raises(RemoteAPIError):
        gh.put_file(CONTENTS_URL, gh.build_headers(TOKEN), {"message": "m"})
