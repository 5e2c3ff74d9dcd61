# http_client.py
import requests

from errors import RemoteAPIError, TransportError


def send(method: str, url: str, **kwargs) -> requests.Response:
    """requests.request, with network failures turned into TransportError."""
    try:
        return requests.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise TransportError(f"{method} {url} failed: {e}") from e


def json_object(r: requests.Response, what: str = "GitHub API") -> dict:
    """Parsed JSON body; anything that is not a JSON object is a RemoteAPIError."""
    try:
        body = r.json()
    except ValueError:
        raise RemoteAPIError(r.status_code, f"expected JSON, got: {(r.text or '')[:300]}", what=what)
    if not isinstance(body, dict):
        raise RemoteAPIError(r.status_code, f"expected a JSON object, got {type(body).__name__}", what=what)
    return body
