import json

import httpx
import pytest

from j2v.services import Json2VideoClient


def make_client(handler):
    return Json2VideoClient(
        api_key="test-key",
        base_url="https://api.example.com/v2/",
        transport=httpx.MockTransport(handler),
    )


def test_create_movie_posts_body_with_api_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "project": "abc123"})

    body = {"fps": 25, "width": 1024, "height": 768, "scenes": [{"elements": []}]}
    with make_client(handler) as client:
        result = client.create_movie(body)

    assert result == {"success": True, "project": "abc123"}
    assert seen == {
        "method": "POST",
        "url": "https://api.example.com/v2/movies",
        "key": "test-key",
        "body": body,
    }


def test_get_movie_status_queries_project():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/v2/movies"
        assert request.url.params["project"] == "abc123"
        return httpx.Response(200, json={"success": True, "movie": {"status": "done"}})

    with make_client(handler) as client:
        assert client.get_movie_status("abc123")["movie"]["status"] == "done"


def test_error_status_is_raised_without_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, json={"success": False, "message": "bad request"})

    with make_client(handler) as client:
        with pytest.raises(httpx.HTTPStatusError):
            client.create_movie({"scenes": []})
    assert len(calls) == 1


def test_missing_api_key(monkeypatch):
    from j2v.config import config

    monkeypatch.setattr(config, "json2video_api_key", "")
    with pytest.raises(ValueError, match="JSON2VIDEO_API_KEY"):
        Json2VideoClient()
