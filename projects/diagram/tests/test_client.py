"""Tests for the remote rendering client."""

from typing import Any

import pytest
from requests import HTTPError, Response

from diagram import client, fetch_svg


def _response(status_code: int, body: str) -> Response:
    response = Response()
    response.status_code = status_code
    response._content = body.encode()  # noqa: SLF001
    response.encoding = "utf-8"
    return response


def test_fetch_svg(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that DBML is posted as JSON and the body returned."""
    calls: list[tuple[str, dict[str, Any]]] = []

    def fake_post(url: str, **kwargs: Any) -> Response:  # noqa: ANN401
        calls.append((url, kwargs))
        return _response(200, "<svg></svg>")

    monkeypatch.setattr(client, "post", fake_post)

    svg = fetch_svg("Table a {\n}", "http://localhost:4321/api/svg", timeout=5)

    assert svg == "<svg></svg>"
    assert calls == [
        (
            "http://localhost:4321/api/svg",
            {"json": {"dbml": "Table a {\n}"}, "timeout": 5},
        ),
    ]


def test_fetch_svg_raises_on_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that error responses are raised rather than returned."""
    monkeypatch.setattr(
        client,
        "post",
        lambda *_args, **_kwargs: _response(500, '{"error": "boom"}'),
    )

    with pytest.raises(HTTPError):
        fetch_svg("Table a {\n}", "http://localhost:4321/api/svg")
