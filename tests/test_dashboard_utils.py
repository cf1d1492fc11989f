"""Tests for dashboard/utils.py — API helper error reporting."""

from unittest.mock import MagicMock, patch

import requests

from dashboard import utils


def _response(status, body, content_type="text/plain"):
    r = requests.Response()
    r.status_code = status
    r._content = body
    r.headers["Content-Type"] = content_type
    r.url = "http://localhost:8000/api/projections"
    return r


@patch("dashboard.utils.st")
@patch("dashboard.utils.requests.post")
def test_post_non_json_error_body(mock_post, mock_st):
    mock_post.return_value = _response(500, b"Internal Server Error")

    assert utils.api_post("/api/projections", {}) is None
    mock_st.error.assert_called_once_with("API 500: Internal Server Error")


@patch("dashboard.utils.st")
@patch("dashboard.utils.requests.post")
def test_post_json_error_detail(mock_post, mock_st):
    mock_post.return_value = _response(
        404, b'{"detail": "Unknown profile"}', "application/json"
    )

    assert utils.api_post("/api/projections", {}, params={"profile": "x"}) is None
    mock_st.error.assert_called_once_with("API 404: Unknown profile")


@patch("dashboard.utils.st")
@patch("dashboard.utils.requests.get")
def test_http_error_without_response(mock_get, mock_st):
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("boom")
    mock_get.return_value = resp

    assert utils.api_get("/api/projections/profiles") is None
    mock_st.error.assert_called_once_with("API error: boom")


@patch("dashboard.utils.st")
@patch("dashboard.utils.requests.post")
def test_post_success(mock_post, mock_st):
    mock_post.return_value = _response(200, b'{"projection": 25.168}', "application/json")

    assert utils.api_post("/api/projections", {}) == {"projection": 25.168}
    mock_st.error.assert_not_called()
