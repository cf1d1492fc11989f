"""Shared API helpers for the dashboard."""

import os
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

_API_URL = os.getenv("API_URL", "http://localhost:8000")


def _error_detail(exc: requests.HTTPError) -> str:
    """Best-effort message from an error response, JSON or not."""
    try:
        body = exc.response.json()
    except ValueError:
        return exc.response.text or str(exc)
    if isinstance(body, dict):
        return str(body.get("detail", exc))
    return str(body)


def _report_http_error(exc: requests.HTTPError) -> None:
    if exc.response is None:
        st.error(f"API error: {exc}")
    else:
        st.error(f"API {exc.response.status_code}: {_error_detail(exc)}")


def api_get(endpoint: str, params: dict = None):
    try:
        r = requests.get(f"{_API_URL}{endpoint}", params=params, timeout=10)
        r.raise_for_status()
        return r.json()
    except requests.HTTPError as exc:
        _report_http_error(exc)
        return None
    except Exception as exc:
        st.error(f"API error: {exc}")
        return None


def api_post(endpoint: str, payload: dict, params: dict = None):
    try:
        r = requests.post(
            f"{_API_URL}{endpoint}",
            headers={"Content-Type": "application/json"},
            params=params,
            json=payload,
            timeout=10,
        )
        r.raise_for_status()
        return r.json()
    except requests.HTTPError as exc:
        _report_http_error(exc)
        return None
    except Exception as exc:
        st.error(f"Request failed: {exc}")
        return None
