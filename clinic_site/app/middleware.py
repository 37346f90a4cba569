"""Request logging for booking submissions."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any

from flask import Flask, current_app, g, request


@dataclass(slots=True)
class _LogConfig:
    action: str
    channel: str


SIGNIFICANT_ACTIONS: dict[tuple[str, str], _LogConfig] = {
    ("POST", "/"): _LogConfig(action="booking.form_submitted", channel="form"),
    ("POST", "/api/booking"): _LogConfig(action="booking.api_submitted", channel="api"),
}


def register_request_logging(app: Flask) -> None:
    """Attach middleware that logs booking submissions without their contents."""

    @app.before_request
    def _capture_log_context() -> None:
        method = request.method.upper()
        normalized_path = _normalize_path(request.path)
        config = SIGNIFICANT_ACTIONS.get((method, normalized_path))
        if not config:
            g.booking_log_context = None
            return

        g.booking_log_context = {
            "config": config,
            "method": method,
            "path": normalized_path,
            "request_bytes": request.get_data(cache=True) or b"",
        }

    @app.after_request
    def _log_submission(response):
        context: dict[str, Any] | None = getattr(g, "booking_log_context", None)
        if not context:
            return response

        config: _LogConfig = context["config"]
        current_app.logger.info(
            "%s channel=%s method=%s path=%s status=%s fingerprint=%s",
            config.action,
            config.channel,
            context["method"],
            context["path"],
            response.status_code,
            fingerprint_request(
                context["method"], context["path"], context["request_bytes"]
            ),
        )
        return response


def _normalize_path(path: str) -> str:
    if path != "/" and path.endswith("/"):
        return path[:-1]
    return path


def fingerprint_request(method: str, path: str, body: bytes) -> str:
    payload = f"{method}\n{path}\n".encode("utf-8") + body
    return hashlib.sha256(payload).hexdigest()
