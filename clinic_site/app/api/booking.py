"""Appointment request endpoints."""
from __future__ import annotations

from dataclasses import asdict
from http import HTTPStatus
from typing import Any, Mapping

from flask import Blueprint, current_app, jsonify, request

from clinic_site.app.frontend import status_code_for
from clinic_site.app.models import AppointmentDraft
from clinic_site.app.services.booking_controller import controller_from_config

booking_bp = Blueprint("booking", __name__)


def _request_fields() -> Mapping[str, Any] | None:
    """Return the submitted draft fields, or ``None`` for a malformed body."""

    if request.is_json:
        payload = request.get_json(silent=True)
        return payload if isinstance(payload, dict) else None
    return request.form


@booking_bp.post("")
async def submit_booking() -> tuple[object, HTTPStatus]:
    """Validate the draft and forward it to the form relay."""

    fields = _request_fields()
    if fields is None:
        return (
            jsonify(ok=False, message="Request body must be a JSON object."),
            HTTPStatus.BAD_REQUEST,
        )

    draft = AppointmentDraft.from_mapping(fields)
    controller = controller_from_config(current_app.config, draft=draft)
    status = await controller.submit()

    return (
        jsonify(ok=status.ok, message=status.message, draft=asdict(controller.draft)),
        status_code_for(status, draft),
    )


@booking_bp.post("/links")
def booking_links() -> tuple[object, HTTPStatus]:
    """Return WhatsApp, telephone and email links pre-filled for the draft."""

    fields = _request_fields()
    if fields is None:
        return (
            jsonify(message="Request body must be a JSON object."),
            HTTPStatus.BAD_REQUEST,
        )

    controller = controller_from_config(
        current_app.config, draft=AppointmentDraft.from_mapping(fields)
    )
    return (
        jsonify(
            whatsapp=controller.whatsapp_link(),
            tel=controller.tel_links(),
            mail=controller.mail_link(),
        ),
        HTTPStatus.OK,
    )
