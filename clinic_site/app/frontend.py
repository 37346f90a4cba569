"""Routes for the public single-page site."""
from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, render_template, request

from clinic_site.app.models import AppointmentDraft, SubmissionStatus
from clinic_site.app.services.deep_links import whatsapp_digits
from clinic_site.app.services.booking_controller import (
    BookingFormController,
    controller_from_config,
)

frontend_bp = Blueprint("frontend", __name__)


def status_code_for(status: SubmissionStatus, draft: AppointmentDraft) -> HTTPStatus:
    """Map a submission outcome onto the HTTP status of the response."""

    if status.ok or status.is_none:
        return HTTPStatus.OK
    if draft.missing_required():
        return HTTPStatus.BAD_REQUEST
    return HTTPStatus.BAD_GATEWAY


def _render_page(controller: BookingFormController) -> str:
    return render_template(
        "index.html",
        clinic=controller.profile,
        draft=controller.draft,
        status=controller.status,
        whatsapp_link=controller.whatsapp_link(),
        whatsapp_digits=whatsapp_digits(controller.profile.whatsapp_phone),
        mail_link=controller.mail_link(),
    )


@frontend_bp.get("/")
def home() -> str:
    """Render the clinic page with an empty booking form."""

    return _render_page(controller_from_config(current_app.config))


@frontend_bp.post("/")
async def submit_booking_form():
    """Relay the posted booking form and re-render the page with the outcome."""

    draft = AppointmentDraft.from_mapping(request.form)
    controller = controller_from_config(current_app.config, draft=draft)
    status = await controller.submit()
    return _render_page(controller), status_code_for(status, draft)
