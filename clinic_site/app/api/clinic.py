"""Clinic information endpoint."""
from __future__ import annotations

from http import HTTPStatus

from flask import current_app, jsonify
from flask.typing import ResponseReturnValue

from clinic_site.app.clinic import ClinicProfile

from . import api_bp


@api_bp.get("/clinic")
def clinic_profile() -> ResponseReturnValue:
    """Return the clinic's contact details, services and timings."""

    profile = ClinicProfile.from_config(current_app.config)
    return jsonify(profile.to_dict()), HTTPStatus.OK
