"""API blueprint registration."""
from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import endpoints to ensure they are registered with the blueprint.
from . import clinic  # noqa: E402,F401
from .booking import booking_bp  # noqa: E402,F401

api_bp.register_blueprint(booking_bp, url_prefix="/booking")
