"""Serverless entrypoint for deploying the clinic site on Vercel."""
from __future__ import annotations
import os

from clinic_site.app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
