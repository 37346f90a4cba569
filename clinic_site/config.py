"""Configuration objects for the clinic site."""
from __future__ import annotations

import os
from typing import Dict, Type


class Config:
    """Base configuration shared by all environments."""

    FORM_ENDPOINT: str = os.getenv(
        "FORM_ENDPOINT", "https://formspree.io/f/YOUR_FORMSPREE_ID"
    )
    RELAY_FORMAT: str = os.getenv("RELAY_FORMAT", "multipart")
    RELAY_TIMEOUT: float = float(os.getenv("RELAY_TIMEOUT", "15"))
    BOOKING_LOCALE: str = os.getenv("BOOKING_LOCALE", "hi")

    CLINIC_NAME: str = os.getenv("CLINIC_NAME", "Mayank Sonography and Diagnostic Center")
    CLINIC_ADDRESS: str = os.getenv(
        "CLINIC_ADDRESS",
        "Opposite Nehru Garden, Govt. Hospital Road, Dhamtari, Chhattisgarh — 493773",
    )
    CLINIC_PHONES: str = os.getenv("CLINIC_PHONES", "+918982050533,+919713586177")
    CLINIC_EMAIL: str = os.getenv("CLINIC_EMAIL", "manky2106@gmail.com")
    WHATSAPP_PHONE: str = os.getenv("WHATSAPP_PHONE", "+918982050533")
    MAIL_SUBJECT: str = os.getenv("MAIL_SUBJECT", "Appointment Request")
    MAP_QUERY: str = os.getenv(
        "MAP_QUERY", "Opposite Nehru Garden, Dhamtari, Chhattisgarh"
    )


class DevelopmentConfig(Config):
    """Configuration suitable for local development."""

    DEBUG = True


class ProductionConfig(Config):
    """Configuration tailored for production deployments."""

    DEBUG = False


CONFIG_MAP: Dict[str, Type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None) -> Type[Config]:
    """Retrieve the configuration class matching the supplied name."""

    if not name:
        return DevelopmentConfig
    return CONFIG_MAP.get(name.lower(), DevelopmentConfig)
