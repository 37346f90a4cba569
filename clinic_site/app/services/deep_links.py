"""Builders for WhatsApp, telephone and email deep links."""
from __future__ import annotations

import re
from urllib.parse import quote

from clinic_site.app.models import AppointmentDraft

# Characters JavaScript's encodeURIComponent leaves alone besides [A-Za-z0-9_.~-].
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def whatsapp_message(draft: AppointmentDraft, *, clinic_name: str) -> str:
    """Return the pre-filled WhatsApp text for ``draft``."""

    return "\n".join(
        [
            f"Hello, I want to book an appointment at {clinic_name}.",
            f"Name: {draft.name}",
            f"Phone: {draft.phone}",
            f"Preferred date: {draft.date}",
            f"Preferred time: {draft.time}",
            f"Service: {draft.service}",
        ]
    )


def whatsapp_digits(phone: str) -> str:
    return re.sub(r"\D", "", phone)


def build_whatsapp_link(draft: AppointmentDraft, *, phone: str, clinic_name: str) -> str:
    """Return a ``wa.me`` link that opens a chat pre-filled with the draft."""

    digits = whatsapp_digits(phone)
    text = encode_uri_component(whatsapp_message(draft, clinic_name=clinic_name))
    return f"https://wa.me/{digits}?text={text}"


def build_tel_link(phone: str) -> str:
    return "tel:" + re.sub(r"\s+", "", phone)


def build_mail_link(address: str, *, subject: str = "Appointment Request") -> str:
    return f"mailto:{address}?subject={encode_uri_component(subject)}"
