"""Static clinic information rendered on the site."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import quote

from clinic_site.app.models import SERVICES
from clinic_site.app.services.deep_links import build_mail_link, build_tel_link


@dataclass(frozen=True, slots=True)
class ContactPhone:
    """A clinic phone number with its ``tel:`` link and display form."""

    number: str
    display: str
    href: str


@dataclass(frozen=True, slots=True)
class ClinicProfile:
    """Name, contacts and opening details of the clinic."""

    name: str
    address: str
    email: str
    whatsapp_phone: str
    mail_subject: str
    map_query: str
    phones: tuple[ContactPhone, ...] = ()
    service_highlights: tuple[str, ...] = (
        "Ultrasound (USG) — Obstetric & General",
        "Doppler Studies",
        "Diagnostic Imaging",
    )
    timings: tuple[tuple[str, str], ...] = (
        ("Mon–Sat", "9:00 AM – 6:00 PM"),
        ("Sun", "Closed"),
    )
    services: tuple[str, ...] = field(default=SERVICES)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ClinicProfile":
        numbers = [
            value.strip()
            for value in (config.get("CLINIC_PHONES") or "").split(",")
            if value.strip()
        ]
        return cls(
            name=config["CLINIC_NAME"],
            address=config["CLINIC_ADDRESS"],
            email=config["CLINIC_EMAIL"],
            whatsapp_phone=config["WHATSAPP_PHONE"],
            mail_subject=config.get("MAIL_SUBJECT") or "Appointment Request",
            map_query=config.get("MAP_QUERY") or config["CLINIC_ADDRESS"],
            phones=tuple(
                ContactPhone(
                    number=number,
                    display=format_phone(number),
                    href=build_tel_link(number),
                )
                for number in numbers
            ),
        )

    @property
    def mail_link(self) -> str:
        return build_mail_link(self.email, subject=self.mail_subject)

    @property
    def map_embed_url(self) -> str:
        return f"https://www.google.com/maps?q={quote(self.map_query, safe='')}&output=embed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "address": self.address,
            "email": self.email,
            "mail_link": self.mail_link,
            "phones": [
                {"number": phone.number, "display": phone.display, "href": phone.href}
                for phone in self.phones
            ],
            "service_highlights": list(self.service_highlights),
            "services": list(self.services),
            "timings": [{"days": days, "hours": hours} for days, hours in self.timings],
            "map_embed_url": self.map_embed_url,
        }


def format_phone(number: str) -> str:
    """Format Indian mobile numbers as ``+91 XXXXX XXXXX``."""

    digits = re.sub(r"\D", "", number)
    if len(digits) == 12 and digits.startswith("91"):
        return f"+91 {digits[2:7]} {digits[7:]}"
    return number
