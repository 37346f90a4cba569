"""User-facing status texts for the booking form."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOCALE = "hi"


@dataclass(frozen=True, slots=True)
class BookingMessages:
    """Localized messages shown after a submission attempt."""

    required_fields: str
    success: str
    submission_problem: str
    network_error: str


CATALOG: dict[str, BookingMessages] = {
    "hi": BookingMessages(
        required_fields="कृपया नाम, फोन और तारीख भरें।",
        success="आपकी अपॉइंटमेंट का अनुरोध भेज दिया गया है। हम शीघ्र ही संपर्क करेंगे।",
        submission_problem="सबमिशन में समस्या हुई।",
        network_error="नेटवर्क त्रुटि — कृपया बाद में पुनः प्रयास करें।",
    ),
    "en": BookingMessages(
        required_fields="Please fill in your name, phone and date.",
        success="Your appointment request has been sent. We will contact you shortly.",
        submission_problem="There was a problem with the submission.",
        network_error="Network error, please try again later.",
    ),
}


def get_messages(locale: str | None) -> BookingMessages:
    """Return the catalog for ``locale``, falling back to Hindi."""

    if not locale:
        return CATALOG[DEFAULT_LOCALE]
    return CATALOG.get(locale.lower().split("-")[0], CATALOG[DEFAULT_LOCALE])
