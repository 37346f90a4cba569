"""Booking form controller: draft state, validation and relay submission."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from clinic_site.app.clinic import ClinicProfile
from clinic_site.app.messages import BookingMessages, get_messages
from clinic_site.app.models import AppointmentDraft, SubmissionStatus
from clinic_site.app.services.deep_links import build_whatsapp_link
from clinic_site.app.services.relay_client import (
    RelayClient,
    RelayRejection,
    TransportError,
)

LOGGER = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when a draft lacks one of the required fields."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing


def validate_draft(draft: AppointmentDraft) -> None:
    missing = draft.missing_required()
    if missing:
        raise ValidationError(missing)


class BookingFormController:
    """Owns one booking form's draft, status and submitting indicator.

    Each call to :meth:`submit` takes a new generation number. Only the most
    recently started submission may set the status or reset the draft, so an
    older request resolving late never overwrites what the user sees.
    """

    def __init__(
        self,
        relay: RelayClient,
        *,
        profile: ClinicProfile,
        messages: BookingMessages | None = None,
        draft: AppointmentDraft | None = None,
    ) -> None:
        self.relay = relay
        self.profile = profile
        self.messages = messages or get_messages(None)
        self.draft = draft or AppointmentDraft()
        self.status = SubmissionStatus.none()
        self._generation = 0
        self._in_flight = 0

    @property
    def submitting(self) -> bool:
        return self._in_flight > 0

    def update_field(self, name: str, value: str) -> AppointmentDraft:
        self.draft = self.draft.with_field(name, value)
        return self.draft

    def reset(self) -> None:
        self.draft = AppointmentDraft()

    async def submit(self, draft: AppointmentDraft | None = None) -> SubmissionStatus:
        """Validate and relay ``draft`` (the controller's own draft by default)."""

        snapshot = draft if draft is not None else self.draft
        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        self.status = SubmissionStatus.none()

        try:
            outcome = await self._attempt(snapshot)
        finally:
            self._in_flight -= 1

        if generation != self._generation:
            LOGGER.debug("Discarding outcome of superseded submission %d", generation)
            return outcome

        self.status = outcome
        if outcome.ok:
            self.reset()
        return outcome

    async def _attempt(self, draft: AppointmentDraft) -> SubmissionStatus:
        try:
            validate_draft(draft)
            await self.relay.send(draft.as_form_fields())
        except ValidationError:
            return SubmissionStatus.failure(self.messages.required_fields)
        except RelayRejection as exc:
            return SubmissionStatus.failure(exc.error or self.messages.submission_problem)
        except TransportError:
            return SubmissionStatus.failure(self.messages.network_error)
        return SubmissionStatus.success(self.messages.success)

    def whatsapp_link(self) -> str:
        return build_whatsapp_link(
            self.draft,
            phone=self.profile.whatsapp_phone,
            clinic_name=self.profile.name,
        )

    def tel_links(self) -> list[str]:
        return [phone.href for phone in self.profile.phones]

    def mail_link(self) -> str:
        return self.profile.mail_link


def controller_from_config(
    config: Mapping[str, Any], draft: AppointmentDraft | None = None
) -> BookingFormController:
    """Build a controller wired to the configured relay, clinic and locale."""

    return BookingFormController(
        RelayClient.from_config(config),
        profile=ClinicProfile.from_config(config),
        messages=get_messages(config.get("BOOKING_LOCALE")),
        draft=draft,
    )
