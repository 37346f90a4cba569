"""Tests for the booking form controller and the relay client."""
from __future__ import annotations

import asyncio
import json
import unittest
from unittest.mock import AsyncMock, patch

import httpx

from clinic_site.app.clinic import ClinicProfile
from clinic_site.app.messages import get_messages
from clinic_site.app.models import AppointmentDraft, SubmissionStatus
from clinic_site.app.services.booking_controller import BookingFormController
from clinic_site.app.services.relay_client import (
    RelayClient,
    RelayRejection,
    TransportError,
)
from clinic_site.config import Config

ENDPOINT = "https://relay.test/f/abc123"
FIELD_NAMES = ("name", "phone", "email", "date", "time", "service", "message")


def _profile() -> ClinicProfile:
    config = {key: getattr(Config, key) for key in dir(Config) if key.isupper()}
    return ClinicProfile.from_config(config)


def _complete_draft() -> AppointmentDraft:
    return AppointmentDraft(name="Asha", phone="9999999999", date="2024-05-01")


class RecordingRelay:
    """Collects the requests sent through an ``httpx.MockTransport``."""

    def __init__(self, status_code: int = 200, body: object | None = None) -> None:
        self.status_code = status_code
        self.body = {"ok": True} if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)


class BookingFormControllerTests(unittest.IsolatedAsyncioTestCase):
    """Exercise validation, submission outcomes and draft lifecycle."""

    def _controller(
        self, handler, *, payload_format: str = "multipart", draft: AppointmentDraft | None = None
    ) -> BookingFormController:
        relay = RelayClient(
            ENDPOINT,
            payload_format=payload_format,
            transport=httpx.MockTransport(handler),
        )
        return BookingFormController(
            relay,
            profile=_profile(),
            messages=get_messages("en"),
            draft=draft,
        )

    async def test_missing_required_fields_never_reach_the_network(self) -> None:
        for missing in ("name", "phone", "date"):
            with self.subTest(missing=missing):
                relay = RecordingRelay()
                draft = _complete_draft().with_field(missing, "")
                controller = self._controller(relay, draft=draft)

                status = await controller.submit()

                self.assertEqual(status.kind, SubmissionStatus.FAILURE)
                self.assertEqual(status.message, get_messages("en").required_fields)
                self.assertEqual(relay.requests, [])
                self.assertFalse(controller.submitting)
                self.assertEqual(controller.draft, draft)

    async def test_whitespace_only_required_field_is_rejected(self) -> None:
        relay = RecordingRelay()
        controller = self._controller(relay, draft=_complete_draft().with_field("name", "   "))

        status = await controller.submit()

        self.assertFalse(status.ok)
        self.assertEqual(relay.requests, [])

    async def test_submission_posts_all_seven_fields_once(self) -> None:
        relay = RecordingRelay()
        controller = self._controller(relay, draft=_complete_draft())

        await controller.submit()

        self.assertEqual(len(relay.requests), 1)
        request = relay.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), ENDPOINT)
        self.assertEqual(request.headers["Accept"], "application/json")
        self.assertTrue(request.headers["Content-Type"].startswith("multipart/form-data"))
        body = request.content.decode("utf-8")
        for name in FIELD_NAMES:
            self.assertIn(f'name="{name}"', body)
        self.assertIn("Asha", body)
        self.assertIn("Ultrasound (USG)", body)

    async def test_json_relay_receives_the_same_field_set(self) -> None:
        relay = RecordingRelay()
        controller = self._controller(relay, payload_format="json", draft=_complete_draft())

        status = await controller.submit()

        self.assertTrue(status.ok)
        payload = json.loads(relay.requests[0].content)
        self.assertEqual(set(payload), set(FIELD_NAMES))
        self.assertEqual(payload["email"], "")
        self.assertEqual(payload["time"], "")
        self.assertEqual(payload["service"], "Ultrasound (USG)")

    async def test_success_resets_draft_and_reports_confirmation(self) -> None:
        relay = RecordingRelay(status_code=200)
        draft = _complete_draft().with_field("service", "X-ray").with_field("message", "Back pain")
        controller = self._controller(relay, draft=draft)

        status = await controller.submit()

        self.assertTrue(status.ok)
        self.assertEqual(status.message, get_messages("en").success)
        self.assertEqual(controller.status, status)
        self.assertEqual(
            controller.draft,
            AppointmentDraft(
                name="", phone="", email="", date="", time="",
                service="Ultrasound (USG)", message="",
            ),
        )
        self.assertFalse(controller.submitting)

    async def test_rejection_uses_error_field_verbatim(self) -> None:
        relay = RecordingRelay(status_code=422, body={"error": "duplicate"})
        draft = _complete_draft()
        controller = self._controller(relay, draft=draft)

        status = await controller.submit()

        self.assertEqual(status.kind, SubmissionStatus.FAILURE)
        self.assertEqual(status.message, "duplicate")
        self.assertEqual(controller.draft, draft)

    async def test_rejection_without_error_falls_back_to_generic_message(self) -> None:
        for body in (b"<html>Bad gateway</html>", {"errors": [{"message": "x"}]}, ["nope"]):
            with self.subTest(body=body):
                relay = RecordingRelay(status_code=500, body=body)
                controller = self._controller(relay, draft=_complete_draft())

                status = await controller.submit()

                self.assertEqual(status.message, get_messages("en").submission_problem)

    async def test_network_failure_keeps_draft(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        draft = _complete_draft()
        controller = self._controller(handler, draft=draft)

        status = await controller.submit()

        self.assertEqual(status.kind, SubmissionStatus.FAILURE)
        self.assertEqual(status.message, get_messages("en").network_error)
        self.assertEqual(controller.draft, draft)
        self.assertFalse(controller.submitting)

    async def test_submit_accepts_an_explicit_snapshot(self) -> None:
        relay = RecordingRelay()
        controller = self._controller(relay)

        status = await controller.submit(_complete_draft())

        self.assertTrue(status.ok)
        self.assertEqual(len(relay.requests), 1)

    async def test_submitting_flag_is_set_while_request_is_in_flight(self) -> None:
        observed: list[bool] = []
        controller: BookingFormController | None = None

        async def handler(request: httpx.Request) -> httpx.Response:
            assert controller is not None
            observed.append(controller.submitting)
            return httpx.Response(200, json={"ok": True})

        controller = self._controller(handler, draft=_complete_draft())
        await controller.submit()

        self.assertEqual(observed, [True])
        self.assertFalse(controller.submitting)

    async def test_stale_submission_does_not_overwrite_newer_outcome(self) -> None:
        release_first = asyncio.Event()
        calls = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                await release_first.wait()
                return httpx.Response(422, json={"error": "stale"})
            return httpx.Response(200, json={"ok": True})

        controller = self._controller(handler, draft=_complete_draft())

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        while calls < 1:
            await asyncio.sleep(0)
        second_status = await controller.submit(_complete_draft())
        self.assertTrue(controller.submitting)
        release_first.set()
        first_status = await first

        self.assertEqual(first_status.message, "stale")
        self.assertTrue(second_status.ok)
        self.assertEqual(controller.status, second_status)
        self.assertFalse(controller.submitting)

    def test_update_field_replaces_one_field_and_is_idempotent(self) -> None:
        controller = self._controller(RecordingRelay())

        controller.update_field("name", "Asha")
        once = controller.draft
        controller.update_field("name", "Asha")

        self.assertEqual(controller.draft, once)
        self.assertEqual(once.name, "Asha")
        self.assertEqual(once.service, "Ultrasound (USG)")
        self.assertEqual(once.phone, "")

    async def test_cleared_field_set_to_none_yields_validation_failure(self) -> None:
        relay = RecordingRelay()
        controller = self._controller(relay, draft=_complete_draft())

        controller.update_field("date", None)
        status = await controller.submit()

        self.assertEqual(controller.draft.date, "")
        self.assertEqual(status.message, get_messages("en").required_fields)
        self.assertEqual(relay.requests, [])

    def test_update_field_rejects_unknown_names(self) -> None:
        controller = self._controller(RecordingRelay())

        with self.assertRaises(ValueError):
            controller.update_field("clinic", "x")

    def test_convenience_links_use_clinic_profile(self) -> None:
        controller = self._controller(RecordingRelay(), draft=_complete_draft())

        self.assertTrue(controller.whatsapp_link().startswith("https://wa.me/918982050533?text="))
        self.assertEqual(controller.tel_links(), ["tel:+918982050533", "tel:+919713586177"])
        self.assertEqual(
            controller.mail_link(),
            "mailto:manky2106@gmail.com?subject=Appointment%20Request",
        )


class RelayClientTests(unittest.IsolatedAsyncioTestCase):
    """Classification of relay outcomes."""

    async def test_rejection_carries_status_and_error(self) -> None:
        client = RelayClient(
            ENDPOINT,
            transport=httpx.MockTransport(RecordingRelay(status_code=422, body={"error": "duplicate"})),
        )

        with self.assertRaises(RelayRejection) as ctx:
            await client.send({"name": "Asha"})

        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(ctx.exception.error, "duplicate")

    async def test_timeout_is_a_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = RelayClient(ENDPOINT, transport=httpx.MockTransport(handler))

        with self.assertRaises(TransportError):
            await client.send({"name": "Asha"})

    async def test_malformed_endpoint_is_a_transport_error(self) -> None:
        client = RelayClient(ENDPOINT)

        with patch.object(
            httpx.AsyncClient, "post", new=AsyncMock(side_effect=httpx.InvalidURL("bad host"))
        ):
            with self.assertRaises(TransportError):
                await client.send({"name": "Asha"})

    def test_unknown_payload_format_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RelayClient(ENDPOINT, payload_format="xml")

    def test_from_config_reads_relay_settings(self) -> None:
        client = RelayClient.from_config(
            {"FORM_ENDPOINT": ENDPOINT, "RELAY_FORMAT": "JSON", "RELAY_TIMEOUT": "5"}
        )

        self.assertEqual(client.endpoint, ENDPOINT)
        self.assertEqual(client.payload_format, "json")
        self.assertEqual(client.timeout, 5.0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
