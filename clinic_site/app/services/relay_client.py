"""Client for the form-relay endpoint that forwards booking requests."""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

LOGGER = logging.getLogger(__name__)

PAYLOAD_FORMATS = ("multipart", "json")


class RelayRejection(RuntimeError):
    """Raised when the relay endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, error: str | None = None) -> None:
        super().__init__(error or f"Relay responded with HTTP {status_code}.")
        self.status_code = status_code
        self.error = error


class TransportError(RuntimeError):
    """Raised when no response could be obtained from the relay endpoint."""


class RelayClient:
    """Posts form fields to a relay such as Formspree or a JSON mail relay."""

    def __init__(
        self,
        endpoint: str,
        *,
        payload_format: str = "multipart",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if payload_format not in PAYLOAD_FORMATS:
            raise ValueError(
                f"payload_format must be one of {', '.join(PAYLOAD_FORMATS)}."
            )
        self.endpoint = endpoint
        self.payload_format = payload_format
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RelayClient":
        return cls(
            config["FORM_ENDPOINT"],
            payload_format=(config.get("RELAY_FORMAT") or "multipart").lower(),
            timeout=float(config.get("RELAY_TIMEOUT", 15.0)),
        )

    def _request_kwargs(self, fields: Mapping[str, str]) -> dict[str, Any]:
        if self.payload_format == "json":
            return {"json": dict(fields)}
        # A filename of None renders each entry as a plain multipart form field.
        return {
            "files": [
                (key, (None, (value or "").encode("utf-8")))
                for key, value in fields.items()
            ]
        }

    async def send(self, fields: Mapping[str, str]) -> None:
        """POST ``fields`` to the relay, raising on rejection or transport failure."""

        LOGGER.debug(
            "Posting %d booking fields to relay %s as %s",
            len(fields),
            self.endpoint,
            self.payload_format,
        )
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint,
                    headers={"Accept": "application/json"},
                    **self._request_kwargs(fields),
                )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            LOGGER.debug("Relay %s unreachable: %s", self.endpoint, exc)
            raise TransportError("Unable to contact the form relay.") from exc

        if response.is_success:
            LOGGER.debug("Relay accepted submission with HTTP %s", response.status_code)
            return

        LOGGER.debug("Relay rejected submission with HTTP %s", response.status_code)
        raise RelayRejection(response.status_code, _extract_error(response))


def _extract_error(response: httpx.Response) -> str | None:
    """Return the ``error`` text from a JSON response body, if there is one."""

    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, str) and error.strip():
        return error
    return None
