"""Backend client errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class PortainerClientError(Exception):
    """The Portainer API could not be reached or answered unusably."""


class PortainerAPIError(PortainerClientError):
    """The Portainer API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"API error (status {status_code}): {message}")
        self.status_code = status_code
        self.message = message

    @classmethod
    def from_response(cls, response: httpx.Response) -> PortainerAPIError:
        """Prefer the backend's ``message``/``details`` over the raw body."""
        message = response.reason_phrase or "request failed"
        try:
            body = response.json()
        except ValueError:
            text = response.text.strip()
            if text:
                message = text
        else:
            if isinstance(body, dict):
                parts = [str(body[key]) for key in ("message", "details") if body.get(key)]
                if parts:
                    message = ": ".join(parts)
        return cls(response.status_code, message)
