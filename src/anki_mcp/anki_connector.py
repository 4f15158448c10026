import logging
from typing import Any, Dict, Optional

import requests

from .types import AnkiRequest, AnkiResponse

logger = logging.getLogger(__name__)

ANKI_CONNECT_URL = "http://localhost:8765"
ANKI_CONNECT_VERSION = 6


# Custom exceptions for Anki Connect
class AnkiConnectError(Exception):
    """Base exception for Anki Connect errors."""

    pass


class AnkiConnectionError(AnkiConnectError):
    """Raised when unable to connect to Anki."""

    pass


class AnkiAPIError(AnkiConnectError):
    """Raised when Anki Connect API returns an error."""

    pass


class AnkiPermissionError(AnkiAPIError):
    """Raised when permission is denied."""

    pass


class AnkiDuplicateError(AnkiAPIError):
    """Raised when trying to add duplicate notes."""

    pass


def build_request(
    action: str, params: Optional[Dict[str, Any]] = None, api_key: Optional[str] = None
) -> AnkiRequest:
    """Build the JSON body for one AnkiConnect action."""
    payload: AnkiRequest = {
        "action": action,
        "version": ANKI_CONNECT_VERSION,
        "params": params if params is not None else {},
    }
    if api_key:
        payload["key"] = api_key
    return payload


def unwrap_response(body: AnkiResponse) -> Any:
    """Return the ``result`` of an AnkiConnect response or raise its ``error``."""
    if not isinstance(body, dict) or "result" not in body or "error" not in body:
        raise AnkiAPIError(f"Unexpected response from Anki: {body!r}")

    error_msg = body["error"]
    if error_msg is None:
        return body["result"]

    error_msg = str(error_msg)
    lowered = error_msg.lower()

    # Handle specific error types
    if "permission" in lowered:
        raise AnkiPermissionError(f"Permission denied: {error_msg}")
    if "collection" in lowered and "not available" in lowered:
        raise AnkiConnectionError(f"Collection not available: {error_msg}")
    if "duplicate" in lowered:
        raise AnkiDuplicateError(f"Duplicate note: {error_msg}")
    raise AnkiAPIError(f"Anki Connect API error: {error_msg}")


class AnkiConnector:
    """Interface for connecting to Anki via AnkiConnect addon."""

    def __init__(
        self,
        url: str = ANKI_CONNECT_URL,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    def invoke(self, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send one action to AnkiConnect and return its result.

        Exactly one POST is made; nothing is retried.

        Raises:
            AnkiConnectionError: Anki could not be reached or answered with an
                HTTP error.
            AnkiAPIError: AnkiConnect reported an error for the action.
        """
        payload = build_request(action, params, self.api_key)
        logger.debug("AnkiConnect request: %s", action)

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.ConnectionError as e:
            raise AnkiConnectionError(
                f"Cannot connect to Anki. Is Anki running with AnkiConnect addon? {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            raise AnkiConnectionError(f"Request to Anki timed out: {e}") from e
        except requests.exceptions.HTTPError as e:
            raise AnkiConnectionError(f"HTTP error when connecting to Anki: {e}") from e
        except requests.exceptions.RequestException as e:
            raise AnkiConnectionError(f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise AnkiAPIError(f"Invalid JSON response from Anki: {e}") from e

        return unwrap_response(body)

    def close(self) -> None:
        self.session.close()
