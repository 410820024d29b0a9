"""Vault client for the spreadsheet-backed issue store."""

import logging
from typing import Any

import httpx

from schemas.vault import VaultPayload

from .client import Client
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class VaultClient(Client):
    """Client for the Vault web-app endpoint.

    The Vault is a spreadsheet published through a single script endpoint:
    GET returns every row as a JSON array of loosely-typed objects (one row
    per article), POST accepts a ``{timestamp, issues}`` document. The
    endpoint answers GETs with a redirect to the rendered content, so
    redirects are followed.

    Example:
        config = {"base_url": "https://script.google.com/macros/s/<id>/exec"}
        with VaultClient(config) as client:
            rows = client.fetch()
    """

    def fetch(self) -> list[dict[str, Any]]:
        """Fetch the raw Vault rows.

        Returns:
            List of row objects as returned by the endpoint

        Raises:
            ValidationError: If the body is not JSON or not a JSON array
            APIError: If the endpoint returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        response = self.get(self.base_url, follow_redirects=True)

        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError("Vault response is not valid JSON") from e

        if not isinstance(data, list):
            raise ValidationError(
                f"Vault response is not an array (got {type(data).__name__})"
            )

        logger.debug(f"Received {len(data)} rows from the Vault")
        return data

    def push(self, payload: VaultPayload) -> httpx.Response:
        """Submit a payload to the Vault.

        The body is sent as text/plain so the script endpoint receives it
        verbatim. The response is returned unchecked: the endpoint does not
        confirm delivery and its status carries no meaning for the caller.

        Args:
            payload: Timestamped issues to submit

        Returns:
            The raw HTTP response

        Raises:
            ConnectionError: If the network connection fails
        """
        return self.post(
            self.base_url,
            check_status=False,
            content=payload.to_json(),
            headers={"Content-Type": "text/plain"},
        )
