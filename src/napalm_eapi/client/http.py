"""Low-level HTTP client wrapper for the EOS eAPI endpoint."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any

import requests

from napalm_eapi.client.errors import EapiAuthError, EapiRequestError, EapiResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("napalm-eapi")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"napalm-eapi/{_VERSION}"


def _normalise_base_url(url: str, default_scheme: str = "https") -> str:
    """Ensure the URL has a scheme and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = f"{default_scheme}://{url}"
    return url


class EapiHTTP:
    """Low-level HTTP wrapper around :class:`requests.Session`.

    Handles HTTP basic authentication, a default ``User-Agent`` header,
    timeout, TLS verification, and maps transport/HTTP errors to
    :mod:`.errors` types.

    Args:
        base_url: Switch base URL, e.g. ``https://192.0.2.10``.
        username: eAPI username.
        password: eAPI password.
        timeout_s: Request timeout in seconds (default 60).
        verify_tls: Whether to verify TLS certificates (default False).
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout_s: float = 60.0,
        verify_tls: bool = False,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._session: requests.Session = requests.Session()
        self._session.auth = (username, password)
        self._session.headers.update(
            {"User-Agent": _USER_AGENT, "Content-Type": "application/json"}
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def post_json(self, path: str, payload: dict[str, Any]) -> requests.Response:
        """Send an HTTP POST with a JSON body to *path*.

        Args:
            path: URL path relative to :attr:`base_url`.
            payload: JSON-serialisable request body.

        Returns:
            The :class:`requests.Response`.

        Raises:
            EapiRequestError: On any transport-level failure.
            EapiAuthError: On HTTP 401.
            EapiResponseError: On any other non-2xx HTTP status code.
        """
        url = self.base_url + path
        try:
            resp = self._session.post(
                url,
                json=payload,
                timeout=self.timeout_s,
                verify=self.verify_tls,
            )
        except requests.exceptions.RequestException as exc:
            raise EapiRequestError(url, exc) from exc
        self._raise_for_status(resp)
        return resp

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self._session.close()

    def __enter__(self) -> EapiHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if resp.status_code == 401:
            raise EapiAuthError(f"Credentials rejected by {resp.url!r}")
        if not resp.ok:
            raise EapiResponseError(resp.status_code, resp.url)
