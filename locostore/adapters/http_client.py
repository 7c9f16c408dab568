"""Shared HTTP transport utilities for the Loco client.

This module provides a thin wrapper around ``requests.Session`` so every
resource group of the client shares timeout policy, retry behavior, and
API-key header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``locostore.adapters.api_errors.ApiTimeoutError`` for typed transport failures.

Call context:
    - Constructed per project API key by ``locostore/adapters/loco_client.py``.
    - Used only inside the adapter layer; the storage adapter talks to ports.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import exceptions as req_exc

from locostore.adapters.api_errors import ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Requests wrapper with Loco API-key headers and retry loops.

    This class is transport-only. Callers provide endpoint URLs and decide how
    to map non-2xx responses into typed errors.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            api_key: Loco project key sent as ``Authorization: Loco <key>``.
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg
        self._log = logging.getLogger(__name__)

    def _headers(
        self, accept: str = "application/json", content_type: Optional[str] = None
    ) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.api_key:
            headers["Authorization"] = f"Loco {self.api_key}"
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def get(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures."""
        return self._send(
            "GET",
            url,
            params=params,
            headers=self._headers(accept=accept),
            timeout=timeout,
        )

    def post(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        form: Optional[Mapping[str, Any]] = None,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a POST request carrying either form fields or a raw text body.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        data: Any = None
        if form is not None:
            data = dict(form)
        elif body is not None:
            data = body.encode("utf-8")
            content_type = content_type or "text/plain; charset=utf-8"
        return self._send(
            "POST",
            url,
            params=params,
            data=data,
            headers=self._headers(content_type=content_type),
            timeout=timeout,
        )

    def patch(
        self,
        url: str,
        *,
        json_body: Optional[Mapping[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON PATCH request with retries on transport failures."""
        data = None if json_body is None else json.dumps(dict(json_body))
        return self._send(
            "PATCH",
            url,
            data=data,
            headers=self._headers(
                content_type="application/json" if json_body is not None else None
            ),
            timeout=timeout,
        )

    def delete(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        return self._send("DELETE", url, headers=self._headers(), timeout=timeout)

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        context = f"{method} {url}"
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for attempt in range(attempts):
            if attempt:
                self._log.debug("Retrying %s (attempt %d/%d)", context, attempt + 1, attempts)
            try:
                return self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]
