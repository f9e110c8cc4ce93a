"""Ways to find out which network address an attendance action comes from."""

from __future__ import annotations

import ipaddress
import logging
from typing import Optional, Protocol

import requests
from flask import has_request_context, request

logger = logging.getLogger(__name__)


def normalize_ip(value: Optional[str]) -> Optional[str]:
    """Return the canonical text form of an IP address, or None if it is not one."""

    if not value:
        return None
    try:
        return str(ipaddress.ip_address(str(value).strip()))
    except ValueError:
        return None


class OriginLookup(Protocol):
    def current_origin(self) -> Optional[str]:
        """Caller's public IP, or None when it cannot be determined."""

        raise NotImplementedError


class RequestOriginLookup:
    """Origin of the current Flask request.

    X-Forwarded-For (first hop) is honoured only behind a trusted proxy.
    """

    def __init__(self, *, trust_proxy_headers: bool = False):
        self._trust_proxy_headers = trust_proxy_headers

    def current_origin(self) -> Optional[str]:
        if not has_request_context():
            return None

        if self._trust_proxy_headers:
            forwarded = request.headers.get("X-Forwarded-For", "")
            first = forwarded.split(",")[0].strip()
            if first:
                return normalize_ip(first)
        return normalize_ip(request.remote_addr)


class HttpOriginLookup:
    """Ask an external echo service (ipify-style JSON ``{"ip": ...}``) for our public IP.

    Used by kiosk-style deployments where the app runs on the office network.
    A slow or failing service yields None so the gate fails closed.
    """

    def __init__(self, url: str, *, timeout_seconds: float = 5.0, session: requests.Session | None = None):
        self._url = url
        self._timeout = float(timeout_seconds)
        self._session = session or requests.Session()

    def current_origin(self) -> Optional[str]:
        try:
            response = self._session.get(self._url, timeout=self._timeout, headers={"Accept": "application/json"})
            response.raise_for_status()
            payload = response.json()
            ip = normalize_ip(payload.get("ip") if isinstance(payload, dict) else None)
        except (requests.RequestException, ValueError) as e:
            logger.warning("Network origin lookup failed: %s", e)
            return None

        if ip is None:
            logger.warning("Network origin lookup returned no usable address")
        return ip


class StaticOriginLookup:
    """Fixed answer; handy for tests and CLI tools."""

    def __init__(self, ip: Optional[str]):
        self._ip = normalize_ip(ip)

    def current_origin(self) -> Optional[str]:
        return self._ip
