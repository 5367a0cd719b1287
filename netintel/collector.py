"""Gather DNS, HTTP and TLS facts about a website."""

from __future__ import annotations

import http.client
import socket
import ssl
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TypeVar
from urllib.parse import urljoin, urlsplit

from .models import Result

T = TypeVar("T")

_RETRY_ATTEMPTS = 3
_RETRY_DELAY = 1.0
_TIMEOUT = 10.0
_MAX_REDIRECTS = 10
_REDIRECT_CODES = frozenset({301, 302, 303, 307, 308})
_USER_AGENT = "netintel"


class TooManyRedirects(Exception):
    """Raised when a redirect chain exceeds the allowed length."""


@dataclass
class _Response:
    status: str
    status_code: int
    headers: dict[str, list[str]]
    final_url: str
    peer_cert: dict | None


def extract_hostname(raw_url: str) -> str:
    """Return the host part of a URL, or '' when there is none."""
    try:
        netloc = urlsplit(raw_url).netloc
    except ValueError:
        return ""
    netloc = netloc.rpartition("@")[2]
    if netloc.startswith("["):
        return netloc[1:].partition("]")[0]
    return netloc.partition(":")[0]


def retry(attempts: int, delay: float, fn: Callable[[], T]) -> T | None:
    """Call ``fn`` up to ``attempts`` times, waiting longer after each failure.

    The value of the first successful call is returned; if every call fails
    the last exception is raised again.
    """
    error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            return fn()
        except Exception as exc:  # any failure is worth another attempt
            error = exc
        time.sleep(delay * attempt)
    if error is not None:
        raise error
    return None


def _canonical_header(name: str) -> str:
    return "-".join(part.capitalize() for part in name.split("-"))


def _group_headers(pairs: list[tuple[str, str]]) -> dict[str, list[str]]:
    headers: dict[str, list[str]] = {}
    for name, value in pairs:
        headers.setdefault(_canonical_header(name), []).append(value)
    return headers


def _request(url: str) -> _Response:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname
    if not host:
        raise ValueError(f"no host in request URL {url!r}")
    port = parts.port
    if scheme == "https":
        conn: http.client.HTTPConnection = http.client.HTTPSConnection(
            host, port, timeout=_TIMEOUT, context=ssl.create_default_context()
        )
    elif scheme == "http":
        conn = http.client.HTTPConnection(host, port, timeout=_TIMEOUT)
    else:
        raise ValueError(f"unsupported protocol scheme {parts.scheme!r}")

    target = parts.path or "/"
    if parts.query:
        target += "?" + parts.query

    try:
        conn.request("GET", target, headers={"User-Agent": _USER_AGENT})
        response = conn.getresponse()
        cert = None
        if scheme == "https" and isinstance(conn.sock, ssl.SSLSocket):
            cert = conn.sock.getpeercert()
        return _Response(
            status=f"{response.status} {response.reason}".rstrip(),
            status_code=response.status,
            headers=_group_headers(response.getheaders()),
            final_url=url,
            peer_cert=cert,
        )
    finally:
        conn.close()


def _fetch(url: str, result: Result) -> _Response:
    """GET ``url``, following redirects and recording how many were taken."""
    requests_made = 0
    current = url
    while True:
        response = _request(current)
        requests_made += 1
        locations = response.headers.get("Location")
        if response.status_code not in _REDIRECT_CODES or not locations:
            return response
        if requests_made >= _MAX_REDIRECTS:
            raise TooManyRedirects("too many redirects")
        result.http.redirect_count = requests_made
        current = urljoin(current, locations[0])


def _lookup_ips(host: str) -> list[str]:
    ips: list[str] = []
    for *_, sockaddr in socket.getaddrinfo(host, None):
        address = str(sockaddr[0])
        if address not in ips:
            ips.append(address)
    return ips


def _reverse_names(ip: str) -> list[str]:
    try:
        name, aliases, _ = socket.gethostbyaddr(ip)
    except OSError:
        return []
    return [name, *aliases]


def _issuer_common_name(cert: dict) -> str:
    for rdn in cert.get("issuer", ()):
        for key, value in rdn:
            if key == "commonName":
                return value
    return ""


def check_website(raw_url: str) -> Result:
    """Collect DNS, HTTP and TLS information for ``raw_url``.

    Raises ValueError when the URL has no host. Lookup and request failures
    are recorded in ``Result.errors`` instead of being raised.
    """
    host = extract_hostname(raw_url)
    if not host:
        raise ValueError(f"invalid URL: {raw_url}")
    result = Result(url=raw_url, host=host)

    try:
        ips = retry(_RETRY_ATTEMPTS, _RETRY_DELAY, lambda: _lookup_ips(host)) or []
    except Exception as exc:
        result.errors.append(f"DNS lookup failed: {exc}")
    else:
        for ip in ips:
            result.dns.ips.append(ip)
            result.dns.reverse_dns.extend(_reverse_names(ip))

    start = time.monotonic()
    try:
        response = retry(_RETRY_ATTEMPTS, _RETRY_DELAY, lambda: _fetch(raw_url, result))
    except Exception as exc:
        result.errors.append(f"HTTP request faild: {exc}")
        return result

    info = result.http
    info.status = response.status
    info.status_code = response.status_code
    info.latency = timedelta(seconds=time.monotonic() - start)
    info.server = (response.headers.get("Server") or [""])[0]
    info.headers = response.headers
    info.final_url = response.final_url
    info.used_https = urlsplit(response.final_url).scheme == "https"

    cert = response.peer_cert
    if cert and cert.get("notAfter"):
        expiry = datetime.fromtimestamp(
            ssl.cert_time_to_seconds(cert["notAfter"]), timezone.utc
        )
        result.tls.issuer = _issuer_common_name(cert)
        result.tls.expiry = expiry
        remaining = expiry - datetime.now(timezone.utc)
        result.tls.days_left = int(remaining.total_seconds() / 3600 / 24)
    else:
        result.errors.append("no TLS detected")

    return result