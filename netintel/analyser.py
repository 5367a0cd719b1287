"""Turn a collected result into findings."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from .models import Finding, HTTPInfo, Result, Severity


def analyse(result: Result | None) -> list[Finding]:
    """Run every check and return all findings in order."""
    if result is None:
        return []
    return [
        *check_dns(result),
        *check_http_status(result),
        *check_http_security_headers(result),
        *check_tls(result),
    ]


def check_dns(result: Result) -> list[Finding]:
    dns = result.dns
    if not dns.ips:
        return [Finding(Severity.HIGH, "DNS", "Domain dose not resolve to any IP")]

    findings = []
    if len(dns.ips) > 1:
        findings.append(Finding(Severity.LOW, "DNS", "Domain resolves to multiple IPs"))
    if not dns.reverse_dns:
        findings.append(Finding(Severity.MEDIUM, "DNS", "No reverse DNS records found"))
    return findings


def check_http_status(result: Result) -> list[Finding]:
    return [*check_status(result.http), *check_http_server_headers(result.http)]


def check_status(info: HTTPInfo) -> list[Finding]:
    if info.status_code >= 500:
        return [Finding(Severity.HIGH, "HTTP", "Server error (5xx response)")]
    if info.status_code >= 400:
        return [Finding(Severity.MEDIUM, "HTTP", "Client error (4xx response)")]
    return []


def check_http_server_headers(info: HTTPInfo) -> list[Finding]:
    if info.server:
        return [
            Finding(
                Severity.LOW,
                "HTTP",
                "Server header exposed (information disclosure)" + info.server,
            )
        ]
    return []


def _header_value(headers: Mapping[str, list[str]] | None, name: str) -> str:
    """First value of a header, matched without regard to case, or ''."""
    wanted = name.lower()
    for key, values in (headers or {}).items():
        if key.lower() == wanted and values:
            return values[0]
    return ""


def check_http_security_headers(result: Result) -> list[Finding]:
    headers = result.http.headers
    findings = []
    if not _header_value(headers, "Strict-Transport-Security"):
        findings.append(Finding(Severity.MEDIUM, "Headers", "Missing HSTS header"))
    if not _header_value(headers, "Content-Security-Policy"):
        findings.append(
            Finding(Severity.MEDIUM, "Headers", "Missing Content Security Policy")
        )
    return findings


def check_http_behavior(result: Result) -> list[Finding]:
    info = result.http
    findings = []
    if not info.used_https and info.redirect_count == 0:
        findings.append(Finding(Severity.HIGH, "HTTP", "HTTPS not enfored"))
    if 0 < info.redirect_count <= 3:
        findings.append(Finding(Severity.LOW, "HTTP", "Redirect chain detected"))
    if info.redirect_count > 3:
        findings.append(Finding(Severity.MEDIUM, "HTTP", "Excessive redirects"))
    return findings


def check_tls(result: Result) -> list[Finding]:
    if not result.http.used_https:
        return [Finding(Severity.HIGH, "TLS", "No TLS detected")]

    tls = result.tls
    days_left = tls.days_left
    if tls.expiry is not None:
        remaining = tls.expiry - datetime.now(tls.expiry.tzinfo)
        days_left = int(remaining.total_seconds() / 3600 / 24)

    if days_left < 0:
        return [Finding(Severity.CRITICAL, "TLS", "TLS certificate has expired")]
    if days_left < 7:
        return [Finding(Severity.HIGH, "TLS", "TLS certificate expiring soon")]
    return []