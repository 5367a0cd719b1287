"""Data types shared by the collector, analyser and scorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

_ZERO_TIME = "0001-01-01T00:00:00Z"


class Severity(str, Enum):
    """How serious a finding is."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        return self.value


@dataclass
class Finding:
    """A single observation about a checked site."""

    severity: Severity
    type: str = ""
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "Severity": Severity(self.severity).value,
            "Type": self.type,
            "Message": self.message,
        }


@dataclass
class HTTPInfo:
    """What was learnt from the HTTP request."""

    status: str = ""
    status_code: int = 0
    latency: timedelta = field(default_factory=timedelta)
    server: str = ""
    headers: dict[str, list[str]] | None = None
    final_url: str = ""
    redirect_count: int = 0
    used_https: bool = False

    def _to_dict(self) -> dict:
        return {
            "Status": self.status,
            "StatusCode": self.status_code,
            "Latency": (self.latency // timedelta(microseconds=1)) * 1000,
            "Server": self.server,
            "Headers": (
                None
                if self.headers is None
                else {name: list(values) for name, values in self.headers.items()}
            ),
            "FinalURL": self.final_url,
            "RedirectCount": self.redirect_count,
            "UsedHTTPS": self.used_https,
        }


@dataclass
class TLSInfo:
    """Details of the peer certificate; ``expiry`` is None when unknown."""

    issuer: str = ""
    expiry: datetime | None = None
    days_left: int = 0

    def _to_dict(self) -> dict:
        return {
            "Issuer": self.issuer,
            "Expiry": _format_time(self.expiry),
            "DaysLeft": self.days_left,
        }


@dataclass
class DNSInfo:
    """Addresses and reverse names of the host."""

    ips: list[str] = field(default_factory=list)
    reverse_dns: list[str] = field(default_factory=list)

    def _to_dict(self) -> dict:
        return {"IPs": list(self.ips), "ReverseDNS": list(self.reverse_dns)}


@dataclass
class Result:
    """Everything collected about one URL."""

    url: str = ""
    host: str = ""
    errors: list[str] = field(default_factory=list)
    http: HTTPInfo = field(default_factory=HTTPInfo)
    tls: TLSInfo = field(default_factory=TLSInfo)
    dns: DNSInfo = field(default_factory=DNSInfo)

    def to_dict(self) -> dict:
        return {
            "URL": self.url,
            "Host": self.host,
            "Errors": list(self.errors),
            "HTTP": self.http._to_dict(),
            "TLS": self.tls._to_dict(),
            "DNS": self.dns._to_dict(),
        }


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
        return moment.isoformat().replace("+00:00", "Z")
    return moment.isoformat()