from datetime import datetime, timedelta, timezone

import pytest

from netintel.analyser import (
    analyse,
    check_dns,
    check_http_behavior,
    check_http_security_headers,
    check_http_server_headers,
    check_http_status,
    check_status,
    check_tls,
)
from netintel.models import DNSInfo, HTTPInfo, Result, Severity, TLSInfo


def _now():
    return datetime.now(timezone.utc)


def test_analyse_integration():
    result = Result(http=HTTPInfo(status_code=500, used_https=False), dns=DNSInfo(ips=[]))
    findings = analyse(result)
    assert len(findings) > 0


def test_analyse_none_returns_empty():
    assert analyse(None) == []


def test_analyser_missing_headers():
    result = Result(http=HTTPInfo(headers={}))
    assert any("HSTS" in f.message for f in analyse(result))


def test_analyse_order_of_checks():
    result = Result(http=HTTPInfo(status_code=500), dns=DNSInfo(ips=[]))
    types = [f.type for f in analyse(result)]
    assert types == ["DNS", "HTTP", "Headers", "Headers", "TLS"]


def test_dns_no_ips():
    findings = check_dns(Result(dns=DNSInfo(ips=[])))
    assert len(findings) == 1
    assert findings[0].severity is Severity.HIGH
    assert findings[0].message == "Domain dose not resolve to any IP"


def test_dns_multiple_ips():
    findings = check_dns(Result(dns=DNSInfo(ips=["1.1.1.1", "8.8.8.8"])))
    assert any("multiple" in f.message for f in findings)


def test_dns_single_ip_with_reverse_has_no_findings():
    result = Result(dns=DNSInfo(ips=["1.1.1.1"], reverse_dns=["one.example.com."]))
    assert check_dns(result) == []


def test_dns_missing_reverse():
    findings = check_dns(Result(dns=DNSInfo(ips=["1.1.1.1"])))
    assert [f.message for f in findings] == ["No reverse DNS records found"]
    assert findings[0].severity is Severity.MEDIUM


def test_http_500_status():
    findings = check_http_status(Result(http=HTTPInfo(status_code=500)))
    assert len(findings) > 0


@pytest.mark.parametrize(
    "code, expected",
    [
        (200, []),
        (302, []),
        (404, [Severity.MEDIUM]),
        (499, [Severity.MEDIUM]),
        (500, [Severity.HIGH]),
        (503, [Severity.HIGH]),
    ],
)
def test_check_status(code, expected):
    assert [f.severity for f in check_status(HTTPInfo(status_code=code))] == expected


def test_server_header_disclosure():
    findings = check_http_server_headers(HTTPInfo(server="nginx"))
    assert len(findings) == 1
    assert findings[0].severity is Severity.LOW
    assert findings[0].message == "Server header exposed (information disclosure)nginx"
    assert check_http_server_headers(HTTPInfo()) == []


def test_http_missing_hsts():
    result = Result(http=HTTPInfo(used_https=True, headers={}))
    findings = check_http_security_headers(result)
    assert any("HSTS" in f.message for f in findings)


def test_security_headers_present_case_insensitive():
    headers = {
        "strict-transport-security": ["max-age=63072000"],
        "Content-Security-Policy": ["default-src 'self'"],
    }
    assert check_http_security_headers(Result(http=HTTPInfo(headers=headers))) == []


def test_security_headers_none_means_missing():
    findings = check_http_security_headers(Result())
    assert [f.message for f in findings] == [
        "Missing HSTS header",
        "Missing Content Security Policy",
    ]


def test_behavior_no_https_no_redirect():
    findings = check_http_behavior(Result(http=HTTPInfo()))
    assert [f.severity for f in findings] == [Severity.HIGH]


def test_behavior_redirect_chain():
    findings = check_http_behavior(Result(http=HTTPInfo(redirect_count=3)))
    assert [f.message for f in findings] == ["Redirect chain detected"]


def test_behavior_excessive_redirects():
    findings = check_http_behavior(Result(http=HTTPInfo(redirect_count=4, used_https=True)))
    assert [f.message for f in findings] == ["Excessive redirects"]


def test_tls_no_https():
    findings = check_tls(Result(http=HTTPInfo(used_https=False)))
    assert len(findings) > 0
    assert findings[0].severity is Severity.HIGH


def test_tls_expired_cert():
    result = Result(
        http=HTTPInfo(used_https=True),
        tls=TLSInfo(expiry=_now() - timedelta(hours=24)),
    )
    assert check_tls(result)[0].severity is Severity.CRITICAL


def test_tls_valid_cert():
    result = Result(
        http=HTTPInfo(used_https=True),
        tls=TLSInfo(expiry=_now() + timedelta(days=30)),
    )
    assert check_tls(result) == []


def test_tls_expiring_soon():
    result = Result(
        http=HTTPInfo(used_https=True),
        tls=TLSInfo(expiry=_now() + timedelta(days=3)),
    )
    findings = check_tls(result)
    assert [f.severity for f in findings] == [Severity.HIGH]


def test_tls_uses_days_left_without_expiry():
    result = Result(http=HTTPInfo(used_https=True), tls=TLSInfo(days_left=-2))
    assert check_tls(result)[0].severity is Severity.CRITICAL


def test_tls_naive_expiry():
    result = Result(
        http=HTTPInfo(used_https=True),
        tls=TLSInfo(expiry=datetime.now() + timedelta(days=30)),
    )
    assert check_tls(result) == []


def test_analyser_tls_expired():
    result = Result(
        http=HTTPInfo(used_https=True),
        tls=TLSInfo(days_left=-1, expiry=_now() - timedelta(hours=24)),
    )
    findings = analyse(result)
    assert any(
        f.severity is Severity.CRITICAL and "expired" in f.message for f in findings
    )