"""Command line interface: check one or more websites and report risk."""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import timedelta

from .analyser import analyse
from .collector import check_website
from .models import Finding, Result, Severity
from .scorer import calculate

_RULE = "=" * 33


def normalise_url(url: str) -> str:
    """Assume https when the URL carries no http or https scheme."""
    if url.startswith(("http://", "https://")):
        return url
    return "https://" + url


def _decimal(value: int, unit: int) -> str:
    whole, fraction = divmod(value, unit)
    digits = len(str(unit)) - 1
    fraction_text = str(fraction).rjust(digits, "0").rstrip("0")
    return f"{whole}.{fraction_text}" if fraction_text else str(whole)


def _format_duration(delta: timedelta) -> str:
    nanos = (delta // timedelta(microseconds=1)) * 1000
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_decimal(nanos, 1_000)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_decimal(nanos, 1_000_000)}ms"
    hours, rest = divmod(nanos, 3600 * 10**9)
    minutes, rest = divmod(rest, 60 * 10**9)
    seconds = _decimal(rest, 10**9)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def format_result(
    result: Result, findings: Iterable[Finding], score: int, risk: str
) -> str:
    """Render a human-readable report."""
    info = result.http
    lines = [
        _RULE,
        f"URL:\t{result.url}",
        f"Status:\t{info.status}",
        f"Latency:\t{_format_duration(info.latency)}",
    ]
    if info.server:
        lines.append(f"Server:\t{info.server}")
    lines.append(f"HTTPS:\t{'true' if info.used_https else 'false'}")
    lines.append(f"Redirects:\t{info.redirect_count}")

    if result.tls.expiry is not None:
        lines.append(f"TLS Issuer:\t{result.tls.issuer}")
        lines.append(f"Expires:\t{result.tls.expiry.strftime('%Y-%m-%d')}")

    if result.errors:
        lines += ["", "Errors:"]
        lines += [f" - {error}" for error in result.errors]

    lines += ["", "Findings:"]
    lines += [
        f" [{Severity(f.severity).value}] ({f.type}) {f.message}" for f in findings
    ]
    lines += ["", f"Risk Score: {score} ({risk})", _RULE]
    return "\n".join(lines)


def format_json(
    result: Result, findings: Sequence[Finding] | None, score: int, risk: str
) -> str:
    """Render the report as indented JSON."""
    document = {
        "result": result.to_dict(),
        "findings": [f.to_dict() for f in findings] if findings else None,
        "score": score,
        "risk": risk,
    }
    text = json.dumps(document, indent=1, ensure_ascii=False)
    for char, escape in (
        ("&", "\\u0026"),
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text


def run_checks(urls: Iterable[str], json_output: bool = False) -> Iterator[str]:
    """Check every URL concurrently, yielding a report as each one finishes."""
    targets = [normalise_url(url) for url in urls]
    if not targets:
        return
    with ThreadPoolExecutor(max_workers=len(targets)) as pool:
        pending = {pool.submit(check_website, url): url for url in targets}
        for future in as_completed(pending):
            url = pending[future]
            try:
                result = future.result()
            except ValueError as exc:
                yield f"[ERROR] failed for {url}: {exc}"
                continue
            findings = analyse(result)
            score, risk = calculate(result, findings)
            render = format_json if json_output else format_result
            yield render(result, findings, score, risk)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monitor", description="Website & infrastructure monitoring tool"
    )
    commands = parser.add_subparsers(dest="command")
    check = commands.add_parser("check", help="Check a website")
    check.add_argument("urls", nargs="+", metavar="url")
    check.add_argument(
        "--json", action="store_true", help="Output results in JSON format"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    for report in run_checks(args.urls, args.json):
        print(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())