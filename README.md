# netintel

A command-line checker for websites. For each site it looks up DNS records,
makes an HTTP request and reads the TLS certificate. It then lists findings
and gives the site a risk score.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Check one or more sites. A URL that does not start with `http://` or
`https://` gets `https://` put in front of it.

```
netintel check example.com https://example.org
```

The sites are checked at the same time. Each report is printed as soon as
its check finishes, so the order of the reports can differ from the order of
the arguments. A text report shows:

- the URL, the HTTP status line and the request latency
- the `Server` header, if the response sent one
- whether the final URL used HTTPS
- the number of redirects followed (at most 10 requests are made)
- the certificate issuer and expiry date, when a certificate was read
- any errors met while collecting, such as a failed DNS lookup or request
- the findings, each with its severity and type
- the risk score and risk level

To get JSON output instead of text:

```
netintel check --json example.com
```

A URL with no host is reported as `[ERROR] failed for <url>: invalid URL: <url>`.
DNS lookups and HTTP requests are tried up to three times, with a longer wait
after each failure. Each HTTP request times out after 10 seconds.

Running `netintel` with no command prints the help text.

## What is checked

`netintel.analyser.analyse` runs these checks, in this order:

- **DNS**: the domain does not resolve (HIGH). Otherwise, it resolves to more
  than one address (LOW), or it has no reverse DNS records (MEDIUM).
- **HTTP**: a 5xx response (HIGH) or a 4xx response (MEDIUM), and an exposed
  `Server` header (LOW).
- **Headers**: a missing `Strict-Transport-Security` header (MEDIUM) and a
  missing `Content-Security-Policy` header (MEDIUM).
- **TLS**: HTTPS was not used (HIGH). Otherwise, the certificate has expired
  (CRITICAL) or it expires within seven days (HIGH).

`netintel.analyser.check_http_behavior` looks at HTTPS use and redirects. It
reports HTTPS not being enforced, a redirect chain of one to three hops, and
more than three redirects. It is not part of `analyse`, and you call it
yourself if you want it.

## Scoring

`netintel.scorer.calculate` starts each site at 100 points and takes points
off for each finding:

| Severity | Points off |
|----------|------------|
| CRITICAL | 40 |
| HIGH | 25 |
| MEDIUM | 10 |
| LOW | 3 |

A site whose final URL used HTTPS gets 5 points back. The score is kept
between 0 and 100. `netintel.scorer.classify` turns the score into a risk level:

| Score | Risk |
|-------|------|
| 80 or more | LOW |
| 60 to 79 | MEDIUM |
| 40 to 59 | HIGH |
| below 40 | CRITICAL |

## Library use

```python
from netintel.collector import check_website
from netintel.analyser import analyse
from netintel.scorer import calculate
from netintel.cli import format_result

result = check_website("https://example.com")
findings = analyse(result)
score, risk = calculate(result, findings)
print(format_result(result, findings, score, risk))
```

`check_website` raises `ValueError` for a URL with no host. Lookup and request
failures do not raise. They are written to `Result.errors` instead.
`Result.to_dict()` and `Finding.to_dict()` give the structures that the JSON
output is built from. `netintel.cli.run_checks(urls, json_output)` yields one
report per URL as each check finishes.

## Limits

netintel runs each check once and exits. It does not schedule repeated
checks, keep a history of results or send alerts.