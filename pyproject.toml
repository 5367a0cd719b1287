[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netintel"
version = "0.1.0"
description = "Website checks: DNS, HTTP and TLS findings with a risk score"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitoring", "dns", "http", "tls", "security", "website"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netintel = "netintel.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["netintel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
