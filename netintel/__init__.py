"""Website checks for DNS, HTTP and TLS, with findings and a risk score."""

__version__ = "0.1.0"
__all__ = ["analyser", "cli", "collector", "models", "scorer"]