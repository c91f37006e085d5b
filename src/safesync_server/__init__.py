"""SafeSync server: user accounts, message relay and friendship graph over HTTP/JSON."""

__version__ = "0.1.0"
