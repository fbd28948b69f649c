"""GitHub Actions wrapper for the less-advanced-security SARIF scanner."""

__version__ = "0.3.0"
