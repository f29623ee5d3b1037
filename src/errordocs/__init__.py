"""Cross-check error documentation pages against a linting engine."""

__version__ = "0.3.0"
