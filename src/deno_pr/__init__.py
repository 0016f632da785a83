"""Fetch and verify Deno CI build artifacts for a pull request or commit."""

__version__ = "0.1.0"
