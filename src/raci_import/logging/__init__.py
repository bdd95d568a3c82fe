"""Logging setup and error-row export."""
