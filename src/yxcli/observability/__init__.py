"""Logging configuration for the CLI process."""

from yxcli.observability.logging import redact_log_value, setup_logging, shutdown_logging

__all__ = ["redact_log_value", "setup_logging", "shutdown_logging"]
