"""
Structured logging framework for Clinical Encounter.

Provides correlation IDs, context propagation, and JSON output for production
observability. Patient-identifying fields are redacted before they reach a log.

Fun fact: HIPAA's "minimum necessary" rule applies to logs too - an operator
debugging a version conflict needs the stream ID, not the patient's name.
"""

import contextvars
import logging
import os
import secrets
import sys
import time
from typing import Any

import structlog

# Context variable for correlation ID (thread-safe)
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def generate_correlation_id() -> str:
    """
    Generate a new correlation ID using cryptographic randomness.

    Returns a 22-character URL-safe base64 string (128 bits of entropy).
    """
    return secrets.token_urlsafe(16)


def get_correlation_id() -> str:
    """Get the current correlation ID, or generate a new one if not set."""
    cid = correlation_id_var.get()
    if not cid:
        cid = generate_correlation_id()
        correlation_id_var.set(cid)
    return cid


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    correlation_id_var.set(correlation_id)


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to log event."""
    event_dict["correlation_id"] = get_correlation_id()
    return event_dict


def is_production() -> bool:
    """
    Determine if running in production environment.

    Checks ENVIRONMENT environment variable. Returns True if 'production', False otherwise.
    Defaults to False (development) if not set.
    """
    return os.getenv("ENVIRONMENT", "development").lower() == "production"


def configure_logging(
    *,
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        json_output: If True, output JSON logs. If False, human-readable console
                    logs. Defaults to True only when ENVIRONMENT=production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                  Defaults to the LOG_LEVEL environment variable, then INFO.
    """
    if json_output is None:
        json_output = is_production()
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_correlation_id,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.ExceptionRenderer(),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


# Clinical PII that must never appear in logs
REDACTED_FIELDS = {
    "patient_name",
    "age_in_years",
}


def redact_context(context: dict[str, Any]) -> dict[str, Any]:
    """
    Redact patient-identifying fields from log context.

    Args:
        context: Dictionary of log context

    Returns:
        New dictionary with sensitive fields redacted

    Example:
        >>> redact_context({"patient_name": "Fred Jones", "ward": 45})
        {'patient_name': '***REDACTED***', 'ward': 45}
    """
    return {
        k: "***REDACTED***" if k in REDACTED_FIELDS else v
        for k, v in context.items()
    }


class LogOperation:
    """Context manager for logging operations with automatic timing."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context: Any,
    ):
        """
        Initialize operation logger.

        Args:
            logger: Structured logger instance
            operation: Operation name (e.g., "save_encounter", "load_encounter")
            **context: Additional context to include in logs
        """
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time: float = 0.0

    def __enter__(self) -> "LogOperation":
        self.start_time = time.perf_counter()
        self.logger.debug(
            f"{self.operation} started",
            operation=self.operation,
            **redact_context(self.context),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        duration_ms = (time.perf_counter() - self.start_time) * 1000
        redacted = redact_context(self.context)

        if exc_type is None:
            self.logger.info(
                f"{self.operation} completed",
                operation=self.operation,
                duration_ms=round(duration_ms, 2),
                **redacted,
            )
        else:
            # Stack traces only outside production
            self.logger.error(
                f"{self.operation} failed",
                operation=self.operation,
                duration_ms=round(duration_ms, 2),
                error=str(exc_val),
                exc_info=not is_production(),
                **redacted,
            )
