"""
Centralized logging configuration for the vault orders client.

This module provides standardized logging configuration using structlog
for all components. Remote calls are logged through `log_remote_call`
so every submitted transaction and read leaves one structured event.
"""
import logging
import sys
from typing import Any, Optional, Sequence

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_remote_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for remote call auditing.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for remote calls
    """
    return get_logger(name).bind(
        subsystem="remote",
        audit_trail=True
    )


def _printable(value: Any) -> Any:
    # Wide integers exceed what JSON consumers can hold as numbers
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_printable(item) for item in value]
    return value


def log_remote_call(
    logger: FilteringBoundLogger,
    contract: str,
    operation: str,
    kind: str,
    args: Sequence[Any] = (),
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a remote invocation with standardized format.

    Args:
        logger: Structlog logger instance
        contract: Address of the contract being called
        operation: Remote operation name
        kind: "transact" for state-changing calls, "call" for reads
        args: Encoded call arguments
        context: Additional context data
    """
    bound_logger = logger.bind(
        contract=contract,
        operation=operation,
        call_kind=kind,
        args=_printable(list(args)),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if kind == "transact":
        bound_logger.info("Submitting transaction")
    else:
        bound_logger.debug("Reading contract state")
