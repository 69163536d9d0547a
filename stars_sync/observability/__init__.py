"""Observability layer - structured logging."""

from stars_sync.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    log_context,
    setup_logging,
)

__all__ = ["setup_logging", "get_logger", "bind_context", "log_context", "clear_context"]
