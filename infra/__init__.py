# Infrastructure module - Logging, configuration and the HTTP tool surface
# The service bus is imported from infra.service_bus directly, it depends on tools

from .logging import (
    get_logger, configure_logging, CallContext,
    get_call_id, generate_call_id
)
from .config import ConfigManager, AutomationSettings, LOG_LEVELS, load_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "CallContext",
    "get_call_id",
    "generate_call_id",
    # Config
    "ConfigManager",
    "AutomationSettings",
    "load_settings",
    "LOG_LEVELS",
]
