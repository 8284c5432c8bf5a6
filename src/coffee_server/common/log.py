# Coffee Server Logging Module
# Meaningful logging functions for the coffee server

import logging
import sys
from typing import Optional, Dict, Any

# Simple request context tracking
import uuid
from contextvars import ContextVar

from ..config import app_config


# Custom TRACE level (lower than DEBUG)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


class CoffeeFormatter(logging.Formatter):
    """Custom formatter that adds caller context and colors for different log levels."""

    # Color codes for different log levels
    COLORS = {
        'TRACE': '\033[90m',    # Dark gray
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[0m',      # Default
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[91m', # Bright red
        'RESET': '\033[0m'      # Reset color
    }

    def format(self, record):
        # Add caller context (file:function:line)
        if hasattr(record, 'pathname') and hasattr(record, 'funcName'):
            filename = record.pathname.split('/')[-1].split('\\')[-1]
            record.caller_context = f"{filename}:{record.funcName}:{record.lineno}"
        else:
            record.caller_context = "unknown"

        # Add color coding if terminal supports it
        levelname = record.levelname
        if hasattr(sys.stderr, 'isatty') and sys.stderr.isatty():
            color = self.COLORS.get(levelname, self.COLORS['RESET'])
            record.levelname = f"{color}{levelname}{self.COLORS['RESET']}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class Logger:
    """Named logger with keyword parameters and automatic request context."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"coffee_server.{name}")

    def debug(self, message: str, **kwargs):
        """Log debug level message with automatic context."""
        context = get_context_suffix()
        if kwargs:
            params = ", ".join([f"{k}={v}" for k, v in kwargs.items()])
            self.logger.debug("[%s] %s | %s%s", self.name, message, params, context, stacklevel=2)
        else:
            self.logger.debug("[%s] %s%s", self.name, message, context, stacklevel=2)


# Get log level from configuration or default to INFO
level_map = {
    'TRACE': TRACE_LEVEL,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(caller_context)s - %(message)s",
    level=level_map.get(app_config.LOG_LEVEL, logging.INFO)
)

logger = logging.getLogger("coffee_server")

# Apply custom formatter to all handlers
coffee_formatter = CoffeeFormatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(caller_context)s - %(message)s"
)
for handler in logging.root.handlers:
    handler.setFormatter(coffee_formatter)

# Suppress verbose logging from external libraries
uvicorn_logger = logging.getLogger("uvicorn.access")
uvicorn_logger.setLevel(logging.WARNING)

pymongo_logger = logging.getLogger("pymongo")
pymongo_logger.setLevel(logging.WARNING)


request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

def set_request_context(req_id: Optional[str] = None) -> str:
    """Set context for request tracking - call this at the start of API requests."""
    value = req_id or str(uuid.uuid4())[:8]
    request_id.set(value)
    return value

def get_context_suffix() -> str:
    """Get current context info to append to log messages."""
    req_id = request_id.get()
    if req_id:
        return f" | req_id={req_id}"
    return ""


# === APPLICATION LIFECYCLE ===

def log_app_startup(level: int = logging.INFO):
    logger.log(level, "[APP] Coffee server starting up...")

def log_app_shutdown(level: int = logging.INFO):
    logger.log(level, "[APP] Coffee server shutting down...")

def log_server_listening(host: str, port: int, level: int = logging.INFO):
    logger.log(level, "[APP] coffee server port is: %s (host=%s)", port, host)

# === DATABASE OPERATIONS ===

def log_database_connected(uri: str, level: int = logging.INFO):
    logger.log(level, "[DB] MongoDB client created for: %s", uri)

def log_database_disconnected(level: int = logging.INFO):
    logger.log(level, "[DB] Successfully disconnected from MongoDB database")

def log_database_ping_success(level: int = logging.INFO):
    logger.log(level, "[DB] Pinged your deployment. You successfully connected to MongoDB!")

def log_database_ping_failed(error: str, level: int = logging.WARNING):
    logger.log(level, "[DB] Ping failed, the server keeps running without a reachable database: %s", error)

def log_database_connection_failed(error: str, level: int = logging.ERROR):
    logger.log(level, "[DB] Failed to connect to MongoDB database: %s", error)

def log_database_result(operation: str, collection: str, result: Any, level: int = TRACE_LEVEL):
    context = get_context_suffix()
    logger.log(level, "[DB] %s on '%s' returned: %s%s", operation, collection, result, context)

# === ERROR HANDLING ===

def log_invalid_identifier(value: str, level: int = logging.WARNING):
    context = get_context_suffix()
    logger.log(level, "[VALIDATION] Rejected malformed identifier: '%s'%s", value, context)

def log_database_error(operation: str, error: str, context: Optional[Dict[str, Any]] = None, level: int = logging.ERROR):
    if context:
        logger.log(level, "[DB] Database error during %s: %s, context: %s", operation, error, context)
    else:
        logger.log(level, "[DB] Database error during %s: %s", operation, error)

def log_unexpected_error(operation: str, error: str, context: Optional[Dict[str, Any]] = None, level: int = logging.ERROR):
    if context:
        # Use logger.log with exc_info=True to include stack trace when logging exceptions
        logger.log(level, "[ERROR] Unexpected error during %s: %s, context: %s", operation, error, context, exc_info=True)
    else:
        logger.log(level, "[ERROR] Unexpected error during %s: %s", operation, error, exc_info=True)


# === API REQUESTS ===

def log_api_request(endpoint: str, method: str, level: int = logging.INFO):
    context = get_context_suffix()
    logger.log(level, "[API] %s %s%s", method, endpoint, context)

def log_api_payload(endpoint: str, payload: Dict[str, Any], level: int = logging.DEBUG):
    context = get_context_suffix()
    logger.log(level, "[API] %s payload: %s%s", endpoint, payload, context)

def log_api_error_response(endpoint: str, status_code: int, error: str, level: int = logging.WARNING):
    context = get_context_suffix()
    logger.log(level, "[API] %s responded %d: %s%s", endpoint, status_code, error, context)
