"""
Structured logging for Backend Lingua.

JSON logs with timestamp, level, event_type and wallet fields.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_lingua.lingua_logging.logger import bind_wallet, get_logger, short_wallet

__all__ = ["bind_wallet", "get_logger", "short_wallet"]
