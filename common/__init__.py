"""Common utilities for dicebox hosts."""
from .config import configure_logger, get_plugin_config, load_config, parse_log_level

__all__ = ['configure_logger', 'get_plugin_config', 'load_config', 'parse_log_level']
