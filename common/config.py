#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import json
import logging
from typing import Any, Dict

import yaml

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logger(logger,
                     log_file=None,
                     log_format=LOG_FORMAT,
                     log_level=logging.INFO):
    """Configure a logger with a file or stream handler

    Args:
        logger: Logger instance or logger name string
        log_file: File path string or file-like object (None for stderr)
        log_format: Format string for log messages
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)

    Returns:
        Configured logger instance
    """
    # Create file handler if path string, otherwise stream handler
    if isinstance(log_file, str):
        handler = logging.FileHandler(
            log_file,
            mode='a',
            encoding='utf-8',
            errors='replace'  # Replace problematic chars
        )
    else:
        handler = logging.StreamHandler(log_file)  # Default to stderr if None

    formatter = logging.Formatter(log_format)

    # Get logger by name if string provided
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(log_level)

    return logger


def parse_log_level(name, default=logging.INFO):
    """Map a level name such as 'debug' to its logging constant"""
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def load_config(config_file: str) -> Dict[str, Any]:
    """Load configuration from a JSON or YAML file

    Args:
        config_file: Path to the file; '.yaml'/'.yml' are read as YAML,
            anything else as JSON

    Returns:
        Configuration dictionary (empty if the file is empty)
    """
    with open(config_file, 'r', encoding='utf-8') as fp:
        if config_file.endswith(('.yaml', '.yml')):
            conf = yaml.safe_load(fp)
        else:
            conf = json.load(fp)
    return conf or {}


def get_plugin_config(conf: Dict[str, Any], namespace: str) -> Dict[str, Any]:
    """Extract a plugin's block from the configuration

    Looks for conf['plugins'][namespace]; configs without a 'plugins'
    section are treated as the plugin's own block.
    """
    plugins = conf.get('plugins')
    if isinstance(plugins, dict):
        return plugins.get(namespace) or {}
    return conf
