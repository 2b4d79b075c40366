"""
Logging utilities for the scoreboard service

Provides centralized logging configuration.
"""

import os
import copy
import logging
import logging.config
from typing import Optional, Dict, Any
import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'loggers': {
        'scoreboard': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        },
        'uvicorn': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    },
    'root': {
        'level': 'WARNING',
        'handlers': ['console']
    }
}


def load_logging_config(config_path: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Load a dictConfig mapping from a YAML file

    Args:
        config_path: Path to logging configuration file

    Returns:
        dict or None if the file is missing or unreadable
    """
    if not config_path or not os.path.exists(config_path):
        return None

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning(f"Failed to load logging config from {config_path}: {e}")
        return None

    if not isinstance(config, dict):
        logging.getLogger(__name__).warning(f"Logging config {config_path} is not a mapping, ignoring")
        return None
    return config


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> Dict[str, Any]:
    """
    Setup logging configuration

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'detailed', 'json')

    Returns:
        The configuration that was applied
    """
    config = load_logging_config(config_path) or copy.deepcopy(DEFAULT_LOGGING_CONFIG)
    config.setdefault('handlers', {})
    config.setdefault('loggers', {})
    config.setdefault('formatters', {})

    # Apply environment-specific overrides
    environment = os.getenv('ENVIRONMENT', 'development')
    if environment in config:
        env_config = config.pop(environment)

        if 'handlers' in env_config:
            config['handlers'].update(env_config['handlers'])

        if 'loggers' in env_config:
            config['loggers'].update(env_config['loggers'])

    # Per-environment sections are not part of the dictConfig schema
    for key in [k for k in config if k in ('development', 'staging', 'production', 'test')]:
        config.pop(key)

    if log_level:
        log_level = log_level.upper()
        for logger_config in config['loggers'].values():
            logger_config['level'] = log_level
        for handler_config in config['handlers'].values():
            handler_config['level'] = log_level

    if log_format and log_format in config['formatters']:
        for handler_config in config['handlers'].values():
            handler_config['formatter'] = log_format

    try:
        logging.config.dictConfig(config)
        logging.getLogger(__name__).info(f"Logging configured for environment: {environment}")
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        logging.basicConfig(
            level=getattr(logging, log_level or 'INFO', logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger(__name__).error(f"Failed to configure logging, using basic config: {e}")

    return config
