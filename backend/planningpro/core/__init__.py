# Core package initialization
# This file makes the core directory a Python package
# and allows importing core modules

from . import api_utils, config, exceptions, logging_config

__all__ = [
    "api_utils",
    "config",
    "exceptions",
    "logging_config",
]
