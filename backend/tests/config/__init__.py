"""
Test configuration package: path setup and pytest markers.
"""

from .paths import TestPathResolver, setup_test_environment

__all__ = ["TestPathResolver", "setup_test_environment"]
