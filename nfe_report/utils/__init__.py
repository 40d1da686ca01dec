"""
Utility Module for the NF-e Line-Item Report.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Exception hierarchy
    - File helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
]
