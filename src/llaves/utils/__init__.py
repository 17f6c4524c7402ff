"""Utility modules for llaves.

Provides:
- logger: get_logger for namespaced logging
"""

from llaves.utils.logger import get_logger

__all__ = ["get_logger"]
