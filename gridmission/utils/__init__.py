"""
Utilities Package - Shared helpers for gridmission
"""

from gridmission.utils.logger import get_logger

__all__ = [
    "get_logger"
]
