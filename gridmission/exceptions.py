"""
Exceptions raised by gridmission

Geometric degeneracies never raise; only structural input problems do.
"""

from typing import List, Optional

class GridMissionError(Exception):
    """Base class for gridmission errors"""

class ConfigurationError(GridMissionError, ValueError):
    """Survey configuration or payload failed validation"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]
