"""Core types shared by every layer: results, exit codes, configuration."""

from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    "Err",
    "ErrorCode",
    "Ok",
    "Result",
]
