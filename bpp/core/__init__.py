"""Core types shared by the stores, services and CLI layers."""

from .errors import ErrorCode
from .inputs import ActionInputs
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # errors
    "ErrorCode",
    # inputs
    "ActionInputs",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
