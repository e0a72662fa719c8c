"""Outcome algebra: Validation, Exceptional and the lazy Response wrapper."""

from thothix.core.outcome.codes import ErrorCode
from thothix.core.outcome.exceptional import Err, Exceptional, Ok, try_
from thothix.core.outcome.response import Response
from thothix.core.outcome.validation import Invalid, StructuredError, Valid, Validation


__all__ = [
    "Err",
    "ErrorCode",
    "Exceptional",
    "Invalid",
    "Ok",
    "Response",
    "StructuredError",
    "Valid",
    "Validation",
    "try_",
]
