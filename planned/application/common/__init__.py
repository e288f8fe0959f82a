from .error_codes import ErrorCodes
from .result import Result, ResultError

__all__ = ["ErrorCodes", "Result", "ResultError"]
