from .error import Error
from .status import OperationStatus
from .result import Success, Failure, Result

__all__ = ["Error", "OperationStatus", "Success", "Failure", "Result"]
