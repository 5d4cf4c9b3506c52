"""
Custom exception handlers and error types
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
import traceback
from typing import Optional

logger = logging.getLogger(__name__)


class IdentifierAllocationError(Exception):
    """Base exception for identifier allocation errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class FormatError(IdentifierAllocationError):
    """Exception raised when a synthesized identifier is not a valid 64-bit integer

    Args:
        message (str): Error message
        digits (Optional[str]): The offending digit string
    Example:
        raise FormatError("Not numeric", digits="1234a0010")
    """

    def __init__(self, message: str, digits: Optional[str] = None):
        super().__init__(message, "FORMAT_ERROR")
        self.digits = digits


class StoreQueryError(IdentifierAllocationError):
    """Exception raised when the component store search fails"""

    def __init__(
        self,
        message: str,
        index: Optional[str] = None,
        chunk_size: Optional[int] = None,
    ):
        super().__init__(message, "STORE_QUERY_ERROR")
        self.index = index
        self.chunk_size = chunk_size


class UnrecognizedPartitionError(IdentifierAllocationError):
    """Exception raised when strict partition checking rejects a partition code"""

    def __init__(self, partition_id: str):
        super().__init__(
            f"Unrecognized partition code: {partition_id!r}", "UNRECOGNIZED_PARTITION"
        )
        self.partition_id = partition_id


class InvalidAllocationRequestError(IdentifierAllocationError):
    """Exception raised when an allocation request is malformed"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "INVALID_REQUEST")
        self.field = field


class AllocationExhaustedError(IdentifierAllocationError):
    """Exception raised when the allocation loop exceeds its draw budget"""

    def __init__(self, message: str, draws: int = 0, allocated: int = 0):
        super().__init__(message, "ALLOCATION_EXHAUSTED")
        self.draws = draws
        self.allocated = allocated


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning("Validation error: %s", exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "Validation error",
                "details": "Invalid request data",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


async def allocation_exception_handler(request: Request, exc: IdentifierAllocationError):
    """Handle identifier allocation errors"""
    if isinstance(exc, (InvalidAllocationRequestError, UnrecognizedPartitionError)):
        status_code = 400
        logger.warning("Rejected allocation request: %s", exc.message)
    elif isinstance(exc, StoreQueryError):
        status_code = 503
        logger.error("Component store unavailable: %s (index: %s)", exc.message, exc.index)
    else:
        status_code = 500
        logger.error("Identifier allocation failed: %s", exc.message)
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": {
                "error": "Identifier allocation failed",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error("Unexpected error: %s: %s", type(exc).__name__, exc)
    logger.error("Traceback: %s", traceback.format_exc())

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
