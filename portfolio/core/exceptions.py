# === portfolio/core/exceptions.py ===
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base error for the API. Carries the HTTP status it maps to."""

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result = {"detail": self.message, "code": self.code}
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(PortfolioError):
    """Raised when a request body breaks one or more field rules."""

    def __init__(self, violations: List[Dict[str, str]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
        )
        self.violations = violations

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.violations
        return result


class InvalidIdError(PortfolioError):
    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid identifier: {value}",
            code="INVALID_ID",
            status_code=400,
            details={"id": value},
        )


class NotFoundError(PortfolioError):
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} with ID {identifier} not found",
            code="NOT_FOUND",
            status_code=404,
            details={"id": identifier},
        )


class StorageError(PortfolioError):
    """Raised when the database is unreachable or a query fails."""

    def __init__(self, message: str = "Database operation failed", unavailable: bool = False):
        super().__init__(
            message=message,
            code="STORAGE_UNAVAILABLE" if unavailable else "STORAGE_ERROR",
            status_code=503 if unavailable else 500,
        )


class ServiceUnavailableError(PortfolioError):
    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(
            message=message,
            code="SERVICE_UNAVAILABLE",
            status_code=503,
        )


#handlers
async def portfolio_exception_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        violations.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(status_code=400, content=ValidationError(violations).to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )
