"""
Service-level errors.

Services raise these; routes turn them into HTTPException with the
matching status code via raise_http().
"""

from fastapi import HTTPException


class ServiceError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


def raise_http(error: ServiceError):
    raise HTTPException(status_code=error.status_code, detail=error.detail) from error
