"""Middleware package."""

from hr_api.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "domain_exception_handler",
    "generic_exception_handler",
    "http_exception_handler",
    "sqlalchemy_exception_handler",
    "validation_exception_handler",
]
