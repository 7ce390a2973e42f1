"""Обработчики исключений для FastAPI."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import (
    AppException,
    ConfigurationError,
    InvalidInputError,
    PolicyValidationError,
    ProductNotFoundError,
    ValidationError,
)


def add_exception_handlers(app: FastAPI) -> None:
    """Добавление обработчиков исключений в приложение."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Базовый обработчик исключений приложения."""
        return JSONResponse(
            status_code=500, content={"detail": str(exc), "type": "app_error"}
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Обработчик ошибок валидации."""
        return JSONResponse(
            status_code=400, content={"detail": str(exc), "type": "validation_error"}
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input_exception_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        """Обработчик некорректных входных данных движка цен."""
        return JSONResponse(
            status_code=400, content={"detail": str(exc), "type": "invalid_input"}
        )

    @app.exception_handler(PolicyValidationError)
    async def policy_exception_handler(
        request: Request, exc: PolicyValidationError
    ) -> JSONResponse:
        """Обработчик ошибок документа политики скидок."""
        return JSONResponse(
            status_code=400, content={"detail": str(exc), "type": "policy_error"}
        )

    @app.exception_handler(ProductNotFoundError)
    async def not_found_exception_handler(
        request: Request, exc: ProductNotFoundError
    ) -> JSONResponse:
        """Обработчик ошибок отсутствия товара."""
        return JSONResponse(
            status_code=404, content={"detail": str(exc), "type": "not_found_error"}
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_exception_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        """Обработчик ошибок загрузки данных."""
        return JSONResponse(
            status_code=500, content={"detail": str(exc), "type": "configuration_error"}
        )
