"""Кастомные исключения приложения."""


class AppException(Exception):
    """Базовое исключение приложения."""
    pass


class ValidationError(AppException):
    """Ошибка валидации данных."""
    pass


class InvalidInputError(ValidationError):
    """Структурно некорректные входные данные движка цен."""
    pass


class InvalidQuantityError(InvalidInputError):
    """Количество товара не является положительным целым числом."""

    def __init__(self, quantity: object) -> None:
        """Инициализация исключения."""
        super().__init__(f"Quantity must be a positive integer, got {quantity!r}")
        self.quantity = quantity


class PolicyValidationError(ValidationError):
    """Документ политики скидок не прошел проверку."""

    def __init__(self, detail: str) -> None:
        """Инициализация исключения."""
        super().__init__(detail)
        self.detail = detail


class ProductNotFoundError(AppException):
    """Товар не найден."""
    pass


class ConfigurationError(AppException):
    """Ошибка загрузки каталога или политики скидок."""
    pass
