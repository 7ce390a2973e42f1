"""Конфигурация приложения."""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Настройки приложения."""

    # API
    app_title: str = "Storefront Pricing API"
    api_prefix: str = "/api/v1"
    allowed_hosts: str = "*"

    # Logging
    log_level: str = "INFO"

    # Data
    catalog_path: str = "data/products.json"
    discount_policy_path: str = "data/discounts.json"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }


_settings = Settings()


def get_settings() -> Settings:
    """Получение настроек."""
    return _settings


def get_allowed_hosts() -> List[str]:
    """Получение разрешенных хостов."""
    if _settings.allowed_hosts == "*":
        return ["*"]
    return [host.strip() for host in _settings.allowed_hosts.split(",")]


def get_api_prefix() -> str:
    """Получение префикса API."""
    return _settings.api_prefix


def get_log_level() -> str:
    """Получение уровня логирования."""
    return _settings.log_level.upper()


def get_catalog_path() -> str:
    """Получение пути к файлу каталога товаров."""
    return _settings.catalog_path


def get_discount_policy_path() -> str:
    """Получение пути к файлу политики скидок."""
    return _settings.discount_policy_path
