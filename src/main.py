"""Основной модуль FastAPI приложения."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from base.config import get_allowed_hosts, get_api_prefix, get_log_level, get_settings
from base.exception_handlers import add_exception_handlers
from pricing.entrypoints.api.endpoints import router as pricing_router

settings = get_settings()

# Настройка логирования
logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)


# Создаем FastAPI приложение
app = FastAPI(
    title=settings.app_title,
    description="API расчета цен витрины с учетом политики скидок и купонов",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_hosts(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Регистрация обработчиков исключений
add_exception_handlers(app)

# Регистрация роутеров
app.include_router(
    pricing_router, prefix=f"{get_api_prefix()}/pricing", tags=["pricing"]
)


@app.get("/")
async def health_check():
    """Проверка работоспособности API."""
    return {"message": "API is running"}
