import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from food_orders.config import settings
from food_orders.database import AsyncSessionLocal, engine
from food_orders.infrastructure.unit_of_work import UnitOfWork
from food_orders.presentation.api import router
from food_orders.presentation.sweeper_worker import start_sweeper, stop_sweeper

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    tasks = []
    if settings.SWEEPER_ENABLED:
        tasks = start_sweeper(UnitOfWork(AsyncSessionLocal))
        logger.info("Sweeper заказов запущен")

    yield

    logger.info("Приложение останавливается...")
    await stop_sweeper(tasks)
    await engine.dispose()


app = FastAPI(
    title="Food Orders Service",
    description="Статистика заказов и автоматическая обработка зависших заказов",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Food Orders Service работает"}


@app.get("/health")
async def health():
    return {"status": "healthy", "sweeper": "enabled" if settings.SWEEPER_ENABLED else "disabled"}
