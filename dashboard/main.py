# dashboard/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from . import users, products, orders, sales, analytics
from .config import CORS_ORIGINS
from .database import create_tables
from .logger import setup_logger

logger = setup_logger(__name__)

app = FastAPI(
    title="E-commerce Dashboard",
    description="📊 API для пользователей, товаров, заказов и статистики продаж",
    version="1.0.0",
)

# ✅ CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Роутеры
app.include_router(users.router)
app.include_router(products.router)
app.include_router(orders.router)
app.include_router(sales.router)
app.include_router(analytics.router)


@app.get("/api/health-check")
async def health_check():
    return {"status": "ok"}


@app.get("/api/test")
async def api_test():
    return {"message": "API is working!"}


@app.on_event("startup")
async def on_startup():
    await create_tables()
    logger.info("database tables ready")


def run():
    uvicorn.run("dashboard.main:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    run()
