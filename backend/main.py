# backend/main.py
import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db

# Routers
from routes.auth import router as auth_router
from routes.clients import router as clients_router
from routes.items import router as items_router
from routes.exchange_rates import router as exchange_rates_router
from routes.analytics import router as analytics_router
from routes.logs import router as logs_router

API_PREFIX = "/api"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# App setup
init_db()

app = FastAPI(title="Cargo Ledger API", version="1.0.0")

# CORS: CORS_ORIGINS from the environment, "*" by default (mobile app + web build)
origins = settings.cors_origins or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(clients_router, prefix=API_PREFIX)
app.include_router(items_router, prefix=API_PREFIX)
app.include_router(exchange_rates_router, prefix=API_PREFIX)
app.include_router(analytics_router, prefix=API_PREFIX)
app.include_router(logs_router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/health")
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/")
def read_root():
    return {"message": "Cargo Ledger API is running"}
