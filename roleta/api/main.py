"""
ROLETA API - Ponto de Entrada
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roleta.config import get_settings
from roleta.infrastructure.database import init_db
from roleta.infrastructure.logging_config import setup_logging
from roleta.infrastructure.scheduler import create_scheduler, start_scheduler, stop_scheduler

from roleta.api.routes import (
    leads_router,
    webhook_router,
    turnos_router,
    plantao_router,
    corretores_router,
    rodadas_router,
    health_router,
)

settings = get_settings()
logger = logging.getLogger(__name__)


# ============================================================
# 🔁 LIFESPAN
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(logging.DEBUG if settings.debug else logging.INFO)
    logger.info("🚀 Iniciando Roleta API...")

    if settings.is_development:
        await init_db()
        logger.info("✅ Tabelas criadas!")

    create_scheduler()
    start_scheduler()

    yield

    stop_scheduler()
    logger.info("👋 Encerrando Roleta API...")


# ============================================================
# FASTAPI APP
# ============================================================
app = FastAPI(
    title="Roleta API",
    description="Distribuição de leads (roleta) para corretores de plantão",
    version="0.1.0",
    lifespan=lifespan,
)

# ============================================================
# ⭐ CORS
# ============================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# ROTAS
# ============================================================
app.include_router(leads_router, prefix="/api/v1")
app.include_router(webhook_router, prefix="/api/v1")
app.include_router(turnos_router, prefix="/api/v1")
app.include_router(plantao_router, prefix="/api/v1")
app.include_router(corretores_router, prefix="/api/v1")
app.include_router(rodadas_router, prefix="/api/v1")
app.include_router(health_router)


@app.get("/")
async def root():
    return {"name": "Roleta API", "status": "running"}
