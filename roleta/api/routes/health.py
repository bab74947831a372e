"""
HEALTH CHECK ENDPOINTS
======================
Monitora saúde do sistema.

Usado por:
- Monitoramento externo (UptimeRobot)
- Debugging
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from roleta.infrastructure.database import engine
from roleta.infrastructure.scheduler import get_scheduler_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Retorna 200 se tudo OK, 503 se o banco não responde.

    Abre conexão própria, fora do get_db (sem commit no fim).
    """
    checks = {}
    healthy = True

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"❌ Health check: banco indisponível: {e}")
        checks["database"] = f"error: {e}"
        healthy = False

    checks["scheduler"] = get_scheduler_status()
    checks["timestamp"] = datetime.now(timezone.utc).isoformat()

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "unhealthy", "checks": checks},
    )
