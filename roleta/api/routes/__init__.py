"""Rotas da API."""

from .leads import router as leads_router
from .webhook import router as webhook_router
from .turnos import router as turnos_router
from .plantao import router as plantao_router
from .corretores import router as corretores_router
from .rodadas import router as rodadas_router
from .health import router as health_router

__all__ = [
    "leads_router",
    "webhook_router",
    "turnos_router",
    "plantao_router",
    "corretores_router",
    "rodadas_router",
    "health_router",
]
