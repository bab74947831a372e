"""
DEPENDENCIES (Dependências)
============================

Funções que são injetadas nas rotas.
"""

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.infrastructure.services.roleta_store import RoletaStore, SqlAlchemyRoletaStore
from roleta.domain.exceptions import (
    RoletaError,
    NoEligibleBrokerError,
    LeadNotFoundError,
    StoreError,
)


async def get_store(db: AsyncSession = Depends(get_db)) -> RoletaStore:
    """
    Store da roleta ligada à sessão da request.

    Uso nas rotas:
        @router.post("/leads/{lead_id}/distribuir")
        async def rota(store: RoletaStore = Depends(get_store)):
            ...
    """
    return SqlAlchemyRoletaStore(db)


def roleta_http_error(error: RoletaError) -> HTTPException:
    """Traduz exceções da roleta para respostas HTTP."""
    if isinstance(error, NoEligibleBrokerError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))

    if isinstance(error, LeadNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead não encontrado")

    if isinstance(error, StoreError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Erro de banco na distribuição: {error}",
        )

    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
