"""
ROTAS: CORRETORES
==================

Cadastro dos corretores e chave de participação na roleta padrão.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.domain.entities import Corretor
from roleta.api.schemas import CorretorCreate, CorretorResponse, RoletaToggle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/corretores", tags=["Corretores"])


@router.get("", response_model=List[CorretorResponse])
async def list_corretores(
    roleta_ativa: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = select(Corretor).order_by(Corretor.id)
    if roleta_ativa is not None:
        query = query.where(Corretor.roleta_ativa == roleta_ativa)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=CorretorResponse, status_code=status.HTTP_201_CREATED)
async def create_corretor(payload: CorretorCreate, db: AsyncSession = Depends(get_db)):
    corretor = Corretor(**payload.model_dump())
    db.add(corretor)
    await db.flush()
    await db.refresh(corretor)
    return corretor


@router.patch("/{corretor_id}/roleta", response_model=CorretorResponse)
async def toggle_roleta(
    corretor_id: int,
    payload: RoletaToggle,
    db: AsyncSession = Depends(get_db),
):
    """Liga/desliga o corretor na roleta padrão."""
    corretor = await db.get(Corretor, corretor_id)
    if not corretor:
        raise HTTPException(status_code=404, detail="Corretor não encontrado")

    corretor.roleta_ativa = payload.roleta_ativa
    await db.flush()
    await db.refresh(corretor)

    logger.info(
        f"🎰 Corretor {corretor.nome} {'entrou na' if payload.roleta_ativa else 'saiu da'} roleta"
    )
    return corretor
