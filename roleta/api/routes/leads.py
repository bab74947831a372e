"""
ROTAS: LEADS
=============

Cadastro de leads e distribuição manual pela roleta.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.config import get_settings
from roleta.infrastructure.database import get_db
from roleta.infrastructure.services.roleta_store import RoletaStore
from roleta.infrastructure.services.distribution_service import distribute_lead
from roleta.domain.entities import Lead
from roleta.domain.exceptions import RoletaError
from roleta.api.dependencies import get_store, roleta_http_error
from roleta.api.schemas import (
    LeadCreate,
    LeadResponse,
    DistributeRequest,
    DistributeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
async def create_lead(
    payload: LeadCreate,
    db: AsyncSession = Depends(get_db),
):
    """Cadastra um lead (entra pendente, sem responsável)."""
    lead = Lead(**payload.model_dump(exclude={"urgencia"}), urgencia=payload.urgencia.value)
    db.add(lead)
    await db.flush()
    await db.refresh(lead)

    logger.info(f"📥 Lead {lead.id} cadastrado ({lead.origem or 'sem origem'})")
    return lead


@router.get("", response_model=List[LeadResponse])
async def list_leads(
    pendentes: bool = Query(False, description="Só leads ainda não atribuídos"),
    responsavel_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Lista leads, mais recentes primeiro."""
    query = select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()).limit(limit)

    if pendentes:
        query = query.where(Lead.atribuido == False)

    if responsavel_id is not None:
        query = query.where(Lead.responsavel_id == responsavel_id)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: int,
    db: AsyncSession = Depends(get_db),
):
    lead = await db.get(Lead, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead não encontrado")
    return lead


@router.post("/{lead_id}/distribuir", response_model=DistributeResponse)
async def distribute(
    lead_id: int,
    payload: Optional[DistributeRequest] = None,
    store: RoletaStore = Depends(get_store),
):
    """
    Distribui o lead para o próximo corretor da roleta.

    - 409: nenhum corretor disponível
    - 404: lead não existe
    - 503: falha de banco
    """
    origem = (payload or DistributeRequest()).origem_disparo.value

    try:
        corretor_id = await distribute_lead(store, lead_id, origem_disparo=origem)
    except RoletaError as e:
        logger.warning(f"⚠️ Falha ao distribuir lead {lead_id}: {e}")
        raise roleta_http_error(e)

    return DistributeResponse(
        lead_id=lead_id,
        corretor_id=corretor_id,
        origem_disparo=origem,
        pipeline=get_settings().roleta_initial_stage,
    )
