"""
ROTAS: TURNOS
==============

CRUD dos turnos de plantão e consulta do turno vigente.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.infrastructure.services.roleta_store import RoletaStore
from roleta.infrastructure.services.distribution_service import local_now
from roleta.domain.entities import Turno
from roleta.domain.exceptions import RoletaError
from roleta.api.dependencies import get_store, roleta_http_error
from roleta.api.schemas import TurnoCreate, TurnoUpdate, TurnoResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/turnos", tags=["Turnos"])


async def _get_turno_or_404(db: AsyncSession, turno_id: int) -> Turno:
    turno = await db.get(Turno, turno_id)
    if not turno:
        raise HTTPException(status_code=404, detail="Turno não encontrado")
    return turno


@router.get("", response_model=List[TurnoResponse])
async def list_turnos(db: AsyncSession = Depends(get_db)):
    """Lista turnos por horário de início."""
    result = await db.execute(select(Turno).order_by(Turno.hora_inicio, Turno.id))
    return result.scalars().all()


@router.get("/atual", response_model=TurnoResponse)
async def current_turno(store: RoletaStore = Depends(get_store)):
    """Turno ativo neste momento (404 se nenhum cobre o horário)."""
    now = local_now()
    try:
        turno = await store.find_active_shift(now.time())
    except RoletaError as e:
        raise roleta_http_error(e)

    if turno is None:
        raise HTTPException(status_code=404, detail=f"Nenhum turno ativo às {now:%H:%M}")
    return turno


@router.post("", response_model=TurnoResponse, status_code=status.HTTP_201_CREATED)
async def create_turno(payload: TurnoCreate, db: AsyncSession = Depends(get_db)):
    turno = Turno(**payload.model_dump())
    db.add(turno)
    await db.flush()
    await db.refresh(turno)

    if turno.window.crosses_midnight:
        logger.info(f"🌙 Turno {turno.nome} vira a meia-noite ({turno.window})")

    return turno


@router.patch("/{turno_id}", response_model=TurnoResponse)
async def update_turno(
    turno_id: int,
    payload: TurnoUpdate,
    db: AsyncSession = Depends(get_db),
):
    turno = await _get_turno_or_404(db, turno_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(turno, field, value)

    await db.flush()
    await db.refresh(turno)
    return turno


@router.delete("/{turno_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_turno(turno_id: int, db: AsyncSession = Depends(get_db)):
    turno = await _get_turno_or_404(db, turno_id)
    await db.delete(turno)
    await db.flush()
