"""
ROTAS: PLANEJAMENTO DE PLANTÃO
===============================

Escala mensal: quais corretores atendem cada turno em cada dia.
A ordem de cadastro é a ordem da roleta no turno.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.domain.entities import PlanejamentoPlantao, Corretor, Turno
from roleta.api.schemas import PlantaoCreate, PlantaoResponse


router = APIRouter(prefix="/plantao", tags=["Plantão"])


def _month_range(mes: str):
    """'2026-10' → (2026-10-01, 2026-11-01)"""
    try:
        year, month = (int(part) for part in mes.split("-")[:2])
        start = date(year, month, 1)
    except ValueError:
        raise HTTPException(status_code=422, detail="Mês inválido, use YYYY-MM")

    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


@router.get("", response_model=List[PlantaoResponse])
async def list_plantao(
    mes: Optional[str] = Query(None, description="Mês no formato YYYY-MM"),
    dia: Optional[date] = Query(None),
    turno_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Lista a escala (por mês ou por dia), na ordem da roleta."""
    query = select(PlanejamentoPlantao).order_by(
        PlanejamentoPlantao.dia,
        PlanejamentoPlantao.turno_id,
        PlanejamentoPlantao.id,
    )

    if mes:
        start, end = _month_range(mes)
        query = query.where(PlanejamentoPlantao.dia >= start, PlanejamentoPlantao.dia < end)

    if dia:
        query = query.where(PlanejamentoPlantao.dia == dia)

    if turno_id is not None:
        query = query.where(PlanejamentoPlantao.turno_id == turno_id)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=PlantaoResponse, status_code=status.HTTP_201_CREATED)
async def create_plantao(payload: PlantaoCreate, db: AsyncSession = Depends(get_db)):
    """Escala um corretor no turno/dia (vai para o fim da fila do turno)."""
    if not await db.get(Corretor, payload.corretor_id):
        raise HTTPException(status_code=404, detail="Corretor não encontrado")

    if not await db.get(Turno, payload.turno_id):
        raise HTTPException(status_code=404, detail="Turno não encontrado")

    plantao = PlanejamentoPlantao(**payload.model_dump())
    db.add(plantao)

    try:
        await db.flush()
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Corretor já escalado neste turno/dia")

    await db.refresh(plantao)
    return plantao


@router.delete("/{plantao_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plantao(plantao_id: int, db: AsyncSession = Depends(get_db)):
    plantao = await db.get(PlanejamentoPlantao, plantao_id)
    if not plantao:
        raise HTTPException(status_code=404, detail="Plantão não encontrado")

    await db.delete(plantao)
    await db.flush()
