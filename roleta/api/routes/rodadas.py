"""
ROTAS: RODADAS DE DISTRIBUIÇÃO
===============================

Histórico da roleta e resumo para o dashboard.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.domain.entities import RodadaDistribuicao, Corretor
from roleta.api.schemas import RodadaResponse, RoletaDashboard, RoletaDashboardItem


router = APIRouter(prefix="/rodadas", tags=["Roleta"])


@router.get("", response_model=List[RodadaResponse])
async def list_rodadas(
    corretor_id: Optional[int] = Query(None),
    origem_disparo: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Histórico de distribuição, mais recente primeiro."""
    query = (
        select(RodadaDistribuicao)
        .order_by(RodadaDistribuicao.created_at.desc(), RodadaDistribuicao.id.desc())
        .limit(limit)
    )

    if corretor_id is not None:
        query = query.where(RodadaDistribuicao.corretor_id == corretor_id)

    if origem_disparo:
        query = query.where(RodadaDistribuicao.origem_disparo == origem_disparo)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/dashboard", response_model=RoletaDashboard)
async def roleta_dashboard(db: AsyncSession = Depends(get_db)):
    """
    Resumo da roleta:
    - Total distribuído
    - Quantidade por corretor
    - 5 rodadas mais recentes
    """
    total_result = await db.execute(select(func.count(RodadaDistribuicao.id)))
    total = total_result.scalar() or 0

    per_broker_result = await db.execute(
        select(
            RodadaDistribuicao.corretor_id,
            Corretor.nome,
            func.count(RodadaDistribuicao.id).label("total"),
        )
        .join(Corretor, Corretor.id == RodadaDistribuicao.corretor_id)
        .group_by(RodadaDistribuicao.corretor_id, Corretor.nome)
        .order_by(func.count(RodadaDistribuicao.id).desc(), RodadaDistribuicao.corretor_id)
    )

    recent_result = await db.execute(
        select(RodadaDistribuicao)
        .order_by(RodadaDistribuicao.created_at.desc(), RodadaDistribuicao.id.desc())
        .limit(5)
    )

    return RoletaDashboard(
        total_distribuidos=total,
        por_corretor=[
            RoletaDashboardItem(corretor_id=row.corretor_id, nome=row.nome, total=row.total)
            for row in per_broker_result.all()
        ],
        recentes=[RodadaResponse.model_validate(r) for r in recent_result.scalars().all()],
    )
