"""
JOB DA ROLETA AUTOMÁTICA
=========================
Distribui os leads que ficaram pendentes (atribuido = False).

Cada lead roda na própria transação: uma falha não desfaz os anteriores.
Para na primeira falta de corretor disponível (os próximos falhariam igual).
"""

import logging
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.domain.entities import Lead, DispatchOrigin
from roleta.domain.exceptions import NoEligibleBrokerError, LeadNotFoundError, StoreError
from roleta.infrastructure.services.roleta_store import SqlAlchemyRoletaStore
from roleta.infrastructure.services.distribution_service import distribute_lead

logger = logging.getLogger(__name__)


async def _get_pending_lead_ids(session: AsyncSession, limit: int) -> list:
    result = await session.execute(
        select(Lead.id)
        .where(Lead.atribuido == False)
        .order_by(Lead.created_at, Lead.id)
        .limit(limit)
    )
    return list(result.scalars().all())


async def distribute_pending_leads(
    session_factory: Optional[Callable[[], AsyncSession]] = None,
    origem_disparo: str = DispatchOrigin.AUTOMATIC.value,
    limit: int = 100,
) -> dict:
    """
    Distribui leads pendentes em ordem de chegada.

    Returns:
        {"distributed": int, "failed": int, "stopped_reason": str | None}
    """
    if session_factory is None:
        from roleta.infrastructure.database import async_session
        session_factory = async_session

    async with session_factory() as session:
        lead_ids = await _get_pending_lead_ids(session, limit)

    logger.info(f"🔍 {len(lead_ids)} leads pendentes para a roleta")

    stats = {"distributed": 0, "failed": 0, "stopped_reason": None}

    for lead_id in lead_ids:
        async with session_factory() as session:
            try:
                await distribute_lead(SqlAlchemyRoletaStore(session), lead_id, origem_disparo)
                await session.commit()
                stats["distributed"] += 1
            except NoEligibleBrokerError as e:
                await session.rollback()
                stats["stopped_reason"] = str(e)
                logger.warning(f"⚠️ Roleta automática parada: {e}")
                break
            except (LeadNotFoundError, StoreError) as e:
                await session.rollback()
                stats["failed"] += 1
                logger.error(f"❌ Erro ao distribuir lead {lead_id}: {e}", exc_info=True)

    logger.info(
        f"✅ Roleta automática: {stats['distributed']} distribuídos, {stats['failed']} falhas",
        extra=stats,
    )
    return stats


async def run_roleta_auto_job() -> dict:
    """Entrada chamada pelo scheduler."""
    try:
        return await distribute_pending_leads()
    except Exception as e:
        logger.error(f"❌ Erro no job da roleta automática: {e}", exc_info=True)
        return {"distributed": 0, "failed": 0, "stopped_reason": str(e)}
