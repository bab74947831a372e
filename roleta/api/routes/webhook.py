"""
ROTAS: WEBHOOK
===============
Captação de leads de integrações externas (portais, landing pages, RD, etc).
O lead é criado e já passa pela roleta com origem "webhook".
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.infrastructure.database import get_db
from roleta.infrastructure.services.roleta_store import SqlAlchemyRoletaStore
from roleta.infrastructure.services.distribution_service import distribute_lead
from roleta.domain.entities import Lead, DispatchOrigin
from roleta.domain.exceptions import NoEligibleBrokerError, RoletaError
from roleta.api.dependencies import roleta_http_error
from roleta.api.schemas import LeadCreate, WebhookLeadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["Webhook"])


@router.post("/leads", response_model=WebhookLeadResponse, status_code=status.HTTP_201_CREATED)
async def receive_lead(
    payload: LeadCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info(f"[WEBHOOK] lead recebido: origem={payload.origem} external_id={payload.id_external}")

    lead = Lead(**payload.model_dump(exclude={"urgencia"}), urgencia=payload.urgencia.value)
    db.add(lead)
    await db.flush()

    try:
        corretor_id = await distribute_lead(
            SqlAlchemyRoletaStore(db),
            lead.id,
            origem_disparo=DispatchOrigin.WEBHOOK.value,
        )
    except NoEligibleBrokerError as e:
        # Lead fica pendente para distribuição manual ou automática
        logger.warning(f"⚠️ Lead {lead.id} ficou pendente: {e}")
        return WebhookLeadResponse(
            success=True,
            lead_id=lead.id,
            distribuido=False,
            message=str(e),
        )
    except RoletaError as e:
        logger.error(f"❌ Erro ao distribuir lead {lead.id} do webhook: {e}")
        raise roleta_http_error(e)

    return WebhookLeadResponse(
        success=True,
        lead_id=lead.id,
        distribuido=True,
        corretor_id=corretor_id,
        message=f"Lead atribuído para o corretor {corretor_id}",
    )


@router.get("/health")
async def webhook_health():
    return {"status": "ok", "service": "webhook"}
