"""
SERVIÇO DE DISTRIBUIÇÃO DE LEADS (ROLETA)
==========================================

Responsável por decidir qual corretor deve receber cada lead.

Fluxo:
1. Descobre o turno vigente (horário de Brasília por padrão)
2. Candidatos = corretores escalados no plantão do dia/turno
3. Sem plantão → fallback para todos com roleta_ativa (nunca mistura as listas)
4. Próximo da fila = quem vem depois do último atendido naquele escopo
5. Atribui o lead, registra a rodada e avança o cursor

Tudo roda na transação da sessão recebida: se o log da rodada falhar,
a atribuição do lead é desfeita junto no rollback.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from roleta.config import get_settings
from roleta.domain.entities import (
    Lead,
    RodadaDistribuicao,
    RoundStatus,
    DispatchOrigin,
)
from roleta.domain.exceptions import NoEligibleBrokerError, LeadNotFoundError
from roleta.infrastructure.services.roleta_store import RoletaStore

logger = logging.getLogger(__name__)


# ==========================================
# ESCOPOS DA ROTAÇÃO
# ==========================================

FALLBACK_SCOPE = "roleta_ativa"


def roster_scope(day, turno_id: int) -> str:
    return f"plantao:{day.isoformat()}:{turno_id}"


# ==========================================
# FUNÇÕES DE SELEÇÃO
# ==========================================

def select_next_broker(candidates: Sequence[int], last_broker_id: Optional[int]) -> int:
    """
    Seleciona o próximo corretor da fila.

    - Sem histórico → primeiro da lista
    - Último atendido fora da lista → recomeça do primeiro
    - Último atendido é o último da lista → volta ao primeiro
    - Caso contrário → o seguinte ao último atendido
    """
    if not candidates:
        raise NoEligibleBrokerError()

    if last_broker_id is None or last_broker_id not in candidates:
        return candidates[0]

    last_index = list(candidates).index(last_broker_id)
    if last_index < len(candidates) - 1:
        return candidates[last_index + 1]

    return candidates[0]


def local_now() -> datetime:
    """Agora no fuso configurado (America/Sao_Paulo por padrão)."""
    return datetime.now(ZoneInfo(get_settings().timezone))


async def resolve_candidates(store: RoletaStore, now: datetime) -> Tuple[list, str]:
    """
    Monta a lista de candidatos e o escopo da rotação.

    Returns:
        (ids dos corretores na ordem do banco, escopo)
    """
    turno = await store.find_active_shift(now.time())

    if turno is None:
        logger.warning(
            f"⚠️ Nenhum turno ativo às {now:%H:%M}, usando roleta padrão",
            extra={"horario": now.strftime("%H:%M")},
        )
    else:
        today = now.date()
        roster = await store.find_roster_for_day(today, turno.id)
        if roster:
            return roster, roster_scope(today, turno.id)

        logger.info(
            f"📋 Turno {turno.nome} sem plantão escalado em {today}, usando roleta padrão",
            extra={"turno_id": turno.id},
        )

    return await store.find_eligible_brokers(), FALLBACK_SCOPE


def build_round(
    lead: Lead,
    corretor_id: int,
    escopo: str,
    origem_disparo: str,
    numero_rodada: int,
) -> RodadaDistribuicao:
    """Monta o registro de log da rodada a partir do lead atribuído."""
    return RodadaDistribuicao(
        numero_rodada=numero_rodada,
        escopo=escopo,
        corretor_id=corretor_id,
        lead_id=lead.id,
        cliente_atribuido=lead.nome or f"Lead ID {lead.id}",
        telefone_cliente=lead.telefone,
        email_cliente=lead.email,
        origem_lead=lead.origem,
        status=RoundStatus.SUCCESS.value,
        origem_disparo=origem_disparo,
    )


# ==========================================
# FUNÇÃO PRINCIPAL DE DISTRIBUIÇÃO
# ==========================================

async def distribute_lead(
    store: RoletaStore,
    lead_id: int,
    origem_disparo: str = DispatchOrigin.MANUAL.value,
    now: Optional[datetime] = None,
) -> int:
    """
    Distribui um lead para o próximo corretor da roleta.

    Returns:
        id do corretor que recebeu o lead

    Raises:
        NoEligibleBrokerError: ninguém de plantão nem com roleta ativa
        LeadNotFoundError: lead inexistente
        StoreError: falha de banco (sem retry)
    """
    settings = get_settings()
    if now is None:
        now = local_now()
    elif now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(settings.timezone))

    candidates, escopo = await resolve_candidates(store, now)

    if not candidates:
        raise NoEligibleBrokerError()

    lead = await store.get_lead(lead_id)
    if lead is None:
        raise LeadNotFoundError(lead_id)

    # Cursor criado (se preciso) e travado até o fim da transação:
    # serializa distribuições do mesmo escopo, inclusive a primeira
    cursor = await store.acquire_cursor(escopo)
    if cursor.ultimo_corretor_id is not None:
        last_broker_id = cursor.ultimo_corretor_id
    else:
        # Escopo novo: continua a partir da última rodada registrada
        last_round = await store.find_last_round()
        last_broker_id = last_round.corretor_id if last_round else None

    corretor_id = select_next_broker(candidates, last_broker_id)

    updated = await store.update_lead(lead_id, corretor_id, settings.roleta_initial_stage)
    if not updated:
        raise LeadNotFoundError(lead_id)

    cursor = await store.save_cursor(cursor, corretor_id)

    await store.insert_round(
        build_round(lead, corretor_id, escopo, origem_disparo, cursor.total_rodadas)
    )

    logger.info(
        f"🎯 Lead {lead_id} distribuído para corretor {corretor_id} ({escopo}, {origem_disparo})",
        extra={
            "lead_id": lead_id,
            "corretor_id": corretor_id,
            "escopo": escopo,
            "origem_disparo": origem_disparo,
        },
    )

    return corretor_id
