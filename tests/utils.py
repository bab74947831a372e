from datetime import date, time
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from roleta.domain.entities import (
    Turno,
    Corretor,
    PlanejamentoPlantao,
    Lead,
    RodadaDistribuicao,
    CursorRoleta,
)
from roleta.infrastructure.services.roleta_store import RoletaStore

# Banco de teste: SQLite em memória (uma conexão compartilhada por teste)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def create_test_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def create_test_sessionmaker(engine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


# =============================================================================
# HELPERS DE CADASTRO
# =============================================================================

async def add_corretores(session: AsyncSession, *nomes: str, roleta_ativa: bool = False) -> List[Corretor]:
    corretores = [Corretor(nome=nome, roleta_ativa=roleta_ativa) for nome in nomes]
    session.add_all(corretores)
    await session.flush()
    return corretores


async def add_turno(session: AsyncSession, nome: str, inicio: time, fim: time, ativo: bool = True) -> Turno:
    turno = Turno(nome=nome, hora_inicio=inicio, hora_fim=fim, ativo=ativo)
    session.add(turno)
    await session.flush()
    return turno


async def add_plantao(session: AsyncSession, turno: Turno, dia: date, *corretores: Corretor):
    for corretor in corretores:
        session.add(PlanejamentoPlantao(turno_id=turno.id, dia=dia, corretor_id=corretor.id))
    await session.flush()


async def add_lead(session: AsyncSession, nome: Optional[str] = "Cliente Teste", **kwargs) -> Lead:
    lead = Lead(nome=nome, **kwargs)
    session.add(lead)
    await session.flush()
    return lead


# =============================================================================
# STORE EM MEMÓRIA (testes do algoritmo sem banco)
# =============================================================================

class FakeRoletaStore(RoletaStore):
    """Store em memória que registra as chamadas de escrita."""

    def __init__(
        self,
        shift: Optional[Turno] = None,
        roster: Optional[List[int]] = None,
        eligible: Optional[List[int]] = None,
        last_round_broker: Optional[int] = None,
        leads: Optional[Dict[int, Lead]] = None,
    ):
        self.shift = shift
        self.roster = roster or []
        self.eligible = eligible or []
        self.rounds: List[RodadaDistribuicao] = []
        self.cursors: Dict[str, CursorRoleta] = {}
        self.leads = leads if leads is not None else {1: Lead(id=1, nome="Cliente 1")}
        self.lead_updates: List[tuple] = []
        self.roster_queries: List[tuple] = []

        if last_round_broker is not None:
            self.rounds.append(
                RodadaDistribuicao(corretor_id=last_round_broker, escopo="legado", cliente_atribuido="x")
            )

    async def find_active_shift(self, time_of_day: time) -> Optional[Turno]:
        if self.shift and self.shift.window.contains(time_of_day):
            return self.shift
        return None

    async def find_roster_for_day(self, day: date, turno_id: int) -> List[int]:
        self.roster_queries.append((day, turno_id))
        return list(self.roster)

    async def find_eligible_brokers(self) -> List[int]:
        return list(self.eligible)

    async def find_last_round(self) -> Optional[RodadaDistribuicao]:
        return self.rounds[-1] if self.rounds else None

    async def get_lead(self, lead_id: int) -> Optional[Lead]:
        return self.leads.get(lead_id)

    async def acquire_cursor(self, escopo: str) -> CursorRoleta:
        return self.cursors.setdefault(escopo, CursorRoleta(escopo=escopo, total_rodadas=0))

    async def save_cursor(self, cursor: CursorRoleta, corretor_id: int) -> CursorRoleta:
        cursor.ultimo_corretor_id = corretor_id
        cursor.total_rodadas += 1
        return cursor

    async def update_lead(self, lead_id: int, corretor_id: int, stage: str) -> bool:
        lead = self.leads.get(lead_id)
        if lead is None:
            return False
        lead.responsavel_id = corretor_id
        lead.atribuido = True
        lead.pipeline = stage
        self.lead_updates.append((lead_id, corretor_id, stage))
        return True

    async def insert_round(self, rodada: RodadaDistribuicao) -> RodadaDistribuicao:
        self.rounds.append(rodada)
        return rodada
