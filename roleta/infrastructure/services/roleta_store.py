"""
STORE DA ROLETA
================

Acesso ao banco usado pela distribuição de leads.

`RoletaStore` é a interface; `SqlAlchemyRoletaStore` é a implementação
sobre uma AsyncSession. Nenhum método faz commit: quem abriu a sessão
(request ou job) decide quando confirmar a transação.
"""

import functools
import logging
from abc import ABC, abstractmethod
from datetime import date, time
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roleta.domain.entities import (
    Turno,
    Corretor,
    PlanejamentoPlantao,
    Lead,
    RodadaDistribuicao,
    CursorRoleta,
)
from roleta.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

# INSERT ... ON CONFLICT DO NOTHING por dialeto (Postgres em produção, SQLite nos testes)
_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class RoletaStore(ABC):
    """
    Operações de banco consumidas pela roleta.

    - find_active_shift(): turno vigente no horário
    - find_roster_for_day(): corretores escalados no dia/turno
    - find_eligible_brokers(): corretores com roleta_ativa
    - find_last_round(): última rodada registrada
    - acquire_cursor() / save_cursor(): posição da rotação por escopo
    - update_lead() / insert_round(): efeitos da distribuição
    """

    @abstractmethod
    async def find_active_shift(self, time_of_day: time) -> Optional[Turno]:
        pass

    @abstractmethod
    async def find_roster_for_day(self, day: date, turno_id: int) -> List[int]:
        """IDs dos corretores na ordem que o banco devolve (ordem de escala)."""
        pass

    @abstractmethod
    async def find_eligible_brokers(self) -> List[int]:
        pass

    @abstractmethod
    async def find_last_round(self) -> Optional[RodadaDistribuicao]:
        pass

    @abstractmethod
    async def get_lead(self, lead_id: int) -> Optional[Lead]:
        pass

    @abstractmethod
    async def acquire_cursor(self, escopo: str) -> CursorRoleta:
        """
        Garante que o cursor do escopo existe e o devolve travado até o fim
        da transação. Cursor recém-criado vem com ultimo_corretor_id = None.
        """
        pass

    @abstractmethod
    async def save_cursor(self, cursor: CursorRoleta, corretor_id: int) -> CursorRoleta:
        pass

    @abstractmethod
    async def update_lead(self, lead_id: int, corretor_id: int, stage: str) -> bool:
        """Retorna False se nenhuma linha foi alterada (lead inexistente)."""
        pass

    @abstractmethod
    async def insert_round(self, rodada: RodadaDistribuicao) -> RodadaDistribuicao:
        pass


def _wrap_errors(func):
    """Converte erros do SQLAlchemy em StoreError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"❌ Erro de banco em {func.__name__}: {e}")
            raise StoreError(str(e)) from e

    return wrapper


class SqlAlchemyRoletaStore(RoletaStore):
    """Implementação da store sobre SQLAlchemy async."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @_wrap_errors
    async def find_active_shift(self, time_of_day: time) -> Optional[Turno]:
        # Filtro de horário fica em Python: turno noturno (22:00 → 06:00) não cabe num BETWEEN
        result = await self.session.execute(
            select(Turno)
            .where(Turno.ativo == True)
            .order_by(Turno.hora_inicio, Turno.id)
        )
        for turno in result.scalars().all():
            if turno.window.contains(time_of_day):
                return turno
        return None

    @_wrap_errors
    async def find_roster_for_day(self, day: date, turno_id: int) -> List[int]:
        result = await self.session.execute(
            select(PlanejamentoPlantao.corretor_id)
            .where(
                PlanejamentoPlantao.dia == day,
                PlanejamentoPlantao.turno_id == turno_id,
            )
            .order_by(PlanejamentoPlantao.id)
        )
        return list(result.scalars().all())

    @_wrap_errors
    async def find_eligible_brokers(self) -> List[int]:
        result = await self.session.execute(
            select(Corretor.id)
            .where(Corretor.roleta_ativa == True, Corretor.ativo == True)
            .order_by(Corretor.id)
        )
        return list(result.scalars().all())

    @_wrap_errors
    async def find_last_round(self) -> Optional[RodadaDistribuicao]:
        result = await self.session.execute(
            select(RodadaDistribuicao)
            .order_by(RodadaDistribuicao.created_at.desc(), RodadaDistribuicao.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    @_wrap_errors
    async def get_lead(self, lead_id: int) -> Optional[Lead]:
        return await self.session.get(Lead, lead_id)

    @_wrap_errors
    async def acquire_cursor(self, escopo: str) -> CursorRoleta:
        # 1. Cria a linha se ainda não existe. Se outra transação acabou de criar,
        #    o INSERT espera ela terminar (índice único) e não faz nada.
        dialect = self.session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise StoreError(f"Dialeto sem suporte a ON CONFLICT: {dialect}")

        await self.session.execute(
            insert(CursorRoleta)
            .values(escopo=escopo, total_rodadas=0)
            .on_conflict_do_nothing(index_elements=["escopo"])
        )

        # 2. Trava a linha. populate_existing: descarta valores antigos do identity map
        result = await self.session.execute(
            select(CursorRoleta)
            .where(CursorRoleta.escopo == escopo)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @_wrap_errors
    async def save_cursor(self, cursor: CursorRoleta, corretor_id: int) -> CursorRoleta:
        cursor.ultimo_corretor_id = corretor_id
        cursor.total_rodadas = (cursor.total_rodadas or 0) + 1
        await self.session.flush()
        return cursor

    @_wrap_errors
    async def update_lead(self, lead_id: int, corretor_id: int, stage: str) -> bool:
        result = await self.session.execute(
            update(Lead)
            .where(Lead.id == lead_id)
            .values(
                responsavel_id=corretor_id,
                atribuido=True,
                pipeline=stage,
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    @_wrap_errors
    async def insert_round(self, rodada: RodadaDistribuicao) -> RodadaDistribuicao:
        self.session.add(rodada)
        await self.session.flush()
        return rodada
