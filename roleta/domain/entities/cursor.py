"""
MODELO: CURSOR DA ROLETA
=========================

Posição atual da rotação, uma linha por escopo.

Escopos:
- "plantao:{dia}:{turno_id}" → rotação entre os corretores escalados
- "roleta_ativa"             → rotação padrão (corretores com roleta_ativa)

A linha é lida com SELECT ... FOR UPDATE durante a distribuição,
então duas distribuições no mesmo escopo são serializadas.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CursorRoleta(Base):
    """Último corretor atendido em um escopo da roleta."""

    __tablename__ = "cursores_roleta"

    id: Mapped[int] = mapped_column(primary_key=True)
    escopo: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    ultimo_corretor_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_rodadas: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
