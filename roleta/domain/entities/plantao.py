"""
MODELO: PLANEJAMENTO DE PLANTÃO
================================

Escala do dia: qual corretor está de plantão em qual turno.
A ordem de cadastro (id) é a ordem da roleta naquele turno.
"""

from datetime import date
from typing import Optional
from sqlalchemy import ForeignKey, Integer, Date, Text, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class PlanejamentoPlantao(Base, TimestampMixin):
    """Corretor escalado em um turno de um dia."""

    __tablename__ = "planejamento_plantao"
    __table_args__ = (
        UniqueConstraint("dia", "turno_id", "corretor_id", name="uq_plantao_dia_turno_corretor"),
        Index("ix_plantao_dia_turno", "dia", "turno_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    corretor_id: Mapped[int] = mapped_column(ForeignKey("corretores.id", ondelete="CASCADE"), index=True)
    turno_id: Mapped[int] = mapped_column(ForeignKey("turnos.id", ondelete="CASCADE"))
    dia: Mapped[date] = mapped_column(Date, nullable=False)
    equipe_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    observacoes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    corretor: Mapped["Corretor"] = relationship(back_populates="plantoes")
    turno: Mapped["Turno"] = relationship(back_populates="plantoes")
