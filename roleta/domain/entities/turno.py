"""
MODELO: TURNO
==============

Definição de horário de um turno de plantão (ex: Manhã 08:00 → 12:00).
A roleta usa o turno vigente para saber quem está de plantão agora.
"""

from datetime import time
from typing import List
from sqlalchemy import String, Boolean, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from roleta.domain.services.shift_window import ShiftWindow


class Turno(Base, TimestampMixin):
    """Turno de atendimento."""

    __tablename__ = "turnos"

    id: Mapped[int] = mapped_column(primary_key=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False)
    hora_inicio: Mapped[time] = mapped_column(Time, nullable=False)
    hora_fim: Mapped[time] = mapped_column(Time, nullable=False)
    ativo: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    plantoes: Mapped[List["PlanejamentoPlantao"]] = relationship(
        back_populates="turno", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def window(self) -> ShiftWindow:
        return ShiftWindow(self.hora_inicio, self.hora_fim)
