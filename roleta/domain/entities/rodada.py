"""
MODELO: RODADA DE DISTRIBUIÇÃO
===============================

Log imutável de cada distribuição feita pela roleta.
Uma linha por chamada bem-sucedida; nunca é alterada nem apagada.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, ForeignKey, Text, Integer, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import RoundStatus, DispatchOrigin


class RodadaDistribuicao(Base):
    """Registro de uma rodada da roleta."""

    __tablename__ = "rodadas_distribuicao"
    __table_args__ = (
        Index("ix_rodadas_created", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    numero_rodada: Mapped[int] = mapped_column(Integer, default=1)

    # Escopo da rotação (ex: "plantao:2026-10-19:3" ou "roleta_ativa")
    escopo: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # ==========================================
    # REFERÊNCIAS
    # ==========================================
    corretor_id: Mapped[int] = mapped_column(ForeignKey("corretores.id", ondelete="CASCADE"), index=True)
    lead_id: Mapped[Optional[int]] = mapped_column(ForeignKey("leads.id", ondelete="SET NULL"), index=True)

    # ==========================================
    # DADOS DO CLIENTE (cópia no momento da distribuição)
    # ==========================================
    cliente_atribuido: Mapped[str] = mapped_column(String(200), nullable=False)
    telefone_cliente: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email_cliente: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    origem_lead: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ==========================================
    # RESULTADO
    # ==========================================
    status: Mapped[str] = mapped_column(String(20), default=RoundStatus.SUCCESS.value)
    origem_disparo: Mapped[str] = mapped_column(String(20), default=DispatchOrigin.MANUAL.value)
    observacoes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    corretor: Mapped["Corretor"] = relationship(back_populates="rodadas")
