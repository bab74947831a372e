"""
MODELO: LEAD
=============

Potencial cliente captado (site, portal, integração).
A roleta preenche responsavel_id / atribuido / pipeline.
"""

from typing import Optional
from sqlalchemy import String, Boolean, ForeignKey, Text, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .enums import PipelineStage, Urgencia


class Lead(Base, TimestampMixin):
    """Lead que entrou em contato."""

    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(primary_key=True)
    id_external: Mapped[Optional[str]] = mapped_column(String(100), index=True, nullable=True)

    # ==========================================
    # DADOS DO LEAD
    # ==========================================
    nome: Mapped[Optional[str]] = mapped_column(String(200))
    telefone: Mapped[Optional[str]] = mapped_column(String(30), index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    cidade: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    imovel: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    valor: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    resumo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ==========================================
    # ORIGEM / CLASSIFICAÇÃO
    # ==========================================
    origem: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    intencao: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    urgencia: Mapped[str] = mapped_column(String(20), default=Urgencia.NORMAL.value)

    # ==========================================
    # FUNIL E ATRIBUIÇÃO
    # ==========================================
    pipeline: Mapped[str] = mapped_column(String(30), default=PipelineStage.NEW.value, index=True)
    atribuido: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    responsavel_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("corretores.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    responsavel: Mapped[Optional["Corretor"]] = relationship(foreign_keys=[responsavel_id])
