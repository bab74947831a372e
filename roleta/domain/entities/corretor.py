"""
MODELO: CORRETOR
=================

Corretor da imobiliária (perfil que recebe leads).
`roleta_ativa` marca quem entra na roleta padrão quando não há plantão escalado.
"""

from typing import Optional, List
from sqlalchemy import String, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Corretor(Base, TimestampMixin):
    """Corretor da equipe."""

    __tablename__ = "corretores"

    id: Mapped[int] = mapped_column(primary_key=True)

    # ==========================================
    # DADOS BÁSICOS
    # ==========================================
    nome: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    telefone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    equipe_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    # ==========================================
    # ROLETA
    # ==========================================
    roleta_ativa: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    # ==========================================
    # RELACIONAMENTOS
    # ==========================================
    plantoes: Mapped[List["PlanejamentoPlantao"]] = relationship(
        back_populates="corretor", cascade="all, delete-orphan", passive_deletes=True
    )
    rodadas: Mapped[List["RodadaDistribuicao"]] = relationship(back_populates="corretor")
