"""Entidades do domínio."""
from .base import Base, TimestampMixin
from .enums import (
    PipelineStage,
    Urgencia,
    RoundStatus,
    DispatchOrigin,
)
from .turno import Turno
from .corretor import Corretor
from .plantao import PlanejamentoPlantao
from .lead import Lead
from .rodada import RodadaDistribuicao
from .cursor import CursorRoleta

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Enums
    "PipelineStage",
    "Urgencia",
    "RoundStatus",
    "DispatchOrigin",
    # Cadastros
    "Turno",
    "Corretor",
    "PlanejamentoPlantao",
    "Lead",
    # Roleta
    "RodadaDistribuicao",
    "CursorRoleta",
]
