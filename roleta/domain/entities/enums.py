"""Enums - valores fixos que se repetem no sistema."""

from enum import Enum


class PipelineStage(str, Enum):
    """Etapa do lead no funil de vendas."""
    NEW = "Novo"                    # Acabou de chegar / acabou de ser distribuído
    QUALIFICATION = "Qualificação"
    VISIT = "Visita"
    WON = "Ganho"
    LOST = "Perdido"


class Urgencia(str, Enum):
    """Urgência informada na captação."""
    NORMAL = "Normal"
    HIGH = "Alta"
    CRITICAL = "Crítica"


class RoundStatus(str, Enum):
    """Status de uma rodada de distribuição."""
    SUCCESS = "sucesso"
    ERROR = "erro"
    PENDING = "pendente"


class DispatchOrigin(str, Enum):
    """Quem disparou a distribuição."""
    MANUAL = "manual"           # Gestor clicou em "distribuir"
    AUTOMATIC = "automatico"    # Job periódico de leads pendentes
    WEBHOOK = "webhook"         # Lead entrou por integração externa
