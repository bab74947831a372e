"""
SCHEMAS DE VALIDAÇÃO
=====================

Define a estrutura de dados de entrada e saída da API.
Pydantic valida automaticamente os dados.
"""

from datetime import date, datetime, time
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, model_validator

from roleta.domain.entities import PipelineStage, Urgencia, DispatchOrigin


# ============================================
# TURNOS
# ============================================

class TurnoCreate(BaseModel):
    """Schema para criar turno."""
    nome: str = Field(..., min_length=1, max_length=100)
    hora_inicio: time
    hora_fim: time
    ativo: bool = True


class TurnoUpdate(BaseModel):
    """Schema para atualizar turno."""
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    hora_inicio: Optional[time] = None
    hora_fim: Optional[time] = None
    ativo: Optional[bool] = None


class TurnoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nome: str
    hora_inicio: time
    hora_fim: time
    ativo: bool
    vira_meia_noite: bool = False

    @model_validator(mode="after")
    def _flag_overnight(self):
        self.vira_meia_noite = self.hora_inicio > self.hora_fim
        return self


# ============================================
# CORRETORES
# ============================================

class CorretorCreate(BaseModel):
    nome: str = Field(..., min_length=2, max_length=200)
    email: Optional[str] = None
    telefone: Optional[str] = Field(None, max_length=20)
    equipe_id: Optional[int] = None
    roleta_ativa: bool = False


class CorretorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nome: str
    email: Optional[str] = None
    telefone: Optional[str] = None
    equipe_id: Optional[int] = None
    roleta_ativa: bool
    ativo: bool


class RoletaToggle(BaseModel):
    roleta_ativa: bool


# ============================================
# PLANEJAMENTO DE PLANTÃO
# ============================================

class PlantaoCreate(BaseModel):
    """Escala um corretor em um turno de um dia."""
    corretor_id: int
    turno_id: int
    dia: date
    equipe_id: Optional[int] = None
    observacoes: Optional[str] = None


class PlantaoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    corretor_id: int
    turno_id: int
    dia: date
    equipe_id: Optional[int] = None
    observacoes: Optional[str] = None


# ============================================
# LEADS
# ============================================

class LeadCreate(BaseModel):
    """Lead cadastrado manualmente ou vindo de integração."""
    nome: str = Field(..., min_length=1, max_length=200)
    telefone: Optional[str] = Field(None, max_length=30)
    email: Optional[str] = None
    cidade: Optional[str] = None
    origem: Optional[str] = None
    intencao: Optional[str] = None
    urgencia: Urgencia = Urgencia.NORMAL
    imovel: Optional[str] = None
    valor: Optional[float] = None
    resumo: Optional[str] = None
    id_external: Optional[str] = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nome: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    cidade: Optional[str] = None
    origem: Optional[str] = None
    intencao: Optional[str] = None
    urgencia: str
    pipeline: str
    atribuido: bool
    responsavel_id: Optional[int] = None
    created_at: Optional[datetime] = None


# ============================================
# DISTRIBUIÇÃO
# ============================================

class DistributeRequest(BaseModel):
    origem_disparo: DispatchOrigin = DispatchOrigin.MANUAL


class DistributeResponse(BaseModel):
    lead_id: int
    corretor_id: int
    origem_disparo: str
    pipeline: str = PipelineStage.NEW.value


class WebhookLeadResponse(BaseModel):
    """Resposta do webhook de captação."""
    success: bool
    lead_id: int
    distribuido: bool
    corretor_id: Optional[int] = None
    message: str


class RodadaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    numero_rodada: int
    escopo: str
    corretor_id: int
    lead_id: Optional[int] = None
    cliente_atribuido: str
    telefone_cliente: Optional[str] = None
    email_cliente: Optional[str] = None
    origem_lead: Optional[str] = None
    status: str
    origem_disparo: str
    created_at: datetime


class RoletaDashboardItem(BaseModel):
    corretor_id: int
    nome: str
    total: int


class RoletaDashboard(BaseModel):
    total_distribuidos: int
    por_corretor: List[RoletaDashboardItem]
    recentes: List[RodadaResponse]
