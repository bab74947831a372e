"""Schemas da API."""

from .schemas import (
    TurnoCreate,
    TurnoUpdate,
    TurnoResponse,
    CorretorCreate,
    CorretorResponse,
    RoletaToggle,
    PlantaoCreate,
    PlantaoResponse,
    LeadCreate,
    LeadResponse,
    DistributeRequest,
    DistributeResponse,
    WebhookLeadResponse,
    RodadaResponse,
    RoletaDashboardItem,
    RoletaDashboard,
)

__all__ = [
    "TurnoCreate",
    "TurnoUpdate",
    "TurnoResponse",
    "CorretorCreate",
    "CorretorResponse",
    "RoletaToggle",
    "PlantaoCreate",
    "PlantaoResponse",
    "LeadCreate",
    "LeadResponse",
    "DistributeRequest",
    "DistributeResponse",
    "WebhookLeadResponse",
    "RodadaResponse",
    "RoletaDashboardItem",
    "RoletaDashboard",
]
