"""Serviços de infraestrutura da roleta."""

from .roleta_store import RoletaStore, SqlAlchemyRoletaStore
from .distribution_service import (
    distribute_lead,
    select_next_broker,
    resolve_candidates,
    local_now,
    FALLBACK_SCOPE,
)

__all__ = [
    "RoletaStore",
    "SqlAlchemyRoletaStore",
    "distribute_lead",
    "select_next_broker",
    "resolve_candidates",
    "local_now",
    "FALLBACK_SCOPE",
]
