"""Exceções de domínio da roleta."""


class RoletaError(Exception):
    """Erro base da distribuição de leads."""


class NoEligibleBrokerError(RoletaError):
    """Nenhum corretor no plantão nem com roleta ativa."""

    def __init__(self, message: str = "Nenhum corretor disponível para distribuição."):
        super().__init__(message)


class LeadNotFoundError(RoletaError):
    """Lead informado não existe."""

    def __init__(self, lead_id: int):
        self.lead_id = lead_id
        super().__init__(f"Lead {lead_id} não encontrado")


class StoreError(RoletaError):
    """Falha de acesso ao banco (rede, query, constraint)."""
