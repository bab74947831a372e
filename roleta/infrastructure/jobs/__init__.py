"""Jobs periódicos."""

from .roleta_auto_job import distribute_pending_leads, run_roleta_auto_job

__all__ = ["distribute_pending_leads", "run_roleta_auto_job"]
