"""
Scheduler de Jobs (APScheduler)
"""

from .scheduler import (
    ROLETA_AUTO_JOB_ID,
    get_scheduler,
    create_scheduler,
    start_scheduler,
    stop_scheduler,
    get_scheduler_status,
    run_job_now,
)

__all__ = [
    "ROLETA_AUTO_JOB_ID",
    "get_scheduler",
    "create_scheduler",
    "start_scheduler",
    "stop_scheduler",
    "get_scheduler_status",
    "run_job_now",
]
