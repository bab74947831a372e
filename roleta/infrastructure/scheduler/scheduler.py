"""
SCHEDULER DE JOBS PERIÓDICOS
=============================

Gerencia a execução de tarefas agendadas.

JOBS CONFIGURADOS:
- Roleta automática: a cada N minutos (ROLETA_AUTO_INTERVAL_MINUTES),
  só quando ROLETA_AUTO_ENABLED=true

TECNOLOGIA: APScheduler (AsyncIOScheduler)
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from roleta.config import get_settings

logger = logging.getLogger(__name__)

ROLETA_AUTO_JOB_ID = "roleta_auto_job"

# Instância global do scheduler
scheduler: Optional[AsyncIOScheduler] = None


def create_scheduler() -> AsyncIOScheduler:
    """
    Cria e configura o scheduler.

    CHAMADO POR: main.py no startup
    """
    global scheduler

    if scheduler is not None:
        logger.warning("⚠️ Scheduler já existe, retornando instância existente")
        return scheduler

    settings = get_settings()
    logger.info("🔧 Criando scheduler...")

    scheduler = AsyncIOScheduler(
        timezone=settings.timezone,
        job_defaults={
            "coalesce": True,  # Agrupa execuções perdidas
            "max_instances": 1,  # Só uma instância por vez
            "misfire_grace_time": 60 * 5,  # 5 minutos de tolerância
        }
    )

    if settings.roleta_auto_enabled:
        _register_roleta_auto_job(scheduler, settings.roleta_auto_interval_minutes)
    else:
        logger.info("⏸️ Roleta automática desabilitada (ROLETA_AUTO_ENABLED=false)")

    logger.info("✅ Scheduler criado com sucesso")

    return scheduler


def _register_roleta_auto_job(sched: AsyncIOScheduler, interval_minutes: int):
    """
    Registra o job que distribui leads pendentes.

    EXECUTA: a cada `interval_minutes` minutos
    """
    from roleta.infrastructure.jobs.roleta_auto_job import run_roleta_auto_job

    sched.add_job(
        run_roleta_auto_job,
        trigger=IntervalTrigger(minutes=interval_minutes),
        id=ROLETA_AUTO_JOB_ID,
        name="Roleta Automática",
        replace_existing=True,
    )

    logger.info(f"📅 Job registrado: Roleta Automática (a cada {interval_minutes} min)")


def start_scheduler():
    """
    Inicia o scheduler.

    CHAMADO POR: main.py no startup (depois de create_scheduler)
    """
    if scheduler is None:
        logger.error("❌ Scheduler não foi criado. Chame create_scheduler() primeiro.")
        return

    if scheduler.running:
        logger.warning("⚠️ Scheduler já está rodando")
        return

    scheduler.start()
    logger.info("🚀 Scheduler iniciado!")

    jobs = scheduler.get_jobs()
    logger.info(f"📋 Jobs ativos: {len(jobs)}")
    for job in jobs:
        logger.info(f"   - {job.name} (próxima execução: {job.next_run_time})")


def stop_scheduler():
    """
    Para o scheduler.

    CHAMADO POR: main.py no shutdown
    """
    global scheduler

    if scheduler is None:
        return

    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("🛑 Scheduler parado")

    scheduler = None


def get_scheduler() -> Optional[AsyncIOScheduler]:
    return scheduler


def get_scheduler_status() -> dict:
    """
    Retorna status do scheduler.

    Útil para endpoint de health check.
    """
    if scheduler is None:
        return {
            "running": False,
            "jobs": [],
            "error": "Scheduler não inicializado",
        }

    jobs_info = []
    for job in scheduler.get_jobs():
        jobs_info.append({
            "id": job.id,
            "name": job.name,
            "next_run": str(job.next_run_time) if getattr(job, "next_run_time", None) else None,
        })

    return {
        "running": scheduler.running,
        "jobs": jobs_info,
    }


async def run_job_now(job_id: str) -> dict:
    """
    Executa um job imediatamente (fora do agendamento).

    Útil para testes ou execução manual pelo admin.
    """
    if job_id != ROLETA_AUTO_JOB_ID:
        return {"success": False, "error": f"Job '{job_id}' não encontrado"}

    from roleta.infrastructure.jobs.roleta_auto_job import run_roleta_auto_job

    result = await run_roleta_auto_job()
    return {"success": True, "result": result}
