from __future__ import annotations

import sys
import threading
from typing import List, Optional

from apscheduler.executors.base import BaseExecutor, run_job
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from src.config import Settings, get_settings
from src.scheduler.jobs import MonitorCycle


class DaemonThreadExecutor(BaseExecutor):
    """Runs each job on its own daemon thread.

    An in-flight cycle never holds the process open after shutdown.
    """

    def _do_submit_job(self, job, run_times):
        def _run():
            try:
                events = run_job(job, job._jobstore_alias, run_times, self._logger.name)
            except BaseException:
                self._run_job_error(job.id, *sys.exc_info()[1:])
            else:
                self._run_job_success(job.id, events)

        thread = threading.Thread(target=_run, name=f"monitor-{job.id}", daemon=True)
        thread.start()


def create_scheduler(
    cycle: MonitorCycle, settings: Optional[Settings] = None
) -> BackgroundScheduler:
    settings = settings or get_settings()
    scheduler = BackgroundScheduler(executors={"default": DaemonThreadExecutor()})

    # 啟動時立即執行一次
    scheduler.add_job(
        cycle.run,
        "date",
        id="initial_monitor_cycle",
        name="Initial Monitor Cycle",
    )

    # 依 cron 週期執行（預設每 5 分鐘）
    scheduler.add_job(
        cycle.run,
        CronTrigger.from_crontab(settings.schedule_cron),
        id="monitor_cycle",
        name="Monitor Cycle",
        max_instances=1,
        coalesce=True,
    )

    logger.info(f"Scheduler configured: {settings.schedule_cron}")
    return scheduler


class MonitorService:
    """Owns the scheduler handle for the monitor's lifetime."""

    def __init__(
        self, cycle: Optional[MonitorCycle] = None, settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.cycle = cycle or MonitorCycle(self.settings)
        self.scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self) -> None:
        if self.running:
            return
        self.scheduler = create_scheduler(self.cycle, self.settings)
        self.scheduler.start()
        logger.info(
            f"Monitor running ({self.settings.matching_strategy}), "
            f"store: {self.settings.store_path}"
        )

    def stop(self) -> None:
        if self.running:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None
        logger.info("Monitor stopped")

    def jobs(self) -> List[dict]:
        if self.scheduler is None:
            return []
        return [
            {
                "id": job.id,
                "name": job.name,
                "next_run": str(job.next_run_time) if job.next_run_time else None,
            }
            for job in self.scheduler.get_jobs()
        ]
