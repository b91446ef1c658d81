# library_app/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from library_app.tasks.overdue_check import run_overdue_check_job


def start_scheduler(app):
    """
    Runs the overdue check periodically when SCHEDULER_ENABLED is set.
    - Debug reloader starts two processes; only the real one gets a scheduler.
    - The scheduler is stopped when the process exits.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        app.logger.info("[scheduler] disabled, use `flask check-overdue` to run the job.")
        return None

    # Werkzeug reloader: the serving process has WERKZEUG_RUN_MAIN=true
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    minutes = app.config.get("SCHEDULER_INTERVAL_MINUTES", 60)
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_overdue_check_job(app)
        except Exception as ex:
            # already logged and rolled back inside the job; keep the scheduler alive
            app.logger.warning(f"[scheduler] overdue_check_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_check_job",
        replace_existing=True,
        max_instances=1,        # no overlapping runs
        coalesce=True,          # missed runs collapse into one
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Overdue check job started (every {minutes} minutes).")
    app.extensions["apscheduler"] = scheduler

    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    return scheduler
