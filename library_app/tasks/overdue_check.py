# library_app/tasks/overdue_check.py
from contextlib import nullcontext
from datetime import date

from flask import current_app, has_app_context

from library_app.extensions import db
from library_app.services.notification_service import get_notification_service
from library_app.services.overdue_service import get_overdue_service


def _context_for(app):
    # reuse the caller's context (CLI, request) so the job shares its session
    if has_app_context() and current_app._get_current_object() is app:
        return nullcontext()
    return app.app_context()


def run_overdue_check_job(app, as_of: date = None) -> dict:
    """
    Daily sweep over active loans:
    - overdue loans get their fine created / brought up to date
    - every user with an overdue loan is reminded on all channels
    Everything is committed once at the end; on error the session is rolled back.
    """
    with _context_for(app):
        as_of = as_of or date.today()
        try:
            fines_changed = get_overdue_service().assess_fines(as_of)
            users_notified = get_notification_service().send_overdue_reminders(as_of)

            db.session.commit()

            app.logger.info(
                f"[overdue_check] as_of={as_of} fines_changed={fines_changed} "
                f"users_notified={users_notified}"
            )
            return {"fines_changed": fines_changed, "users_notified": users_notified}

        except Exception as e:
            db.session.rollback()
            app.logger.exception(f"[overdue_check] failed: {e}")
            raise
