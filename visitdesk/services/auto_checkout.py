"""Midnight auto-checkout: closes every active visit once per day at local midnight.

The scheduler is owned by the application lifespan (app.state.auto_checkout).
A failed run is logged to system_logs and never stops the next day's run.
"""
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session, sessionmaker

from visitdesk.database import SessionLocal
from visitdesk.services.visits import check_out_all
from visitdesk.services.system_log import (
    create_log,
    ACTION_AUTO_CHECKOUT,
    ACTION_MANUAL_CHECKOUT,
    ACTION_AUTO_CHECKOUT_ERROR,
)

log = logging.getLogger("uvicorn.error")

JOB_ID = "midnight-auto-checkout"


def run_auto_checkout(db: Session, *, admin_id: int | None = None, scheduled: bool = False) -> int:
    """Check out all active visits, log the outcome and commit. Returns the count."""
    count = check_out_all(db)
    if scheduled:
        create_log(
            db,
            ACTION_AUTO_CHECKOUT,
            f"Midnight auto-checkout completed: {count} active visit(s) were automatically checked out.",
            affected_records=count,
        )
    else:
        create_log(
            db,
            ACTION_MANUAL_CHECKOUT,
            f"Manual auto-checkout completed: {count} active visit(s) were checked out.",
            user_id=admin_id,
            affected_records=count,
        )
    db.commit()
    return count


class AutoCheckoutScheduler:
    def __init__(self, session_factory: sessionmaker = SessionLocal, hour: int = 0, minute: int = 0):
        self._session_factory = session_factory
        self.hour = hour
        self.minute = minute
        self._scheduler = BackgroundScheduler()

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def next_run_time(self):
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None

    def start(self) -> None:
        self._scheduler.add_job(
            self.run_scheduled,
            "cron",
            hour=self.hour,
            minute=self.minute,
            id=JOB_ID,
            replace_existing=True,
            coalesce=True,
            misfire_grace_time=3600,
        )
        self._scheduler.start()
        log.info("Auto-checkout scheduler initialized. Next run at %s", self.next_run_time)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def run_scheduled(self) -> int | None:
        """Cron callback. Never raises; errors are written to system_logs."""
        log.info("Running scheduled midnight auto-checkout...")
        db = self._session_factory()
        try:
            count = run_auto_checkout(db, scheduled=True)
            log.info("Midnight auto-checkout completed: %d visit(s) checked out", count)
            return count
        except Exception as e:
            log.exception("Error during scheduled auto-checkout")
            db.rollback()
            try:
                create_log(db, ACTION_AUTO_CHECKOUT_ERROR, f"Scheduled auto-checkout failed: {e}")
                db.commit()
            except Exception:
                log.exception("Could not record auto-checkout failure")
                db.rollback()
            return None
        finally:
            db.close()
            if self.running:
                log.info("Next auto-checkout scheduled at %s", self.next_run_time)
