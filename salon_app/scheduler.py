"""Background triggers for the inventory alert checker.

Two paths run the checks: a periodic job (every few minutes, driven by the
``schedule`` library on a daemon thread) and a debounced reaction to the
in-process change feed, which publishes a table name after every commit that
touched a watched model.
"""
import atexit
import logging
import os
import threading
from collections import defaultdict

import schedule
from sqlalchemy import event
from sqlalchemy.orm import Session, object_session

from salon_app.inventory_alerts import run_inventory_checks

logger = logging.getLogger(__name__)


class ChangeFeed:
    """Minimal publish/subscribe of row-level changes, keyed by table name."""

    def __init__(self):
        self._subscribers = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, table, callback):
        with self._lock:
            self._subscribers[table].append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers[table]:
                    self._subscribers[table].remove(callback)

        return unsubscribe

    def publish(self, table):
        with self._lock:
            callbacks = list(self._subscribers[table])
        for callback in callbacks:
            try:
                callback(table)
            except Exception:
                logger.exception("Change feed subscriber failed for table %s", table)


change_feed = ChangeFeed()


def _mark_changed(mapper, connection, target):
    session = object_session(target)
    if session is not None:
        session.info.setdefault("changed_tables", set()).add(mapper.persist_selectable.name)


def _publish_changes(session):
    for table in session.info.pop("changed_tables", set()):
        change_feed.publish(table)


def _discard_changes(session):
    session.info.pop("changed_tables", None)


def watch_model(model):
    """Publish ``model``'s table on the change feed after commits that write it."""
    for event_name in ("after_insert", "after_update", "after_delete"):
        if not event.contains(model, event_name, _mark_changed):
            event.listen(model, event_name, _mark_changed)
    if not event.contains(Session, "after_commit", _publish_changes):
        event.listen(Session, "after_commit", _publish_changes)
        event.listen(Session, "after_rollback", _discard_changes)


class InventoryAlertScheduler:
    """Runs the inventory checks periodically and shortly after inventory changes."""

    def __init__(self, app, interval_minutes=5, debounce_seconds=2.0, feed=None, check=None, poll_seconds=1.0):
        self.app = app
        self.interval_minutes = interval_minutes
        self.debounce_seconds = debounce_seconds
        self.poll_seconds = poll_seconds
        self.feed = feed or change_feed
        self.check = check or run_inventory_checks
        self._scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._thread = None
        self._debounce_timer = None
        self._unsubscribe = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def run_checks(self):
        try:
            with self.app.app_context():
                result = self.check()
            logger.debug("Inventory checks finished: %s", result)
        except Exception:
            logger.exception("Inventory checks failed")

    def start(self, run_immediately=True):
        if self.running:
            return
        self._stop_event.clear()
        self._scheduler.every(self.interval_minutes).minutes.do(self.run_checks)
        self._unsubscribe = self.feed.subscribe("inventory_items", self._on_inventory_change)
        self._thread = threading.Thread(
            target=self._run, args=(run_immediately,), name="inventory-alert-scheduler", daemon=True
        )
        self._thread.start()
        logger.info("Inventory alert checks scheduled every %s minutes", self.interval_minutes)

    def _run(self, run_immediately):
        if run_immediately:
            self.run_checks()
        while not self._stop_event.is_set():
            self._scheduler.run_pending()
            self._stop_event.wait(self.poll_seconds)

    def _on_inventory_change(self, table):
        with self._lock:
            if self._stop_event.is_set():
                return
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
            self._debounce_timer = threading.Timer(self.debounce_seconds, self.run_checks)
            self._debounce_timer.daemon = True
            self._debounce_timer.start()

    def stop(self):
        self._stop_event.set()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        with self._lock:
            if self._debounce_timer is not None:
                self._debounce_timer.cancel()
                self._debounce_timer = None
        self._scheduler.clear()
        if self._thread is not None:
            self._thread.join(timeout=self.poll_seconds * 2)
            self._thread = None
        logger.info("Inventory alert scheduler stopped")


def start_alert_scheduler(app):
    scheduler = InventoryAlertScheduler(
        app,
        interval_minutes=app.config["ALERT_CHECK_INTERVAL_MINUTES"],
        debounce_seconds=app.config["ALERT_DEBOUNCE_SECONDS"],
    )
    scheduler.start()
    atexit.register(scheduler.stop)
    app.extensions["inventory_alert_scheduler"] = scheduler
    return scheduler


def init_alert_scheduler(app):
    """Start the alert scheduler for a serving app.

    Apps loaded by the ``flask`` command (``db upgrade``, ``seed``, ``run`` ...)
    wait for their first request, so one-off commands never start it.
    """
    if os.environ.get("FLASK_RUN_FROM_CLI") != "true":
        return start_alert_scheduler(app)

    lock = threading.Lock()

    @app.before_request
    def start_alert_scheduler_on_first_request():
        if "inventory_alert_scheduler" in app.extensions:
            return
        with lock:
            if "inventory_alert_scheduler" not in app.extensions:
                start_alert_scheduler(app)

    return None
