"""
Notification Feed client.

Polls `GET /api/notifications/user/{id}` on a fixed interval (30 seconds by
default) and exposes mark-read / mark-all-read. The signed-in user and
token live on an explicit SessionContext that is passed in, so several
feeds (or tests) can run side by side without shared state.

Usage:
    context = SessionContext(base_url, token, user={"id": 7, "name": "jo"})
    feed = NotificationFeed(context)
    unsubscribe = feed.subscribe(lambda items: print(len(items)))
    feed.start()
    ...
    feed.stop()
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import httpx
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from config import settings

logger = logging.getLogger(__name__)

Subscriber = Callable[[List[dict]], None]


@dataclass
class SessionContext:
    """Who is signed in, and where the API lives."""

    base_url: str
    token: str
    user: Dict = field(default_factory=dict)

    def get_current_user(self) -> Dict:
        return self.user

    @property
    def user_id(self) -> Optional[int]:
        return self.user.get("id")

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class NotificationFeed:
    def __init__(
        self,
        context: SessionContext,
        http_client: Optional[httpx.Client] = None,
        interval_seconds: Optional[int] = None,
    ):
        self.context = context
        # A client passed in belongs to the caller and is left open on stop
        self._owns_client = http_client is None
        self.client = http_client or self._new_client()
        self.interval_seconds = (
            interval_seconds or settings.notification_poll_interval_seconds
        )
        self._notifications: List[dict] = []
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self._scheduler: Optional[BackgroundScheduler] = None

    def _new_client(self) -> httpx.Client:
        return httpx.Client(base_url=self.context.base_url, timeout=10)

    @property
    def notifications(self) -> List[dict]:
        with self._lock:
            return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.get("is_read"))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for every refreshed list.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def subscribe_to_notifications(
        self, callback: Subscriber
    ) -> Callable[[], None]:
        return self.subscribe(callback)

    def _publish(self) -> None:
        snapshot = self.notifications
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                logger.error(f"Notification subscriber failed: {e}")

    def fetch(self) -> List[dict]:
        """Refresh from the server; keep the previous list on failure."""
        user_id = self.context.user_id
        if not user_id or not self.context.token:
            return self.notifications

        try:
            response = self.client.get(
                f"/api/notifications/user/{user_id}",
                headers=self.context.auth_headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch notifications: {e}")
            return self.notifications

        with self._lock:
            self._notifications = response.json()
        self._publish()
        return self.notifications

    def _put_read(self, notification_id: int) -> None:
        response = self.client.put(
            f"/api/notifications/{notification_id}/read",
            headers=self.context.auth_headers(),
        )
        response.raise_for_status()

    def mark_as_read(self, notification_id: int) -> bool:
        try:
            self._put_read(notification_id)
        except httpx.HTTPError as e:
            logger.error(f"Failed to mark notification as read: {e}")
            return False

        with self._lock:
            self._notifications = [
                {**n, "is_read": True} if n.get("id") == notification_id
                else n
                for n in self._notifications
            ]
        self._publish()
        return True

    def mark_all_as_read(self) -> bool:
        """Mark every unread item; local state changes only if all succeed."""
        unread = [n for n in self.notifications if not n.get("is_read")]
        if not unread:
            return True

        try:
            for notification in unread:
                self._put_read(notification["id"])
        except httpx.HTTPError as e:
            logger.error(f"Failed to mark all notifications as read: {e}")
            return False

        with self._lock:
            self._notifications = [
                {**n, "is_read": True} for n in self._notifications
            ]
        self._publish()
        return True

    def start(self) -> None:
        """Fetch now, then poll every `interval_seconds`."""
        if self._scheduler is not None:
            logger.warning("Notification feed already running")
            return

        if self._owns_client and self.client.is_closed:
            self.client = self._new_client()
        self.fetch()
        self._scheduler = BackgroundScheduler(timezone="UTC")
        self._scheduler.add_job(
            func=self.fetch,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=f"notification_feed_{self.context.user_id}",
            name="Poll notifications",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            f"Notification feed started for user {self.context.user_id} "
            f"(every {self.interval_seconds}s)"
        )

    def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Notification feed stopped")
        if self._owns_client and not self.client.is_closed:
            self.client.close()

    @property
    def running(self) -> bool:
        return self._scheduler is not None
