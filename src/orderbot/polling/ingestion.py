"""
Event Ingestion Loop

A single sequential consumer that long-polls the channel for inbound updates
and hands each one to the update router.

Delivery cursor:
- `cursor` is the id of the next unconsumed update (0 before the first batch)
- it is advanced to update_id + 1 before the update's handler runs, so a
  handler that raises can never cause the same update to be fetched again
- it never decreases

Failure handling:
- handler errors are logged per update and never stop the loop
- ChannelUnavailable (and any other retrieval error) backs off for
  POLL_RETRY_DELAY_SECONDS and retries

Stopping is cooperative: stop() sets a flag the loop checks between batches
and wakes any backoff wait.
"""

import logging
import threading
from typing import Optional

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelError, ChannelUnavailable
from orderbot.handlers.router import UpdateRouter

logger = logging.getLogger(__name__)


class UpdatePoller:
    def __init__(self, client: TelegramClient, router: UpdateRouter, config: BotConfig):
        self.client = client
        self.router = router
        self.config = config
        self.cursor = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def poll_once(self) -> int:
        """
        Fetch one batch of updates and route each of them.

        Returns:
            Number of updates consumed

        Raises:
            ChannelUnavailable: If the batch could not be retrieved
        """
        updates = self.client.get_updates(self.cursor, self.config.POLL_TIMEOUT_SECONDS)
        consumed = 0
        for update in updates:
            update_id = update.get("update_id") if isinstance(update, dict) else None
            if isinstance(update_id, int):
                self.cursor = max(self.cursor, update_id + 1)
            consumed += 1
            try:
                self.router.handle_update(update)
            except Exception as e:
                logger.error(f"Handler failed for update {update_id}: {e}", exc_info=True)
        return consumed

    def run(self) -> None:
        """Poll until stop() is called."""
        if not self.client.enabled:
            logger.warning("BOT_TOKEN not configured; update polling disabled")
            return

        try:
            self.client.delete_webhook(drop_pending_updates=False)
        except ChannelError as e:
            logger.warning(f"deleteWebhook failed, polling anyway: {e}")

        retry_delay = self.config.POLL_RETRY_DELAY_SECONDS
        logger.info("Telegram polling started")
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except ChannelUnavailable as e:
                logger.warning(f"Polling error: {e}; retrying in {retry_delay}s")
                self._stop_event.wait(retry_delay)
            except Exception as e:
                logger.error(f"Unexpected polling error: {e}; retrying in {retry_delay}s", exc_info=True)
                self._stop_event.wait(retry_delay)
        logger.info("Telegram polling stopped")

    def start(self) -> threading.Thread:
        """Run the loop on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="update-poller", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, join: bool = False, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if join and self._thread is not None:
            self._thread.join(timeout)
