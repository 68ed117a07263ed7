"""
Orderbot Application

Wires the channel client, stores, notification components, update handlers
and the ingestion surface (long polling or webhook) together, and provides
the `orderbot` console entry point.
"""

import logging
import signal
from dataclasses import dataclass
from typing import Optional

import httpx

from orderbot.clients.telegram_client import TelegramClient
from orderbot.config import BotConfig, load_env_files
from orderbot.db import InMemoryOrderStore, OrderDB, OrderStore
from orderbot.handlers import LanguageHandler, MessageHandler, StatusChangeHandler, UpdateRouter
from orderbot.notifications import DispatchWorker, MessageReconciler, NotificationDispatcher
from orderbot.polling import UpdatePoller
from orderbot.session import SessionStore, build_session_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Application:
    config: BotConfig
    client: TelegramClient
    store: OrderStore
    sessions: SessionStore
    dispatcher: NotificationDispatcher
    reconciler: MessageReconciler
    worker: DispatchWorker
    router: UpdateRouter
    poller: UpdatePoller

    def close(self) -> None:
        self.poller.stop()
        self.worker.stop(timeout=5.0)
        self.client.close()


def build_store(config: BotConfig) -> OrderStore:
    """DynamoDB when ORDERS_TABLE is set, in-memory otherwise."""
    if config.ORDERS_TABLE:
        logger.info(f"Using DynamoDB order table {config.ORDERS_TABLE}")
        return OrderDB(table_name=config.ORDERS_TABLE, region_name=config.AWS_REGION)
    logger.warning("ORDERS_TABLE not set; orders are kept in memory")
    return InMemoryOrderStore()


def build_application(
    config: Optional[BotConfig] = None,
    store: Optional[OrderStore] = None,
    sessions: Optional[SessionStore] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Application:
    config = config or BotConfig()
    client = TelegramClient(config, transport=transport)
    store = store if store is not None else build_store(config)
    sessions = sessions if sessions is not None else build_session_store(config)

    dispatcher = NotificationDispatcher(client, config, sessions)
    reconciler = MessageReconciler(client)
    worker = DispatchWorker(maxsize=config.DISPATCH_QUEUE_SIZE)

    router = UpdateRouter(
        language_handler=LanguageHandler(config, client, sessions),
        status_handler=StatusChangeHandler(config, store, client, reconciler, dispatcher),
        message_handler=MessageHandler(config, client, sessions),
    )
    poller = UpdatePoller(client, router, config)

    return Application(
        config=config,
        client=client,
        store=store,
        sessions=sessions,
        dispatcher=dispatcher,
        reconciler=reconciler,
        worker=worker,
        router=router,
        poller=poller,
    )


def _serve_webhook(app: Application) -> None:
    import uvicorn

    from orderbot.api import create_app

    api = create_app(app.router, store=app.store, dispatcher=app.dispatcher, worker=app.worker)
    uvicorn.run(api, host=app.config.HOST, port=app.config.PORT)


def main() -> None:
    load_env_files()
    config = BotConfig()
    logging.basicConfig(level=config.LOG_LEVEL, format=LOG_FORMAT)

    if not config.is_bot_configured():
        logger.warning("BOT_TOKEN not configured; Telegram calls are disabled")
    if not config.ADMIN_TELEGRAM_ID:
        logger.warning("ADMIN_TELEGRAM_ID not set; operator notifications are disabled")

    app = build_application(config)
    app.worker.start()
    try:
        if config.BOT_MODE == "webhook":
            _serve_webhook(app)
        else:
            def _shutdown(signum, frame):
                logger.info(f"Received signal {signum}, stopping")
                app.poller.stop()

            signal.signal(signal.SIGINT, _shutdown)
            signal.signal(signal.SIGTERM, _shutdown)
            app.poller.run()
    finally:
        app.close()


if __name__ == "__main__":
    main()
