from orderbot.api.webhook import create_app

__all__ = ["create_app"]
