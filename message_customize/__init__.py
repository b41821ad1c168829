from message_customize.app import create_app

__all__ = ["create_app"]
