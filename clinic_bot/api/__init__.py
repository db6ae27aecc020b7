"""
HTTP surface of the chat back-end.
"""

from clinic_bot.api.app import create_app

__all__ = ["create_app"]
