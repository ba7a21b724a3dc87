"""
Chat Front-End Handlers

Each handler converts source-specific events to a common Message format.

Available Handlers:
- TeamsHandler: Bot Framework activities
- SlackHandler: Slack Events API webhooks
"""

from .base import BaseHandler, Message
from .teams import TeamsHandler
from .slack import SlackHandler

__all__ = [
    "BaseHandler",
    "Message",
    "TeamsHandler",
    "SlackHandler",
]
