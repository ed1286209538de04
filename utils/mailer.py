"""
Notification dispatch.
Fire-and-forget mail messages: every message is logged and kept in a
bounded outbox. Delivery problems are logged, never raised to the caller.
"""

import logging
from collections import deque
from dataclasses import dataclass


@dataclass
class MailMessage:
    to: str
    sender: str
    subject: str
    body: str


class Mailer:
    """
    Collects outgoing notifications.

    Args:
        logger: Logger used for dispatch records
        outbox_size: Number of recent messages kept in memory
        transport: Optional callable taking a MailMessage, called on send
    """

    def __init__(self, logger=None, outbox_size: int = 100, transport=None):
        self.logger = logger or logging.getLogger(__name__)
        self.outbox = deque(maxlen=outbox_size)
        self.transport = transport

    def send(self, message: MailMessage) -> None:
        self.outbox.append(message)
        self.logger.info(f'Mail queued to={message.to} subject="{message.subject}"')

        if self.transport is None:
            return

        try:
            self.transport(message)
        except Exception as e:
            self.logger.error(f'Mail delivery to {message.to} failed: {e}', exc_info=True)

    def clear(self) -> None:
        self.outbox.clear()
