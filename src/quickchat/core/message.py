#!/usr/bin/env python3
"""
Message Record Module
One chat message: identity, validation, status and serialization.
"""

from __future__ import annotations

import logging
import random
import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from quickchat.config import (
    ACTION_MESSAGES, HASH_ID_PREFIX_LENGTH, MAX_MESSAGE_LENGTH,
    MESSAGE_ID_DIGITS, MESSAGE_ID_UPPER_BOUND, RECIPIENT_PHONE_PATTERN
)
from quickchat.core import json_encoder
from quickchat.core.counters import MessageCounters
from quickchat.core.models import MessageAction, MessageStatus

logger = logging.getLogger(__name__)


class MessageRecord:
    """A chat message between two phone numbers.

    The id, payload and phone numbers are fixed at construction. Only the
    status changes, and only through process().
    """

    def __init__(self, payload: str, recipient_phone: str, sender_phone: str,
                 counters: MessageCounters, *, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self._payload = payload
        self._recipient_phone = recipient_phone
        self._sender_phone = sender_phone
        self._counters = counters
        self._created_at = (clock or datetime.now)()
        self._message_id = self._generate_message_id(rng or random.Random())
        # Snapshot used by every later compute_hash() call
        self._sequence = counters.next_sequence()
        self.status = MessageStatus.PENDING
        logger.debug(f"Created message {self._message_id} (sequence {self._sequence})")

    @staticmethod
    def _generate_message_id(rng: random.Random) -> str:
        # Not unique by construction; two records can draw the same id.
        return f"{rng.randrange(MESSAGE_ID_UPPER_BOUND):0{MESSAGE_ID_DIGITS}d}"

    @property
    def message_id(self) -> str:
        return self._message_id

    @property
    def payload(self) -> str:
        return self._payload

    @property
    def recipient_phone(self) -> str:
        return self._recipient_phone

    @property
    def sender_phone(self) -> str:
        return self._sender_phone

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def sequence(self) -> int:
        return self._sequence

    def is_length_valid(self) -> bool:
        return self._payload is not None and len(self._payload) <= MAX_MESSAGE_LENGTH

    def is_recipient_format_valid(self) -> bool:
        return (self._recipient_phone is not None
                and re.fullmatch(RECIPIENT_PHONE_PATTERN, self._recipient_phone) is not None)

    def compute_hash(self) -> str:
        """Return '<id prefix>:<sequence>:<FIRST><LAST>' built from the payload words."""
        words = (self._payload or '').split()
        first_word = words[0] if words else ''
        last_word = words[-1] if len(words) > 1 else first_word
        prefix = self._message_id[:HASH_ID_PREFIX_LENGTH]
        return f"{prefix}:{self._sequence}:{first_word.upper()}{last_word.upper()}"

    def process(self, action: Union[MessageAction, int]) -> str:
        """Apply a user action and return a message describing the result."""
        try:
            action = MessageAction(action)
        except ValueError:
            logger.warning(f"Invalid action {action!r} for message {self._message_id}")
            return ACTION_MESSAGES['invalid']

        if action is MessageAction.SEND:
            self.status = MessageStatus.SENT
            self._counters.record_sent()
            return ACTION_MESSAGES['send']
        if action is MessageAction.DISREGARD:
            return ACTION_MESSAGES['disregard']
        self.status = MessageStatus.PENDING
        return ACTION_MESSAGES['store']

    def to_fields(self) -> List[Tuple[str, str]]:
        return [
            ('messageId', self._message_id),
            ('messageHash', self.compute_hash()),
            ('recipient', self._recipient_phone),
            ('sender', self._sender_phone),
            ('message', self._payload),
            ('timestamp', self._created_at.isoformat()),
            ('status', self.status.label),
        ]

    def to_json(self) -> str:
        return json_encoder.encode(self.to_fields())

    def details(self) -> str:
        return (
            f"Message ID: {self._message_id}\n"
            f"Hash: {self.compute_hash()}\n"
            f"From: {self._sender_phone}\n"
            f"To: {self._recipient_phone}\n"
            f"Content: {self._payload}\n"
            f"Status: {self.status.label}\n"
            f"Time: {self._created_at.isoformat()}"
        )

    def __repr__(self) -> str:
        return (f"MessageRecord(id={self._message_id!r}, from={self._sender_phone!r}, "
                f"to={self._recipient_phone!r}, status={self.status.label!r})")
