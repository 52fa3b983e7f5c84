#!/usr/bin/env python3
"""
Core models and result schemas for QuickChat.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Dict, Literal, Optional

from quickchat.config import SUCCESS_MESSAGES

if TYPE_CHECKING:  # pragma: no cover
    from quickchat.core.message import MessageRecord

ErrorKind = Literal["validation", "duplicate_account", "not_found", "session", "persistence"]


class QuickChatError(Exception):
    """Base class for errors raised by QuickChat."""


class PersistenceError(QuickChatError):
    """Raised when the message log cannot be written."""


class MessageStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    RECEIVED = "received"
    READ = "read"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    MessageStatus.PENDING: "Pending",
    MessageStatus.SENT: "Sent",
    MessageStatus.RECEIVED: "Received",
    MessageStatus.READ: "Read",
    MessageStatus.FAILED: "Failed",
}


class MessageAction(IntEnum):
    SEND = 1
    DISREGARD = 2
    STORE = 3


@dataclass
class Account:
    username: str
    password: str
    first_name: str
    last_name: str
    phone_number: str
    logged_in: bool = False

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def welcome_message(self) -> str:
        return SUCCESS_MESSAGES['welcome'].format(first_name=self.first_name, last_name=self.last_name)

    def to_dict(self) -> Dict[str, Any]:
        """Display fields only; the password is left out."""
        return {
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone_number': self.phone_number,
            'logged_in': self.logged_in,
        }


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    message: str
    error: Optional[ErrorKind] = None
    record: Optional["MessageRecord"] = None

    @classmethod
    def success(cls, message: str, record: Optional["MessageRecord"] = None) -> "OperationResult":
        return cls(ok=True, message=message, record=record)

    @classmethod
    def failure(cls, error: ErrorKind, message: str,
                record: Optional["MessageRecord"] = None) -> "OperationResult":
        return cls(ok=False, message=message, error=error, record=record)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.ok,
            'message': self.message,
            'error': self.error,
            'record': self.record.to_fields() if self.record is not None else None,
        }
