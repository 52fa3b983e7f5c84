#!/usr/bin/env python3
"""
Directory Module
In-memory store of accounts, per-account inboxes and the current session.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol

from quickchat.config import ERROR_MESSAGES, REGISTRATION_SUCCESS, SUCCESS_MESSAGES
from quickchat.core.counters import MessageCounters
from quickchat.core.message import MessageRecord
from quickchat.core.models import Account, MessageAction, OperationResult, PersistenceError
from quickchat.validators import registration_outcome

logger = logging.getLogger(__name__)


class LineSink(Protocol):
    def append_line(self, text: str) -> None: ...


class Directory:
    """Coordinates registration, login and message delivery between local accounts.

    Failures are returned as OperationResult values so a front-end can show
    them; nothing here raises for bad user input.
    """

    def __init__(self, message_log: Optional[LineSink] = None,
                 counters: Optional[MessageCounters] = None,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.message_log = message_log
        self.counters = counters or MessageCounters()
        self._rng = rng or random.Random()
        self._clock = clock
        self._accounts: Dict[str, Account] = {}
        self._inbox: Dict[str, List[MessageRecord]] = {}
        self._current: Optional[Account] = None

    @property
    def accounts(self) -> Dict[str, Account]:
        return dict(self._accounts)

    @property
    def current_session(self) -> Optional[Account]:
        return self._current

    @property
    def total_sent(self) -> int:
        return self.counters.sent

    def seed_account(self, account: Account) -> None:
        """Insert an account without running the registration rules."""
        self._accounts[account.phone_number] = account
        self._inbox.setdefault(account.phone_number, [])
        logger.debug(f"Seeded account {account.username} ({account.phone_number})")

    def register(self, username: str, password: str, first_name: str,
                 last_name: str, phone_number: str) -> OperationResult:
        outcome = registration_outcome(username, password, phone_number)
        if outcome != REGISTRATION_SUCCESS:
            logger.debug(f"Registration rejected for {username!r}: {outcome}")
            return OperationResult.failure("validation", outcome)

        if phone_number in self._accounts:
            logger.debug(f"Registration rejected, {phone_number} already registered")
            return OperationResult.failure("duplicate_account", ERROR_MESSAGES['phone_already_registered'])

        account = Account(username, password, first_name, last_name, phone_number)
        self._accounts[phone_number] = account
        self._inbox[phone_number] = []
        logger.info(f"Registered {username} ({phone_number})")
        return OperationResult.success(outcome)

    def login(self, username: str, password: str) -> OperationResult:
        for account in self._accounts.values():
            if account.username == username and account.password == password:
                if self._current is not None:
                    self._current.logged_in = False
                account.logged_in = True
                self._current = account
                logger.info(f"{username} logged in")
                return OperationResult.success(account.welcome_message())

        logger.debug(f"Failed login for {username!r}")
        return OperationResult.failure("not_found", ERROR_MESSAGES['invalid_credentials'])

    def logout(self) -> OperationResult:
        if self._current is not None:
            self._current.logged_in = False
            logger.info(f"{self._current.username} logged out")
        self._current = None
        return OperationResult.success(SUCCESS_MESSAGES['logged_out'])

    def send(self, recipient_phone: str, payload: str) -> OperationResult:
        """Validate, record and persist a message from the session account.

        Checks run in order: session, length, recipient format, recipient
        registered. The message log is written after both inboxes are updated;
        if that write fails the message stays recorded as sent and the result
        reports the persistence error.
        """
        if self._current is None:
            return OperationResult.failure("session", ERROR_MESSAGES['not_logged_in'])

        record = MessageRecord(payload, recipient_phone, self._current.phone_number,
                               self.counters, rng=self._rng, clock=self._clock)

        if not record.is_length_valid():
            logger.debug(f"Message {record.message_id} rejected: too long")
            return OperationResult.failure("validation", ERROR_MESSAGES['message_too_long'])

        if not record.is_recipient_format_valid():
            logger.debug(f"Message {record.message_id} rejected: bad recipient {recipient_phone!r}")
            return OperationResult.failure("validation", ERROR_MESSAGES['invalid_recipient'])

        if recipient_phone not in self._accounts:
            logger.debug(f"Message {record.message_id} rejected: {recipient_phone} not registered")
            return OperationResult.failure("not_found", ERROR_MESSAGES['recipient_not_registered'])

        result_message = record.process(MessageAction.SEND)
        self._store(self._current.phone_number, record)
        self._store(recipient_phone, record)
        logger.info(f"Message {record.message_id} sent from {record.sender_phone} to {recipient_phone}")

        if self.message_log is not None:
            try:
                self.message_log.append_line(record.to_json())
            except PersistenceError as e:
                logger.error(f"Message {record.message_id} sent but not saved: {e}")
                return OperationResult.failure(
                    "persistence", ERROR_MESSAGES['persistence_failed'].format(error=e), record=record
                )

        return OperationResult.success(result_message, record=record)

    def _store(self, phone_number: str, record: MessageRecord) -> None:
        self._inbox.setdefault(phone_number, []).append(record)

    def get_messages_for_current_session(self) -> List[MessageRecord]:
        if self._current is None:
            return []
        return list(self._inbox.get(self._current.phone_number, []))

    def list_other_accounts(self) -> List[Account]:
        current_phone = self._current.phone_number if self._current is not None else None
        return [a for phone, a in self._accounts.items() if phone != current_phone]

    def find_account(self, phone_number: str) -> Optional[Account]:
        return self._accounts.get(phone_number)
