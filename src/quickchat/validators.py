#!/usr/bin/env python3
"""
Credential Validator Module
Field rules applied when an account is registered.
"""

import re
import logging
from typing import Optional
from quickchat.config import (
    USERNAME_MAX_LENGTH, USERNAME_REQUIRED_CHAR, PASSWORD_MIN_LENGTH,
    REGISTRATION_PHONE_PATTERN, REGISTRATION_SUCCESS, VALIDATION_MESSAGES
)

logger = logging.getLogger(__name__)

def valid_username(username: Optional[str]) -> bool:
    """
    Check username format.

    Args:
        username: Candidate username

    Returns:
        bool: True if it contains an underscore and is at most five characters
    """
    return (username is not None
            and USERNAME_REQUIRED_CHAR in username
            and len(username) <= USERNAME_MAX_LENGTH)

def valid_password(password: Optional[str]) -> bool:
    """
    Check password complexity.

    Args:
        password: Candidate password

    Returns:
        bool: True if at least eight characters long with one uppercase
        letter, one digit and one character that is neither letter nor digit
    """
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        return False

    has_capital = False
    has_number = False
    has_special = False

    for ch in password:
        if ch.isupper():
            has_capital = True
        elif ch.isdigit():
            has_number = True
        elif not ch.isalnum():
            has_special = True

        if has_capital and has_number and has_special:
            return True

    return False

def valid_phone(phone_number: Optional[str], pattern: str = REGISTRATION_PHONE_PATTERN) -> bool:
    """
    Validate a phone number against the given pattern.

    Args:
        phone_number: Candidate phone number
        pattern: Regular expression the whole string must match

    Returns:
        bool: True if the number matches
    """
    if phone_number is None:
        return False
    is_valid = bool(re.fullmatch(pattern, phone_number))

    if not is_valid:
        logger.debug(f"Phone number {phone_number!r} does not match {pattern}")

    return is_valid

def registration_outcome(username: Optional[str], password: Optional[str],
                         phone_number: Optional[str]) -> str:
    """
    Run the registration rules in order: username, password, phone.

    Returns:
        str: Message of the first rule that fails, or REGISTRATION_SUCCESS
    """
    if not valid_username(username):
        return VALIDATION_MESSAGES['username']

    if not valid_password(password):
        return VALIDATION_MESSAGES['password']

    if not valid_phone(phone_number, REGISTRATION_PHONE_PATTERN):
        return VALIDATION_MESSAGES['phone']

    return REGISTRATION_SUCCESS
