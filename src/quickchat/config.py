#!/usr/bin/env python3
"""
QuickChat Configuration Module
"""

import logging
import os

# Application Information
APP_NAME = "QuickChat"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Register local accounts and exchange short text messages"

# Default Settings
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_MESSAGES_FILE = os.environ.get('QUICKCHAT_MESSAGES_FILE') or "messages.json"

# Field limits
USERNAME_MAX_LENGTH = 5
USERNAME_REQUIRED_CHAR = '_'
PASSWORD_MIN_LENGTH = 8
MAX_MESSAGE_LENGTH = 250

# Message identity
MESSAGE_ID_DIGITS = 10
MESSAGE_ID_UPPER_BOUND = 1_000_000_000
HASH_ID_PREFIX_LENGTH = 2

# Validation patterns
# Accounts are South African numbers only; recipients may be any international number.
REGISTRATION_PHONE_PATTERN = r'^\+27[0-9]{9}$'
RECIPIENT_PHONE_PATTERN = r'^\+[0-9]{10,15}$'

# Returned by registration_outcome when every rule passes
REGISTRATION_SUCCESS = "Registration successful!"

VALIDATION_MESSAGES = {
    'username': f"Username must contain underscore and be ≤{USERNAME_MAX_LENGTH} characters",
    'password': f"Password must have ≥{PASSWORD_MIN_LENGTH} chars with uppercase, number and special char",
    'phone': "Cell number must be in +27XXXXXXXXX format",
}

# Error messages
ERROR_MESSAGES = {
    'not_logged_in': "not logged in",
    'invalid_credentials': "invalid username or password",
    'phone_already_registered': "phone already registered",
    'message_too_long': f"message exceeds {MAX_MESSAGE_LENGTH} character limit",
    'invalid_recipient': "invalid recipient number format",
    'recipient_not_registered': "recipient not registered",
    'persistence_failed': "failed to save message: {error}",
    'unknown_command': "Unknown command '{command}'. Type 'help' for a list of commands.",
    'usage': "Usage: {usage}",
    'interrupted': "⚠️  Operation interrupted by user.",
}

# Success messages
SUCCESS_MESSAGES = {
    'registered': REGISTRATION_SUCCESS,
    'welcome': "Welcome {first_name} {last_name}, great to see you!",
    'logged_out': "Logged out successfully",
    'no_messages': "No messages yet. Start chatting!",
}

# Results of MessageRecord.process
ACTION_MESSAGES = {
    'send': "Message sent successfully",
    'disregard': "Message disregarded",
    'store': "Message stored for later",
    'invalid': "Invalid action specified",
}

# Seeded on startup so there is someone to talk to
DEMO_ACCOUNT = {
    'username': 'admin',
    'password': 'Pass123!',
    'first_name': 'Demo',
    'last_name': 'User',
    'phone_number': '+27821234567',
}

# Logging configuration
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
