#!/usr/bin/env python3
"""
Message counters shared by every record a Directory creates.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MessageCounters:
    created: int = 0
    sent: int = 0

    def next_sequence(self) -> int:
        """Advance the creation counter and return its new value."""
        self.created += 1
        return self.created

    def record_sent(self) -> int:
        self.sent += 1
        return self.sent
