#!/usr/bin/env python3
"""
Message Log Module
Append-only JSON-lines file holding one line per sent message.
"""

import os
import json
import logging
from typing import List, Dict, Optional, Any
from quickchat.config import DEFAULT_MESSAGES_FILE
from quickchat.core.models import PersistenceError

logger = logging.getLogger(__name__)

class MessageLog:
    """Writes serialized messages to a local file and reads them back."""

    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath or DEFAULT_MESSAGES_FILE

    def append_line(self, text: str) -> None:
        """Append a single line of text. No locking, no rotation."""
        try:
            os.makedirs(os.path.dirname(self.filepath) or '.', exist_ok=True)
            with open(self.filepath, 'a', encoding='utf-8') as f:
                f.write(text)
                f.write('\n')
        except (OSError, UnicodeError) as e:
            logger.error(f"Error appending to {self.filepath}: {e}")
            raise PersistenceError(str(e)) from e
        logger.debug(f"Appended {len(text)} characters to {self.filepath}")

    def read_records(self) -> List[Dict[str, Any]]:
        """Read back every stored message, skipping lines that are not valid JSON."""
        records: List[Dict[str, Any]] = []
        if not os.path.exists(self.filepath):
            return records

        with open(self.filepath, 'r', encoding='utf-8', errors='replace') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping unreadable line {line_num} in {self.filepath}: {e}")
                    continue
                if isinstance(data, dict):
                    records.append(data)
                else:
                    logger.warning(f"Skipping non-object line {line_num} in {self.filepath}")

        logger.info(f"Loaded {len(records)} messages from {self.filepath}")
        return records
