# SPDX-License-Identifier: Apache-2.0
"""The record built for every logging call."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from klogger.render.datefmt import format_date


@dataclass(frozen=True)
class LogRecord:
    type: str
    context: str
    message: str
    date: str

    def fields(self) -> Dict[str, str]:
        """Return the record as the field mapping consumed by templates."""
        return {
            "type": self.type,
            "context": self.context,
            "message": self.message,
            "date": self.date,
        }


def build_record(
    level: str,
    message: str,
    context: str,
    date_format: str,
    when: Optional[datetime] = None,
) -> LogRecord:
    """Create a record stamped with ``when`` (default: now) in ``date_format``."""
    return LogRecord(
        type=level,
        context=context,
        message=message,
        date=format_date(date_format, when),
    )
