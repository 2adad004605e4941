"""
Data models for Chainhook listener output.

EventRecord is the canonical, immutable form of one transaction-level
occurrence, whichever payload format it was extracted from.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

UNKNOWN = "unknown"
PARSE_ERROR_TXID = "parse-error"


@dataclass(frozen=True)
class EventRecord:
    """
    One normalized contract interaction.

    timestamp is the wall-clock time of normalization, not the block time;
    raw keeps the payload sub-object the record came from for diagnostics
    and is never sent over the wire.
    """

    id: str
    transaction_id: str
    sender: str
    block_height: int
    contract_id: str
    method: str
    success: bool
    timestamp: datetime
    raw: Any = None
    parse_error: str | None = None

    @classmethod
    def create(
        cls,
        *,
        transaction_id: str = UNKNOWN,
        sender: str = UNKNOWN,
        block_height: int = 0,
        contract_id: str,
        method: str = UNKNOWN,
        success: bool = True,
        raw: Any = None,
        parse_error: str | None = None,
    ) -> "EventRecord":
        """Build a record with a fresh unique id and the current UTC time."""
        return cls(
            id=str(uuid.uuid4()),
            transaction_id=transaction_id,
            sender=sender,
            block_height=block_height,
            contract_id=contract_id,
            method=method,
            success=success,
            timestamp=datetime.now(timezone.utc),
            raw=raw,
            parse_error=parse_error,
        )

    @classmethod
    def parse_failure(cls, payload: Any, contract_id: str, error: str) -> "EventRecord":
        """Placeholder record for a payload whose extraction raised."""
        return cls.create(
            transaction_id=PARSE_ERROR_TXID,
            contract_id=contract_id,
            success=False,
            raw=payload,
            parse_error=error,
        )
