"""
Chainhook payload normalizer — raw webhook JSON to EventRecord objects.

The provider has shipped several incompatible payload formats and does not
version them, so every known shape is tried:

1. flat events       {"events": [...]} or {"data": {"events": [...]}}
2. block apply       {"apply": [block, ...]} or {"event": {"apply": [...]}}
3. direct txs        {"transactions": [...]}

Results of all strategies are concatenated in that order. A payload that
matches none of them yields no records. Any fault during extraction
discards partial results and yields a single parse-error record; nothing
raised in here reaches the caller.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable

from chainhook_monitor.chainhook_listener.fields import (
    MISSING,
    Path,
    as_height,
    as_list,
    as_object,
    as_text,
    first_present,
    is_explicit_false,
    lookup,
)
from chainhook_monitor.chainhook_listener.models import UNKNOWN, EventRecord
from chainhook_monitor.monitor_logging import get_logger

logger = get_logger(__name__)

PAYLOAD_PREVIEW_CHARS = 1000

# --- Flat events (Chainhooks 2.0 style) ---

EVENTS_ARRAY: tuple[Path, ...] = (("events",), ("data", "events"))

FLAT_TXID: tuple[Path, ...] = (("tx_id",), ("txid",), ("transaction_id",))
FLAT_SENDER: tuple[Path, ...] = (("sender",), ("sender_address",), ("principal",))
FLAT_BLOCK_HEIGHT: tuple[Path, ...] = (("block_height",), ("block",))
FLAT_CONTRACT: tuple[Path, ...] = (("contract_identifier",),)
FLAT_METHOD: tuple[Path, ...] = (("method",), ("function_name",))

# --- Block apply (Chainhook streaming blocks) ---

APPLY_ARRAY: tuple[Path, ...] = (("apply",), ("event", "apply"))

BLOCK_HEIGHT: tuple[Path, ...] = (
    ("block_identifier", "index"),
    ("block_height",),
    ("metadata", "block_height"),
)

# Paths below run against a per-transaction view:
#   {"tx": <transaction>, "metadata": <tx.metadata>, "details": <metadata | operations[0] | tx>}
APPLY_TXID: tuple[Path, ...] = (
    ("tx", "transaction_identifier", "hash"),
    ("metadata", "tx_id"),
    ("details", "txid"),
)
APPLY_SENDER: tuple[Path, ...] = (
    ("metadata", "sender"),
    ("metadata", "sender_address"),
    ("tx", "operations", 0, "account", "address"),
)
APPLY_METHOD: tuple[Path, ...] = (
    ("metadata", "kind", "data", "contract_call", "function_name"),
    ("metadata", "contract_call", "function_name"),
    ("details", "function_name"),
)
APPLY_CONTRACT: tuple[Path, ...] = (("metadata", "kind", "data", "contract_identifier"),)
APPLY_SUCCESS_FLAG: Path = ("metadata", "success")
APPLY_RESULT: Path = ("metadata", "receipt", "result")

# --- Direct transactions array ---

TRANSACTIONS_ARRAY: tuple[Path, ...] = (("transactions",),)

DIRECT_TXID: tuple[Path, ...] = FLAT_TXID
DIRECT_SENDER: tuple[Path, ...] = (("sender",), ("sender_address",))
DIRECT_METHOD: tuple[Path, ...] = (("function_name",), ("method",))
PAYLOAD_BLOCK_HEIGHT: Path = ("block_height",)


def _record_from_flat_item(
    item: Mapping[str, Any],
    contract_fallback: str,
    *,
    txid_paths: tuple[Path, ...],
    sender_paths: tuple[Path, ...],
    method_paths: tuple[Path, ...],
    block_height: int,
) -> EventRecord:
    return EventRecord.create(
        transaction_id=as_text(first_present(item, txid_paths), "txid", UNKNOWN),
        sender=as_text(first_present(item, sender_paths), "sender", UNKNOWN),
        block_height=block_height,
        contract_id=as_text(
            first_present(item, FLAT_CONTRACT), "contract_identifier", contract_fallback
        ),
        method=as_text(first_present(item, method_paths), "method", UNKNOWN),
        success=not is_explicit_false(lookup(item, ("success",))),
        raw=item,
    )


def extract_flat_events(payload: Any, contract_fallback: str) -> list[EventRecord]:
    """Strategy 1: events at top level or under data."""
    items = as_list(first_present(payload, EVENTS_ARRAY), "events")
    if not items:
        return []
    records: list[EventRecord] = []
    for i, raw in enumerate(items):
        item = as_object(raw, f"events[{i}]")
        records.append(
            _record_from_flat_item(
                item,
                contract_fallback,
                txid_paths=FLAT_TXID,
                sender_paths=FLAT_SENDER,
                method_paths=FLAT_METHOD,
                block_height=as_height(first_present(item, FLAT_BLOCK_HEIGHT)),
            )
        )
    return records


def classify_result(result: Any) -> bool | None:
    """
    Read a Clarity receipt result such as "(ok true)" or "(err u1)".

    Returns False for an error result, True for an ok result and None when
    the text carries neither marker. Substring matching only; novel result
    formats can be misread.
    """
    text = as_text(result, "receipt.result", "")
    if "(err" in text or text.startswith("err"):
        return False
    if "(ok" in text or text.startswith("ok"):
        return True
    return None


def _transaction_view(tx: Mapping[str, Any], where: str) -> dict[str, Any]:
    view: dict[str, Any] = {"tx": tx}
    metadata = lookup(tx, ("metadata",))
    if metadata is not MISSING:
        view["metadata"] = as_object(metadata, f"{where}.metadata")
        view["details"] = view["metadata"]
        return view
    first_operation = lookup(tx, ("operations", 0))
    view["details"] = first_operation if isinstance(first_operation, Mapping) else tx
    return view


def _apply_success(view: Mapping[str, Any]) -> bool:
    if is_explicit_false(lookup(view, APPLY_SUCCESS_FLAG)):
        return False
    result = lookup(view, APPLY_RESULT)
    if result is MISSING:
        return True
    verdict = classify_result(result)
    return True if verdict is None else verdict


def extract_block_apply(payload: Any, contract_fallback: str) -> list[EventRecord]:
    """Strategy 2: blocks under apply (top level or under event), one record per transaction."""
    blocks = as_list(first_present(payload, APPLY_ARRAY), "apply")
    if not blocks:
        return []
    records: list[EventRecord] = []
    for b, raw_block in enumerate(blocks):
        block = as_object(raw_block, f"apply[{b}]")
        block_height = as_height(first_present(block, BLOCK_HEIGHT))
        transactions = as_list(lookup(block, ("transactions",)), f"apply[{b}].transactions")
        logger.debug("block_transactions", block_height=block_height, transactions=len(transactions))
        for t, raw_tx in enumerate(transactions):
            where = f"apply[{b}].transactions[{t}]"
            tx = as_object(raw_tx, where)
            view = _transaction_view(tx, where)
            records.append(
                EventRecord.create(
                    transaction_id=as_text(first_present(view, APPLY_TXID), "txid", UNKNOWN),
                    sender=as_text(first_present(view, APPLY_SENDER), "sender", UNKNOWN),
                    block_height=block_height,
                    contract_id=as_text(
                        first_present(view, APPLY_CONTRACT), "contract_identifier", contract_fallback
                    ),
                    method=as_text(first_present(view, APPLY_METHOD), "method", UNKNOWN),
                    success=_apply_success(view),
                    raw=tx,
                )
            )
    return records


def extract_direct_transactions(payload: Any, contract_fallback: str) -> list[EventRecord]:
    """Strategy 3: flat transactions array; block height falls back to the payload's."""
    items = as_list(first_present(payload, TRANSACTIONS_ARRAY), "transactions")
    if not items:
        return []
    payload_height = lookup(payload, PAYLOAD_BLOCK_HEIGHT)
    records: list[EventRecord] = []
    for i, raw in enumerate(items):
        item = as_object(raw, f"transactions[{i}]")
        height = lookup(item, ("block_height",))
        records.append(
            _record_from_flat_item(
                item,
                contract_fallback,
                txid_paths=DIRECT_TXID,
                sender_paths=DIRECT_SENDER,
                method_paths=DIRECT_METHOD,
                block_height=as_height(payload_height if height is MISSING else height),
            )
        )
    return records


Strategy = Callable[[Any, str], list[EventRecord]]

STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("flat_events", extract_flat_events),
    ("block_apply", extract_block_apply),
    ("direct_transactions", extract_direct_transactions),
)


def _payload_keys(payload: Any) -> list[str]:
    return [str(k) for k in payload] if isinstance(payload, Mapping) else []


def _payload_preview(payload: Any) -> str:
    try:
        text = json.dumps(payload, default=str)
    except (TypeError, ValueError, RecursionError):
        # repr recurses as deeply as json.dumps, so only the top level is described
        text = f"<unserializable {type(payload).__name__} keys={_payload_keys(payload)}>"
    return text[:PAYLOAD_PREVIEW_CHARS]


def normalize(payload: Any, contract_fallback: str) -> list[EventRecord]:
    """
    Extract event records from one webhook payload.

    Args:
        payload: Decoded JSON body of any shape.
        contract_fallback: Contract identifier used when the payload carries none.

    Returns:
        Records in strategy order (flat events, block apply, direct
        transactions); empty for an unrecognized payload; exactly one
        parse-error record (success=False, raw=payload) if extraction fails.
    """
    logger.debug("payload_received", keys=_payload_keys(payload))
    try:
        records: list[EventRecord] = []
        for name, strategy in STRATEGIES:
            found = strategy(payload, contract_fallback)
            if found:
                logger.info("payload_strategy_matched", strategy=name, records=len(found))
            records.extend(found)
    except Exception as e:
        logger.error(
            "payload_parse_error",
            error=str(e),
            error_type=type(e).__name__,
            keys=_payload_keys(payload),
        )
        return [EventRecord.parse_failure(payload, contract_fallback, str(e) or type(e).__name__)]

    if not records:
        logger.warning(
            "payload_unrecognized",
            keys=_payload_keys(payload),
            preview=_payload_preview(payload),
        )
    return records
