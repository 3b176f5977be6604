# backend/utils/ledger.py
"""Derived money fields of an item.

amount_kzt comes from the USD price and the USD->KZT rate, margin from
amount_kzt and the cost price. A value the caller supplied always wins,
even when it disagrees with the formula. Only the fields present in the
same request take part: nothing is recomputed from values already stored
on the row.
"""
from typing import Any, Dict, Mapping


def _present(fields: Mapping[str, Any], name: str) -> bool:
    # JSON null arrives as None and counts as "not supplied"; 0 is a value
    return fields.get(name) is not None


def derive(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``fields`` with ``amount_kzt`` and ``margin`` filled in.

    amount_kzt must be derived first, margin consumes it. No rounding.
    """
    out = dict(fields)

    if not _present(out, "amount_kzt") and _present(out, "price_usd") and _present(out, "exchange_rate"):
        out["amount_kzt"] = out["price_usd"] * out["exchange_rate"]

    if not _present(out, "margin") and _present(out, "amount_kzt") and _present(out, "cost_price"):
        out["margin"] = out["amount_kzt"] - out["cost_price"]

    return out
