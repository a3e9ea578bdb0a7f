from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

SIMPLE_OPS = {"$eq", "$ne", "$gt", "$gte", "$lt", "$lte"}
ALL_OPS = SIMPLE_OPS | {"$in", "$contains"}


def is_op_key(k: str) -> bool:
    return k in ALL_OPS


def _compare(op: str, val: Any, arg: Any) -> bool:
    if op == "$eq":
        return val == arg
    if op == "$ne":
        return val != arg
    # Ordering never matches NULL or values of a different kind
    try:
        if op == "$gt":
            return val > arg
        if op == "$gte":
            return val >= arg
        if op == "$lt":
            return val < arg
        if op == "$lte":
            return val <= arg
    except TypeError:
        return False
    return False


def match_record(rec: Optional[Dict[str, Any]], query: Dict[str, Any]) -> bool:
    """
    Evaluate a flat query against one decoded record.
    Supports equality on scalars and $eq/$ne/$gt/$gte/$lt/$lte/$in/$contains.
    """
    if rec is None:
        return not query
    for k, v in query.items():
        if k.startswith("$"):
            raise ValueError(f"unsupported top-level operator: {k}")
        val = rec.get(k)
        if isinstance(v, dict) and any(is_op_key(op) for op in v.keys()):
            for op, arg in v.items():
                if op in SIMPLE_OPS:
                    if not _compare(op, val, arg):
                        return False
                elif op == "$in":
                    if val not in arg:
                        return False
                elif op == "$contains":
                    if not isinstance(val, str) or str(arg) not in val:
                        return False
                else:
                    raise ValueError(f"unsupported operator: {op}")
        elif val != v:
            return False
    return True


def _norm(v: Any) -> Tuple[str, Any]:
    # Mixed-type columns: NULL first, then numbers, then text
    if v is None:
        return ("", 0)
    if isinstance(v, (int, float, bool)):
        return ("0", v)
    if isinstance(v, str):
        return ("1", v)
    return ("2", json.dumps(v, sort_keys=True, ensure_ascii=False, default=str))


def sort_records(
    recs: List[Optional[Dict[str, Any]]],
    order_by: Sequence[Tuple[str, str]],
) -> List[Optional[Dict[str, Any]]]:
    """Stable multi-key sort; order_by is [(field, "asc"|"desc"), ...]."""
    out = list(recs)
    for field, direction in reversed(list(order_by)):
        reverse = (str(direction).lower() == "desc")
        out.sort(key=lambda r: _norm(r.get(field) if r else None), reverse=reverse)
    return out


def project(rec: Optional[Dict[str, Any]], fields: Optional[Sequence[str]]) -> Optional[Dict[str, Any]]:
    if rec is None or not fields:
        return rec
    return {f: rec.get(f) for f in fields}
