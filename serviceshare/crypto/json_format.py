'''
    Description:
        - Compact, deterministic JSON for business payloads before they are
          encrypted into reqData.

    Accepted inputs:
        - dicts / lists / scalars
        - pydantic models (dumped by alias, None fields dropped)
        - dataclasses
        - str / bytes that already hold JSON text (passed through unchanged)
'''

# ========== Imports ==========
import dataclasses
import json

from pydantic import BaseModel


def _to_plain(obj):
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


# ========== stabilise Json ==========
def stabilise_json(obj) -> bytes:
    if isinstance(obj, bytes):
        return obj
    if isinstance(obj, str):
        return obj.encode("utf-8")
    return json.dumps(
        _to_plain(obj),
        separators=(",", ":"), # no whitespace on the wire
        sort_keys=True, # same payload -> identical bytes each time
        ensure_ascii=False,
        allow_nan=False
    ).encode("utf-8")
