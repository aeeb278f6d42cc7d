"""Turn free-form call arguments into display text.

Formatting never raises: anything that cannot be serialized degrades to a
plainer string.
"""

import dataclasses
import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

_COMPACT = (",", ":")


def _safe_str(arg: Any) -> str:
    try:
        return str(arg)
    except Exception:
        return f"<unprintable {type(arg).__name__}>"


def _to_json(arg: Any) -> str:
    if isinstance(arg, BaseModel):
        return json.dumps(arg.model_dump(mode="json"), separators=_COMPACT)
    if dataclasses.is_dataclass(arg) and not isinstance(arg, type):
        return json.dumps(dataclasses.asdict(arg), separators=_COMPACT)
    return json.dumps(arg, separators=_COMPACT)


def format_arg(arg: Any) -> str:
    """Format a single argument.

    Exceptions render as ``"<TypeName>: <message>"``, structured values
    (dicts, lists, tuples, pydantic models, dataclasses) as compact JSON,
    everything else through ``str()``.
    """
    if isinstance(arg, str):
        return arg
    if isinstance(arg, BaseException):
        return f"{type(arg).__name__}: {_safe_str(arg)}"
    if isinstance(arg, (dict, list, tuple, BaseModel)) or (
        dataclasses.is_dataclass(arg) and not isinstance(arg, type)
    ):
        try:
            return _to_json(arg)
        except (TypeError, ValueError, RecursionError):
            # cycles and non-JSON values
            return _safe_str(arg)
    return _safe_str(arg)


def format_args(args: Sequence[Any]) -> str:
    """Format and join arguments with a single space."""
    return " ".join(format_arg(arg) for arg in args)
