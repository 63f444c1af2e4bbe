"""
Request validation helpers.

`prepare_insert_payload` and `prepare_update_payload` turn a flat request
body into a `PreparedPayload`: three parallel tuples of column names,
placeholder positions and bound values. Position i of each tuple describes
the same column, and the data-access layer relies on that alignment when it
builds INSERT and UPDATE statements.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable

from biztime.result import ValidationError

# ASCII digits only, and short enough to fit a bigint
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]{1,18}")


@dataclass(frozen=True)
class PreparedPayload:
    columns: tuple[str, ...]
    positions: tuple[int, ...]
    values: tuple[Any, ...]

    def __post_init__(self):
        if not (len(self.columns) == len(self.positions) == len(self.values)):
            raise ValueError(
                "columns, positions and values must have the same length "
                f"({len(self.columns)}, {len(self.positions)}, {len(self.values)})"
            )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> "PreparedPayload":
        pairs = list(pairs)
        return cls(
            columns=tuple(column for column, _ in pairs),
            positions=tuple(range(1, len(pairs) + 1)),
            values=tuple(value for _, value in pairs),
        )

    def __len__(self) -> int:
        return len(self.columns)

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))


def validate_numeric_id(raw) -> int:
    """
    Parse a path parameter as an integer id.

    Accepts ints and strings holding a plain integer literal (optional sign,
    at most 18 ASCII digits, surrounding whitespace ignored).

    Raises:
        ValidationError: If `raw` is not an integer literal
    """
    if isinstance(raw, bool):
        raise ValidationError(f"must be an integer, got '{raw}'")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INTEGER_LITERAL.fullmatch(raw.strip()):
        return int(raw.strip())
    raise ValidationError(f"must be an integer, got '{raw}'")


def _is_empty(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _require_mapping(body) -> dict:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def prepare_insert_payload(
    required_keys: Iterable[str],
    optional_keys: Iterable[str],
    body: dict,
) -> PreparedPayload:
    """
    Build an INSERT payload from a request body.

    Every required key must be present with a non-empty value. Optional keys
    are included when present. Column order is required keys first, then
    optional keys, each in the order given; unrecognized body keys are ignored.

    Raises:
        ValidationError: If the body is not an object or a required key is missing
    """
    body = _require_mapping(body)
    required_keys = list(required_keys)

    missing = [key for key in required_keys if _is_empty(body.get(key))]
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}", field=missing[0]
        )

    pairs = [(key, body[key]) for key in required_keys]
    pairs += [(key, body[key]) for key in optional_keys if key in body]
    return PreparedPayload.from_pairs(pairs)


def prepare_update_payload(optional_keys: Iterable[str], body: dict) -> PreparedPayload:
    """
    Build an UPDATE payload from a request body.

    Raises:
        ValidationError: If the body is not an object or holds none of `optional_keys`
    """
    body = _require_mapping(body)
    optional_keys = list(optional_keys)

    pairs = [(key, body[key]) for key in optional_keys if key in body]
    if not pairs:
        raise ValidationError(
            f"Nothing to update. Expected at least one of: {', '.join(optional_keys)}"
        )
    return PreparedPayload.from_pairs(pairs)
