"""
Badge criteria: the closed set of rule shapes a badge can be earned by.

Stored criteria arrive loosely typed (a mapping, a JSON string, sometimes a
JSON string wrapped in another JSON string) and with field names that drifted
as the catalog schema evolved. `parse_criteria` is the only place that deals
with that; everything downstream works with the typed variants.
"""
import json
import re
from enum import Enum
from typing import Any, FrozenSet, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CriteriaType(str, Enum):
    state_count = "state_count"
    region_complete = "region_complete"
    specific_states = "specific_states"


class SpecificStatesMode(str, Enum):
    all = "all"
    at_least_one_from_each = "at_least_one_from_each"


class StateCountCriteria(BaseModel):
    type: Literal[CriteriaType.state_count] = CriteriaType.state_count
    required_count: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class RegionCompleteCriteria(BaseModel):
    type: Literal[CriteriaType.region_complete] = CriteriaType.region_complete
    region: Optional[str] = None
    region_states: FrozenSet[str]

    model_config = ConfigDict(frozen=True)


class SpecificStatesCriteria(BaseModel):
    type: Literal[CriteriaType.specific_states] = CriteriaType.specific_states
    required_states: FrozenSet[str]
    mode: SpecificStatesMode = SpecificStatesMode.all
    secondary_states: Optional[FrozenSet[str]] = None

    model_config = ConfigDict(frozen=True)


class InvalidCriteria(BaseModel):
    """Returned instead of raising when a payload cannot be understood."""
    badge_id: Optional[int] = None
    reason: str
    raw: Any = None

    model_config = ConfigDict(frozen=True)


Criteria = Union[StateCountCriteria, RegionCompleteCriteria, SpecificStatesCriteria]


# Catalog producers have written the discriminant as "stateCount",
# "state_count", "states_count", "STATE-COUNT"... These are the normalized
# spellings accepted; this is compatibility for existing catalogs, not a
# list to grow.
_TYPE_ALIASES = {
    "statecount": CriteriaType.state_count,
    "statescount": CriteriaType.state_count,
    "regioncomplete": CriteriaType.region_complete,
    "specificstates": CriteriaType.specific_states,
}

_SEPARATORS = re.compile(r"[\s_\-.]+")


def normalize_key(value: str) -> str:
    return _SEPARATORS.sub("", value).lower()


def _decode(raw: Any) -> Any:
    # legacy loaders stored criteria as text, some of it encoded twice
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    for _ in range(2):
        if not isinstance(raw, str):
            break
        raw = json.loads(raw)
    return raw


def _first_count(payload: Mapping[str, Any], *keys: str) -> Optional[int]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return None


def _as_state_codes(value: Any) -> Optional[FrozenSet[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(code, str) for code in value):
        return None
    return frozenset(code.strip().upper() for code in value if code.strip())


def _first_states(payload: Mapping[str, Any], *keys: str) -> Optional[FrozenSet[str]]:
    for key in keys:
        states = _as_state_codes(payload.get(key))
        if states is not None:
            return states
    return None


def _specific_states_mode(payload: Mapping[str, Any]) -> Optional[SpecificStatesMode]:
    mode = payload.get("mode")
    if isinstance(mode, str):
        wanted = normalize_key(mode)
        for candidate in SpecificStatesMode:
            if normalize_key(candidate.value) == wanted:
                return candidate
        return None
    # legacy flags: requireAll wins, the paired mode needs both of its flags
    if payload.get("requireall"):
        return SpecificStatesMode.all
    if payload.get("requireatleastone") and payload.get("requireatleastonefrom"):
        return SpecificStatesMode.at_least_one_from_each
    return SpecificStatesMode.all


def parse_criteria(raw: Any, badge_id: Optional[int] = None) -> Union[Criteria, InvalidCriteria]:
    """
    Turn a stored criteria value into one of the typed variants.

    Never raises: anything unrecognised comes back as InvalidCriteria
    carrying `badge_id` so the caller can log and skip that badge.
    """
    def invalid(reason: str) -> InvalidCriteria:
        return InvalidCriteria(badge_id=badge_id, reason=reason, raw=raw)

    try:
        decoded = _decode(raw)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        return invalid(f"criteria is not valid JSON: {e}")

    if not isinstance(decoded, Mapping):
        return invalid(f"criteria must be an object, got {type(decoded).__name__}")

    payload = {
        normalize_key(key): value
        for key, value in decoded.items()
        if isinstance(key, str)
    }

    type_name = payload.get("type")
    if not isinstance(type_name, str):
        return invalid("criteria has no type")
    criteria_type = _TYPE_ALIASES.get(normalize_key(type_name))
    if criteria_type is None:
        return invalid(f"unrecognised criteria type {type_name!r}")

    if criteria_type is CriteriaType.state_count:
        count = _first_count(payload, "count", "value")
        if count is None:
            return invalid("state_count criteria needs a numeric count")
        if count <= 0:
            return invalid(f"state_count criteria needs a positive count, got {count}")
        return StateCountCriteria(required_count=count)

    states = _first_states(payload, "states", "value")
    if states is None:
        return invalid(f"{criteria_type.value} criteria needs a list of state codes")

    if criteria_type is CriteriaType.region_complete:
        region = payload.get("region")
        # an empty region is kept so the evaluator can report it
        return RegionCompleteCriteria(
            region=region if isinstance(region, str) else None,
            region_states=states,
        )

    if not states:
        return invalid("specific_states criteria needs at least one state")
    mode = _specific_states_mode(payload)
    if mode is None:
        return invalid(f"unrecognised specific_states mode {payload.get('mode')!r}")

    secondary = _first_states(payload, "secondarystates", "andstates")
    if mode is SpecificStatesMode.at_least_one_from_each and not secondary:
        return invalid("at_least_one_from_each mode needs secondary states")

    return SpecificStatesCriteria(
        required_states=states,
        mode=mode,
        secondary_states=secondary,
    )
