"""
Badge eligibility evaluation.

`evaluate` is a pure function of the visited-state codes and the badges the
user does not hold yet. It reads nothing and writes nothing; awarding is the
caller's job (see BadgeService.check_for_new_badges).
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, ConfigDict

from api.badges.criteria import (
    Criteria,
    InvalidCriteria,
    RegionCompleteCriteria,
    SpecificStatesCriteria,
    SpecificStatesMode,
    StateCountCriteria,
    parse_criteria,
)

logger = logging.getLogger(__name__)


class EligibilityResult(BaseModel):
    badge: Any
    metadata: Dict[str, Any]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def _check_state_count(criteria: StateCountCriteria, visited: Set[str]) -> Optional[Dict[str, Any]]:
    if len(visited) >= criteria.required_count:
        return {
            "states_count": len(visited),
            "required_count": criteria.required_count,
        }
    return None


def _check_region_complete(criteria: RegionCompleteCriteria, visited: Set[str], badge_id) -> Optional[Dict[str, Any]]:
    if not criteria.region_states:
        logger.warning("Badge %s has an empty region; it can never be earned", badge_id)
        return None
    if criteria.region_states <= visited:
        return {
            "region": criteria.region,
            "region_states": sorted(criteria.region_states),
        }
    return None


def _check_specific_states(criteria: SpecificStatesCriteria, visited: Set[str]) -> Optional[Dict[str, Any]]:
    if criteria.mode is SpecificStatesMode.all:
        if not criteria.required_states <= visited:
            return None
        matched = criteria.required_states
    else:
        first = criteria.required_states & visited
        second = (criteria.secondary_states or frozenset()) & visited
        if not first or not second:
            return None
        matched = first | second
    return {
        "specific_states": sorted(matched),
        "mode": criteria.mode.value,
    }


def check_criteria(criteria: Criteria, visited: Set[str], badge_id=None) -> Optional[Dict[str, Any]]:
    """Award metadata if `criteria` is satisfied by `visited`, else None."""
    if isinstance(criteria, StateCountCriteria):
        return _check_state_count(criteria, visited)
    if isinstance(criteria, RegionCompleteCriteria):
        return _check_region_complete(criteria, visited, badge_id)
    if isinstance(criteria, SpecificStatesCriteria):
        return _check_specific_states(criteria, visited)
    return None


def evaluate(visited_state_codes: Iterable[str], unearned_badges: Iterable[Any]) -> List[EligibilityResult]:
    """
    Return every badge in `unearned_badges` whose criteria the visited states
    satisfy, in catalog order, each with the facts it was earned on.

    Badges with invalid criteria are logged and skipped.
    """
    visited = {code.upper() for code in visited_state_codes}
    results: List[EligibilityResult] = []

    for badge in unearned_badges:
        criteria = parse_criteria(badge.criteria, badge_id=badge.id)
        if isinstance(criteria, InvalidCriteria):
            logger.warning("Skipping badge %s: %s", badge.id, criteria.reason)
            continue

        metadata = check_criteria(criteria, visited, badge_id=badge.id)
        if metadata is None:
            continue

        logger.info("Badge %s (%s) satisfied by %s criteria", badge.id, badge.name, criteria.type.value)
        results.append(EligibilityResult(badge=badge, metadata=metadata))

    return results
