from typing import Any, Dict, List, Optional
from datetime import datetime
import pytz
from cachetools import cached, TTLCache
from cachetools.keys import hashkey
from common.exceptions import MissingFieldError, InvalidInputError, NotFoundError
from common.log import get_logger, info, debug, warning, exception
from common.utils import get_int_env_var
from db.db import (
    fetch_opportunity_by_id,
    fetch_training_catalog_config,
    fetch_volunteer_by_id,
    fetch_volunteers,
)
from model.opportunity import Opportunity
from model.training import DEFAULT_CATALOG, TrainingCatalog
from model.volunteer import Volunteer
from services.eligibility_service import EligibilityEvaluator, summarize_decision
from services.program_classifier import classify_category

logger = get_logger("registration_service")

CACHE_TTL = get_int_env_var("TRAINING_CATALOG_TTL", 300)

def _get_current_timestamp() -> str:
    """Get current ISO timestamp in Los Angeles time."""
    la_timezone = pytz.timezone('America/Los_Angeles')
    return datetime.now(la_timezone).isoformat()

@cached(cache=TTLCache(maxsize=1, ttl=CACHE_TTL), key=lambda: hashkey('training_catalog'))
def get_training_catalog() -> TrainingCatalog:
    """
    The training catalog to evaluate registrations against.

    Layers the optional settings/training_catalog document over the built-in
    tiers. A failed read falls back to the built-in tiers so a settings
    outage never blocks registration checks.
    """
    try:
        config = fetch_training_catalog_config()
    except Exception as e:
        exception(logger, "Failed to load training catalog settings, using defaults", exc_info=e)
        return DEFAULT_CATALOG

    if not config:
        debug(logger, "No training catalog settings found, using defaults")
        return DEFAULT_CATALOG

    catalog = TrainingCatalog.from_config(config)
    info(logger, "Loaded training catalog settings",
         tier1=len(catalog.tier1_ids), tier2=len(catalog.tier2_ids),
         programs=len(catalog.program_requirements))
    return catalog

def _build_response(volunteer: Volunteer, opportunity: Opportunity, catalog: TrainingCatalog) -> Dict[str, Any]:
    decision = EligibilityEvaluator(catalog).evaluate(volunteer, opportunity)
    program = classify_category(opportunity.category)

    result = decision.serialize()
    result.update({
        "summary": summarize_decision(decision),
        "volunteerId": volunteer.id,
        "opportunityId": opportunity.id,
        "program": program.value if program else None,
        "checkedAt": _get_current_timestamp(),
    })

    if decision.can_register:
        info(logger, "Volunteer eligible for shift registration",
             volunteer_id=volunteer.id, opportunity_id=opportunity.id, warnings=len(decision.warnings))
    else:
        warning(logger, "Volunteer blocked from shift registration",
                volunteer_id=volunteer.id, opportunity_id=opportunity.id,
                blocking=len(decision.blocking_issues))
    return result

def check_registration_eligibility(volunteer_id: str, opportunity_id: str) -> Dict[str, Any]:
    """
    Evaluate a stored volunteer against a stored opportunity.

    Raises:
        NotFoundError: if either record does not exist
    """
    debug(logger, "check_registration_eligibility start",
          volunteer_id=volunteer_id, opportunity_id=opportunity_id)

    volunteer = fetch_volunteer_by_id(volunteer_id)
    if volunteer is None:
        raise NotFoundError("Volunteer", volunteer_id)

    opportunity = fetch_opportunity_by_id(opportunity_id)
    if opportunity is None:
        raise NotFoundError("Opportunity", opportunity_id)

    return _build_response(volunteer, opportunity, get_training_catalog())

def check_snapshot_eligibility(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate caller-supplied snapshots: {"volunteer": {...}, "opportunity": {...}}.

    Raises:
        MissingFieldError: if either snapshot is absent
        InvalidInputError: if a snapshot is not an object
    """
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")

    for key in ("volunteer", "opportunity"):
        if key not in payload or payload[key] is None:
            raise MissingFieldError(key)
        if not isinstance(payload[key], dict):
            raise InvalidInputError(f"'{key}' must be an object")

    volunteer = Volunteer.deserialize(payload["volunteer"])
    opportunity = Opportunity.deserialize(payload["opportunity"])
    return _build_response(volunteer, opportunity, get_training_catalog())

def can_auto_register(volunteer: Volunteer, opportunity: Opportunity,
                      catalog: Optional[TrainingCatalog] = None) -> bool:
    """
    Cheap check for public-RSVP matching: trained enough to be registered
    without a coordinator looking at it. Warnings and time off are ignored here.
    """
    decision = EligibilityEvaluator(catalog or get_training_catalog()).evaluate(volunteer, opportunity)
    return decision.gates.is_operational_eligible and decision.gates.program_clearance

def suggest_volunteers_for_opportunity(opportunity_id: str, role: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Volunteers who could register for the opportunity right now, by name.

    Raises:
        NotFoundError: if the opportunity does not exist
    """
    opportunity = fetch_opportunity_by_id(opportunity_id)
    if opportunity is None:
        raise NotFoundError("Opportunity", opportunity_id)

    evaluator = EligibilityEvaluator(get_training_catalog())
    suggestions = []
    for volunteer in fetch_volunteers(role):
        decision = evaluator.evaluate(volunteer, opportunity)
        if not decision.can_register:
            continue
        suggestions.append({
            "volunteerId": volunteer.id,
            **volunteer.serialize_profile_metadata(),
            "warnings": list(decision.warnings),
        })

    suggestions.sort(key=lambda s: (s["name"].lower(), s["volunteerId"] or ""))
    info(logger, "Built staffing suggestions",
         opportunity_id=opportunity_id, role=role, count=len(suggestions))
    return suggestions
