import logging
from typing import Any, Dict, Optional, Tuple
from flask import Blueprint, request, jsonify
from common.log import get_logger
from common.exceptions import InvalidUsageError
from services.registration_service import (
    check_registration_eligibility,
    check_snapshot_eligibility,
    suggest_volunteers_for_opportunity,
)

logger = get_logger(__name__)
logger.setLevel(logging.INFO)
bp = Blueprint('registration', __name__, url_prefix='/api')

# Helper functions
def _process_request() -> Dict[str, Any]:
    """Process request data and return JSON dictionary."""
    request_data = request.get_json(silent=True)
    if not request_data:
        raise InvalidUsageError("Missing request body", status_code=400)
    return request_data

def _success_response(data: Any = None, message: str = "Success") -> Tuple[Any, int]:
    """Generate a success response."""
    response = {
        "success": True,
        "message": message
    }

    if data is not None:
        response["data"] = data

    logger.debug(f"Response data: {response}")
    return jsonify(response), 200

def _decision_message(result: Dict[str, Any]) -> str:
    return "Eligible to register" if result["canRegister"] else "Registration blocked"


@bp.route("/volunteers/<volunteer_id>/opportunities/<opportunity_id>/eligibility", methods=["GET"])
def get_registration_eligibility(volunteer_id, opportunity_id):
    """
    Check whether a stored volunteer may register for a stored opportunity.

    Read-only: reserving the slot is done by the registration write path
    after a positive answer.
    """
    logger.info(f"Checking eligibility of volunteer {volunteer_id} for opportunity {opportunity_id}")
    result = check_registration_eligibility(volunteer_id, opportunity_id)
    return _success_response(result, _decision_message(result))

@bp.route("/eligibility/evaluate", methods=["POST"])
def evaluate_snapshot():
    """
    Evaluate caller-supplied snapshots.

    Expected JSON payload:
    {
        "volunteer": {"coreVolunteerStatus": true, "completedTrainingIds": [...], ...},
        "opportunity": {"category": "Street Medicine Outreach", "date": "2025-06-01"}
    }
    """
    payload = _process_request()
    result = check_snapshot_eligibility(payload)
    return _success_response(result, _decision_message(result))

@bp.route("/opportunities/<opportunity_id>/staffing-suggestions", methods=["GET"])
def get_staffing_suggestions(opportunity_id):
    role: Optional[str] = request.args.get('role') or None
    logger.info(f"Building staffing suggestions for opportunity {opportunity_id} (role={role})")
    suggestions = suggest_volunteers_for_opportunity(opportunity_id, role)
    return _success_response({"suggestions": suggestions}, f"Found {len(suggestions)} eligible volunteer(s)")
