"""
Shift registration eligibility.

Every path that registers a volunteer for a shift (self-service signup,
public RSVP auto-matching, admin overrides) asks this module first. The
checks are layered:

    status -> role -> training -> program clearance

Each gate runs on every call and appends at most one message, so the
volunteer sees every outstanding problem at once. Blocking issues prevent
registration; warnings are surfaced but do not.
"""
from typing import Optional, Union
from common.log import get_logger, debug
from common.utils.validators import weekday_abbreviation
from model.opportunity import Opportunity
from model.registration_decision import GateStatus, RegistrationDecision
from model.training import DEFAULT_CATALOG, Program, TrainingCatalog
from model.volunteer import Volunteer
from services.program_classifier import classify_category
from services.training_service import has_completed_all_modules, missing_modules

logger = get_logger("eligibility_service")

ELIGIBLE_MESSAGE = "You are eligible to register for this shift!"
UNABLE_MESSAGE = "Unable to register for this shift."

ORIENTATION_REQUIRED = (
    "Orientation Required: Complete the two orientation videos in Training Academy "
    "before registering for shifts."
)
BASELINE_REQUIRED = (
    "Baseline Training Required: Complete all Tier 2 training modules "
    "(HIPAA, CMHW, Survey, Portal How-To) before registering for shifts."
)
ROLE_APPROVAL_REQUIRED = (
    "Role Approval Required: Your operational role must be approved by an admin before you can "
    "register for shifts. Complete your training and your application will be reviewed."
)
BACKGROUND_CHECK_PENDING = (
    "Background Check Pending: Your background check is still being processed. "
    "You may continue preparing, but cannot be assigned to shifts until verified."
)


class EligibilityEvaluator:
    """Decides whether a volunteer may register for an opportunity's shift."""

    def __init__(self, catalog: Optional[TrainingCatalog] = None):
        self.catalog = catalog or DEFAULT_CATALOG

    def evaluate(self, volunteer: Volunteer, opportunity: Opportunity, shift=None) -> RegistrationDecision:
        # shift is accepted for call-site symmetry; the opportunity date carries the schedule
        blocking_issues = []
        warnings = []
        gates = GateStatus()
        completed_ids = volunteer.completed_training_ids
        legacy = self.catalog.legacy_id_map

        # Tier 1 orientation
        gates.tier1_complete = has_completed_all_modules(completed_ids, self.catalog.tier1_ids, legacy)
        if not gates.tier1_complete:
            blocking_issues.append(ORIENTATION_REQUIRED)

        # Tier 2 baseline plus approved role
        gates.tier2_complete = has_completed_all_modules(completed_ids, self.catalog.tier2_ids, legacy)
        has_approved_role = volunteer.core_volunteer_status is True
        gates.is_operational_eligible = has_approved_role and gates.tier2_complete
        if not gates.tier2_complete:
            blocking_issues.append(BASELINE_REQUIRED)
        if not has_approved_role:
            blocking_issues.append(ROLE_APPROVAL_REQUIRED)

        # Tier 3 program clearance
        program = classify_category(opportunity.category)
        if program is None:
            gates.program_clearance = True
        else:
            missing = missing_modules(completed_ids, self.catalog.requirements_for(program), legacy)
            gates.program_clearance = not missing
            if missing:
                blocking_issues.append(
                    f"{self.catalog.label_for(program)} Training Required: This event requires "
                    f"program-specific training. Complete {len(missing)} remaining module(s) "
                    f"in Training Academy."
                )

        # Background check never blocks registration, only later assignment
        gates.background_check_complete = volunteer.background_check_cleared
        if not gates.background_check_complete:
            warnings.append(BACKGROUND_CHECK_PENDING)

        # Weekly availability; an empty day list means no restriction
        shift_day = weekday_abbreviation(opportunity.date)
        available_days = volunteer.available_days
        if shift_day is not None and available_days and shift_day not in available_days:
            warnings.append(
                f"Availability Conflict: This shift is on {shift_day}, but your availability is set "
                f"for: {', '.join(available_days)}. Update your availability in My Profile if your "
                f"schedule has changed."
            )

        # Time off is an absolute block
        if opportunity.date in volunteer.unavailable_dates:
            blocking_issues.append(
                f"Time Off Conflict: You've marked {opportunity.date} as unavailable. "
                f'Remove this date from your "Time Off" list in My Profile if you want to register.'
            )

        # Both conditions are kept: a gate may someday clear eligibility without a message
        can_register = not blocking_issues and gates.is_operational_eligible

        debug(logger, "Evaluated shift registration",
              volunteer_id=volunteer.id, opportunity_id=opportunity.id,
              program=program.value if program else None,
              can_register=can_register, blocking=len(blocking_issues), warnings=len(warnings))

        return RegistrationDecision(
            can_register=can_register,
            blocking_issues=blocking_issues,
            warnings=warnings,
            gates=gates,
        )

    def is_operational(self, volunteer: Volunteer) -> bool:
        tier2_complete = has_completed_all_modules(
            volunteer.completed_training_ids, self.catalog.tier2_ids, self.catalog.legacy_id_map)
        return volunteer.core_volunteer_status is True and tier2_complete

    def has_program_clearance(self, volunteer: Volunteer, program: Union[Program, str, None]) -> bool:
        required = self.catalog.requirements_for(Program.from_value(program))
        if not required:
            return True
        return has_completed_all_modules(
            volunteer.completed_training_ids, required, self.catalog.legacy_id_map)


def evaluate_registration(volunteer: Volunteer, opportunity: Opportunity,
                          catalog: Optional[TrainingCatalog] = None, shift=None) -> RegistrationDecision:
    return EligibilityEvaluator(catalog).evaluate(volunteer, opportunity, shift)

def is_volunteer_operational(volunteer: Volunteer, catalog: Optional[TrainingCatalog] = None) -> bool:
    """Approved role and every Tier 2 module complete."""
    return EligibilityEvaluator(catalog).is_operational(volunteer)

def has_program_clearance(volunteer: Volunteer, program: Union[Program, str, None],
                          catalog: Optional[TrainingCatalog] = None) -> bool:
    """True when the volunteer has every module the program requires (or it requires none)."""
    return EligibilityEvaluator(catalog).has_program_clearance(volunteer, program)

def summarize_decision(decision: RegistrationDecision) -> str:
    """Flatten a decision into the message shown when registration is refused."""
    if decision.can_register:
        return ELIGIBLE_MESSAGE

    if decision.blocking_issues:
        message = (
            f"{len(decision.blocking_issues)} requirement(s) blocking registration:\n"
            + "\n\n".join(decision.blocking_issues)
        )
    else:
        message = UNABLE_MESSAGE

    if decision.warnings:
        message += "\n\nWarnings:\n" + "\n".join(decision.warnings)

    return message
