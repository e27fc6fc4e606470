from dataclasses import dataclass, field
from typing import List


@dataclass
class GateStatus:
    is_operational_eligible: bool = False
    tier1_complete: bool = False
    tier2_complete: bool = False
    program_clearance: bool = False
    background_check_complete: bool = False

    def serialize(self):
        return {
            "isOperationalEligible": self.is_operational_eligible,
            "tier1Complete": self.tier1_complete,
            "tier2Complete": self.tier2_complete,
            "programClearance": self.program_clearance,
            "backgroundCheckComplete": self.background_check_complete,
        }


@dataclass
class RegistrationDecision:
    """Outcome of one eligibility check; built fresh per call and never stored."""
    can_register: bool
    blocking_issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    gates: GateStatus = field(default_factory=GateStatus)

    def serialize(self):
        return {
            "canRegister": self.can_register,
            "blockingIssues": list(self.blocking_issues),
            "warnings": list(self.warnings),
            "gates": self.gates.serialize(),
        }
