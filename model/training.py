from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


class Program(Enum):
    """Programs that carry their own (Tier 3) training requirement."""
    STREET_MEDICINE = "street_medicine"
    CLINICAL = "clinical"
    COMMUNITY_WELLNESS = "community_wellness"
    COMMUNITY_HEALTH_OUTREACH = "community_health_outreach"

    @classmethod
    def from_value(cls, value) -> Optional["Program"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TrainingModule:
    id: str
    title: str
    tier: int
    program: Optional[Program] = None
    # Tier 4 modules are deadline-tracked instead of blocking
    is_blocking: bool = True


# --- Tier 1: orientation, required for every user ---
TIER_1_MODULES = (
    TrainingModule("hmc_orientation", "Get to Know Health Matters Clinic", 1),
    TrainingModule("hmc_champion", "Because You're a Champion", 1),
)

# --- Tier 2: baseline operational ---
TIER_2_MODULES = (
    TrainingModule("hipaa_nonclinical", "HIPAA (Non-Clinical)", 2),
    TrainingModule("cmhw_part1", "Community Mental Health Worker Training - Part 1", 2),
    TrainingModule("cmhw_part2", "Community Mental Health Worker Training - Part 2", 2),
    TrainingModule("survey_general", "Survey & Research Data Collection (General HMC)", 2),
    TrainingModule("portal_howto", "How to Use the HMC Volunteer Portal", 2),
    TrainingModule("emergency_protocols_general", "Emergency Awareness for Volunteers", 2),
)

# --- Tier 3: program-specific clearance ---
PROGRAM_COMMUNITY_WELLNESS = (
    TrainingModule("accessibility_inclusion", "Accessibility & Inclusion", 3, Program.COMMUNITY_WELLNESS),
    TrainingModule("participant_support", "Participant Support & Escalation", 3, Program.COMMUNITY_WELLNESS),
)

PROGRAM_COMMUNITY_HEALTH_OUTREACH = (
    TrainingModule("consent_data_handling", "Consent & Data Handling", 3, Program.COMMUNITY_HEALTH_OUTREACH),
    TrainingModule("community_safety", "Community Safety Basics", 3, Program.COMMUNITY_HEALTH_OUTREACH),
)

PROGRAM_STREET_MEDICINE = (
    TrainingModule("smo_orientation", "Welcome to Your Street Medicine Outreach Shift", 3, Program.STREET_MEDICINE),
    TrainingModule("naloxone_distribution", "Naloxone Distribution", 3, Program.STREET_MEDICINE),
    TrainingModule("hiv_selftest", "HIV Self-Test Kit Distribution", 3, Program.STREET_MEDICINE),
    TrainingModule("survey_smo", "Survey Training (Street Medicine Specific)", 3, Program.STREET_MEDICINE),
    TrainingModule("field_safety", "Field Safety Protocols", 3, Program.STREET_MEDICINE),
    TrainingModule("environmental_awareness", "Environmental Awareness", 3, Program.STREET_MEDICINE),
)

PROGRAM_CLINICAL = (
    TrainingModule("credential_verification", "Credential Verification", 3, Program.CLINICAL),
    TrainingModule("scope_of_practice", "Scope of Practice Acknowledgment", 3, Program.CLINICAL),
    TrainingModule("clinical_sops", "Clinical Standard Operating Procedures", 3, Program.CLINICAL),
    TrainingModule("emergency_protocols", "Emergency Protocols", 3, Program.CLINICAL),
)

# --- Tier 4: required but non-blocking ---
TIER_4_MODULES = (
    TrainingModule("deescalation_1", "How to De-escalate Someone", 4, is_blocking=False),
    TrainingModule("deescalation_2", "21 Phrases to De-escalate Angry Patients", 4, is_blocking=False),
    TrainingModule("sdoh_tedx", "What Makes Us Healthy? Social Determinants of Health", 4, is_blocking=False),
    TrainingModule("community_context", "Skid Row Explained", 4, is_blocking=False),
)

ALL_TRAINING_MODULES = (
    TIER_1_MODULES
    + TIER_2_MODULES
    + PROGRAM_COMMUNITY_WELLNESS
    + PROGRAM_COMMUNITY_HEALTH_OUTREACH
    + PROGRAM_STREET_MEDICINE
    + PROGRAM_CLINICAL
    + TIER_4_MODULES
)

def _ids(modules) -> Tuple[str, ...]:
    return tuple(m.id for m in modules)

# Community wellness shares the two CMHW modules with Tier 2
PROGRAM_TRAINING_REQUIREMENTS: Dict[Program, Tuple[str, ...]] = {
    Program.COMMUNITY_WELLNESS: ("cmhw_part1", "cmhw_part2") + _ids(PROGRAM_COMMUNITY_WELLNESS),
    Program.COMMUNITY_HEALTH_OUTREACH: _ids(PROGRAM_COMMUNITY_HEALTH_OUTREACH),
    Program.STREET_MEDICINE: _ids(PROGRAM_STREET_MEDICINE),
    Program.CLINICAL: _ids(PROGRAM_CLINICAL),
}

PROGRAM_LABELS: Dict[Program, str] = {
    Program.STREET_MEDICINE: "Street Medicine",
    Program.CLINICAL: "Clinical Services",
    Program.COMMUNITY_WELLNESS: "Community Wellness",
    Program.COMMUNITY_HEALTH_OUTREACH: "Community Health Outreach",
}

# Module IDs stored on older volunteer records, mapped to their replacements
LEGACY_MODULE_ID_MAP: Dict[str, str] = {
    "hmc_get_to_know_us": "hmc_orientation",
    "hmc_because_champion": "hmc_champion",
    "hipaa_staff_2025": "hipaa_nonclinical",
    "hmc_survey_training": "survey_general",
}


@dataclass(frozen=True)
class TrainingCatalog:
    """
    The tier definitions the eligibility evaluator checks against.

    Built once from the static module lists above, or from a settings
    document so an admin can change requirements without a deploy.
    """
    tier1_ids: Tuple[str, ...]
    tier2_ids: Tuple[str, ...]
    program_requirements: Mapping[Program, Tuple[str, ...]] = field(default_factory=dict)
    program_labels: Mapping[Program, str] = field(default_factory=dict)
    legacy_id_map: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only copies, so no caller can change a catalog after it is built
        for name in ("program_requirements", "program_labels", "legacy_id_map"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def requirements_for(self, program: Optional[Program]) -> Tuple[str, ...]:
        if program is None:
            return ()
        return self.program_requirements.get(program, ())

    def label_for(self, program: Program) -> str:
        return self.program_labels.get(program) or program.value.replace("_", " ").title()

    @classmethod
    def from_config(cls, d: Optional[dict], defaults: Optional["TrainingCatalog"] = None) -> "TrainingCatalog":
        """
        Build a catalog from a settings document.

        Recognized keys: tier1Ids, tier2Ids, programRequirements,
        programLabels, legacyIdMap. Missing or malformed keys keep the
        default value; unknown program keys are ignored.
        """
        base = defaults or DEFAULT_CATALOG
        d = d or {}

        def id_list(key, fallback):
            value = d.get(key)
            if isinstance(value, list) and all(isinstance(v, str) for v in value):
                return tuple(value)
            return fallback

        def program_map(key, fallback, convert):
            value = d.get(key)
            if not isinstance(value, dict):
                return fallback
            result = dict(fallback)
            for raw_program, raw_value in value.items():
                program = Program.from_value(raw_program)
                converted = convert(raw_value)
                if program is not None and converted is not None:
                    result[program] = converted
            return result

        def to_ids(value):
            if isinstance(value, list) and all(isinstance(v, str) for v in value):
                return tuple(value)
            return None

        def to_label(value):
            return value if isinstance(value, str) and value else None

        legacy = d.get("legacyIdMap")
        if not isinstance(legacy, dict):
            legacy = base.legacy_id_map

        return cls(
            tier1_ids=id_list("tier1Ids", base.tier1_ids),
            tier2_ids=id_list("tier2Ids", base.tier2_ids),
            program_requirements=program_map("programRequirements", base.program_requirements, to_ids),
            program_labels=program_map("programLabels", base.program_labels, to_label),
            legacy_id_map={str(k): str(v) for k, v in legacy.items()},
        )

    def serialize(self) -> dict:
        return {
            "tier1Ids": list(self.tier1_ids),
            "tier2Ids": list(self.tier2_ids),
            "programRequirements": {p.value: list(ids) for p, ids in self.program_requirements.items()},
            "programLabels": {p.value: label for p, label in self.program_labels.items()},
            "legacyIdMap": dict(self.legacy_id_map),
        }


DEFAULT_CATALOG = TrainingCatalog(
    tier1_ids=_ids(TIER_1_MODULES),
    tier2_ids=_ids(TIER_2_MODULES),
    program_requirements=PROGRAM_TRAINING_REQUIREMENTS,
    program_labels=PROGRAM_LABELS,
    legacy_id_map=LEGACY_MODULE_ID_MAP,
)
