from unittest.mock import patch, MagicMock
import pytest

from common.exceptions import InvalidInputError, MissingFieldError, NotFoundError
from common.utils.firebase import get_db, reset_db
from model.opportunity import Opportunity
from model.training import DEFAULT_CATALOG, PROGRAM_TRAINING_REQUIREMENTS, Program
from model.volunteer import Volunteer
from services.registration_service import (
    can_auto_register,
    check_registration_eligibility,
    check_snapshot_eligibility,
    get_training_catalog,
    suggest_volunteers_for_opportunity,
)

TIER_1_AND_2 = list(DEFAULT_CATALOG.tier1_ids) + list(DEFAULT_CATALOG.tier2_ids)

MOCK_VOLUNTEER_DOC = {
    "name": "Maya Lopez",
    "email": "maya@example.com",
    "role": "Outreach Volunteer",
    "status": "active",
    "coreVolunteerStatus": True,
    "completedTrainingIds": TIER_1_AND_2,
    "compliance": {"backgroundCheck": {"status": "verified"}},
    "availability": {"days": ["Sun", "Sat"], "unavailableDates": ["2025-06-08"]},
}

MOCK_OPPORTUNITY_DOC = {
    "title": "June Community Meeting",
    "category": "General Meeting",
    "date": "2025-06-01",
    "slotsTotal": 10,
    "slotsFilled": 2,
}


@pytest.fixture(autouse=True)
def fresh_db():
    reset_db()
    get_training_catalog.cache_clear()
    yield get_db()
    reset_db()
    get_training_catalog.cache_clear()


def _seed(db, volunteers=None, opportunities=None):
    for doc_id, doc in (volunteers or {}).items():
        db.collection("volunteers").document(doc_id).set(doc)
    for doc_id, doc in (opportunities or {}).items():
        db.collection("opportunities").document(doc_id).set(doc)


class TestCheckRegistrationEligibility:
    def test_eligible_volunteer(self, fresh_db):
        _seed(fresh_db, {"vol-1": MOCK_VOLUNTEER_DOC}, {"opp-1": MOCK_OPPORTUNITY_DOC})

        result = check_registration_eligibility("vol-1", "opp-1")

        assert result["canRegister"] is True
        assert result["blockingIssues"] == []
        assert result["warnings"] == []
        assert result["gates"]["isOperationalEligible"] is True
        assert result["volunteerId"] == "vol-1"
        assert result["opportunityId"] == "opp-1"
        assert result["program"] is None
        assert result["summary"] == "You are eligible to register for this shift!"
        assert "checkedAt" in result

    def test_blocked_volunteer_gets_summary(self, fresh_db):
        _seed(
            fresh_db,
            {"vol-1": MOCK_VOLUNTEER_DOC},
            {"opp-2": {**MOCK_OPPORTUNITY_DOC, "category": "Street Medicine Outreach", "date": "2025-06-08"}},
        )

        result = check_registration_eligibility("vol-1", "opp-2")

        assert result["canRegister"] is False
        assert result["program"] == "street_medicine"
        assert len(result["blockingIssues"]) == 2
        assert result["summary"].startswith("2 requirement(s) blocking registration:")

    def test_missing_volunteer(self, fresh_db):
        _seed(fresh_db, opportunities={"opp-1": MOCK_OPPORTUNITY_DOC})
        with pytest.raises(NotFoundError) as excinfo:
            check_registration_eligibility("nobody", "opp-1")
        assert excinfo.value.resource_type == "Volunteer"

    def test_missing_opportunity(self, fresh_db):
        _seed(fresh_db, volunteers={"vol-1": MOCK_VOLUNTEER_DOC})
        with pytest.raises(NotFoundError) as excinfo:
            check_registration_eligibility("vol-1", "nothing")
        assert excinfo.value.resource_type == "Opportunity"

    def test_settings_document_overrides_tiers(self, fresh_db):
        _seed(fresh_db, {"vol-1": MOCK_VOLUNTEER_DOC}, {"opp-1": MOCK_OPPORTUNITY_DOC})
        fresh_db.collection("settings").document("training_catalog").set(
            {"tier2Ids": TIER_1_AND_2 + ["new_required_module"]})

        result = check_registration_eligibility("vol-1", "opp-1")

        assert result["canRegister"] is False
        assert result["gates"]["tier2Complete"] is False


class TestSnapshotEligibility:
    def test_evaluates_payload(self):
        result = check_snapshot_eligibility({
            "volunteer": {**MOCK_VOLUNTEER_DOC, "id": "vol-9"},
            "opportunity": {**MOCK_OPPORTUNITY_DOC, "id": "opp-9"},
        })
        assert result["canRegister"] is True
        assert result["volunteerId"] == "vol-9"

    @pytest.mark.parametrize("payload,missing", [
        ({"opportunity": MOCK_OPPORTUNITY_DOC}, "volunteer"),
        ({"volunteer": MOCK_VOLUNTEER_DOC}, "opportunity"),
        ({"volunteer": MOCK_VOLUNTEER_DOC, "opportunity": None}, "opportunity"),
    ])
    def test_missing_snapshot(self, payload, missing):
        with pytest.raises(MissingFieldError) as excinfo:
            check_snapshot_eligibility(payload)
        assert excinfo.value.field_name == missing

    def test_snapshot_must_be_object(self):
        with pytest.raises(InvalidInputError):
            check_snapshot_eligibility({"volunteer": "vol-1", "opportunity": MOCK_OPPORTUNITY_DOC})
        with pytest.raises(InvalidInputError):
            check_snapshot_eligibility(["not", "a", "dict"])


class TestTrainingCatalog:
    @patch('services.registration_service.fetch_training_catalog_config')
    def test_defaults_without_settings(self, mock_fetch):
        mock_fetch.return_value = None
        assert get_training_catalog() is DEFAULT_CATALOG

    @patch('services.registration_service.fetch_training_catalog_config')
    def test_defaults_when_settings_read_fails(self, mock_fetch):
        mock_fetch.side_effect = RuntimeError("firestore unavailable")
        assert get_training_catalog() is DEFAULT_CATALOG

    @patch('services.registration_service.fetch_training_catalog_config')
    def test_catalog_is_cached(self, mock_fetch):
        mock_fetch.return_value = {"tier1Ids": ["only_one"]}
        first = get_training_catalog()
        second = get_training_catalog()
        assert first is second
        assert first.tier1_ids == ("only_one",)
        mock_fetch.assert_called_once()


class TestAutoRegister:
    def _opportunity(self, category):
        return Opportunity.deserialize({"id": "opp", "category": category, "date": "2025-06-08"})

    def test_trained_volunteer_ignores_time_off_and_warnings(self):
        volunteer = Volunteer.deserialize({
            **MOCK_VOLUNTEER_DOC,
            "compliance": {"backgroundCheck": {"status": "pending"}},
        })
        # 2025-06-08 is on the volunteer's time-off list; auto-registration only checks training
        assert can_auto_register(volunteer, self._opportunity("General"), DEFAULT_CATALOG) is True

    def test_program_clearance_required(self):
        volunteer = Volunteer.deserialize(MOCK_VOLUNTEER_DOC)
        assert can_auto_register(volunteer, self._opportunity("Clinic"), DEFAULT_CATALOG) is False

        cleared = Volunteer.deserialize({
            **MOCK_VOLUNTEER_DOC,
            "completedTrainingIds": TIER_1_AND_2 + list(PROGRAM_TRAINING_REQUIREMENTS[Program.CLINICAL]),
        })
        assert can_auto_register(cleared, self._opportunity("Clinic"), DEFAULT_CATALOG) is True

    def test_unapproved_volunteer(self):
        volunteer = Volunteer.deserialize({**MOCK_VOLUNTEER_DOC, "coreVolunteerStatus": False})
        assert can_auto_register(volunteer, self._opportunity("General"), DEFAULT_CATALOG) is False


class TestStaffingSuggestions:
    def test_only_eligible_volunteers_sorted_by_name(self, fresh_db):
        _seed(
            fresh_db,
            {
                "vol-z": {**MOCK_VOLUNTEER_DOC, "name": "Zoe Park"},
                "vol-a": {**MOCK_VOLUNTEER_DOC, "name": "Adam Reyes", "availability": {"days": ["Mon"]}},
                "vol-x": {**MOCK_VOLUNTEER_DOC, "name": "Xavier Unapproved", "coreVolunteerStatus": False},
                "vol-t": {**MOCK_VOLUNTEER_DOC, "name": "Tess Timeoff",
                          "availability": {"days": [], "unavailableDates": ["2025-06-01"]}},
            },
            {"opp-1": MOCK_OPPORTUNITY_DOC},
        )

        suggestions = suggest_volunteers_for_opportunity("opp-1")

        assert [s["volunteerId"] for s in suggestions] == ["vol-a", "vol-z"]
        assert len(suggestions[0]["warnings"]) == 1
        assert suggestions[1]["warnings"] == []

    def test_role_filter(self, fresh_db):
        _seed(
            fresh_db,
            {
                "vol-1": MOCK_VOLUNTEER_DOC,
                "vol-2": {**MOCK_VOLUNTEER_DOC, "name": "Lee Chen", "role": "Licensed Medical Professional"},
            },
            {"opp-1": MOCK_OPPORTUNITY_DOC},
        )

        suggestions = suggest_volunteers_for_opportunity("opp-1", role="Licensed Medical Professional")

        assert [s["volunteerId"] for s in suggestions] == ["vol-2"]

    def test_missing_opportunity(self, fresh_db):
        with pytest.raises(NotFoundError):
            suggest_volunteers_for_opportunity("nothing")

    @patch('services.registration_service.fetch_volunteers')
    @patch('services.registration_service.fetch_opportunity_by_id')
    def test_uses_db_layer(self, mock_fetch_opportunity, mock_fetch_volunteers):
        mock_fetch_opportunity.return_value = Opportunity.deserialize({**MOCK_OPPORTUNITY_DOC, "id": "opp-1"})
        mock_fetch_volunteers.return_value = []

        assert suggest_volunteers_for_opportunity("opp-1", role="Outreach Volunteer") == []
        mock_fetch_opportunity.assert_called_once_with("opp-1")
        mock_fetch_volunteers.assert_called_once_with("Outreach Volunteer")

    def test_entries_carry_profile_metadata(self, fresh_db):
        _seed(
            fresh_db,
            {"vol-1": MOCK_VOLUNTEER_DOC},
            {"opp-1": MOCK_OPPORTUNITY_DOC},
        )

        suggestion = suggest_volunteers_for_opportunity("opp-1")[0]

        assert suggestion["volunteerId"] == "vol-1"
        assert suggestion["name"] == "Maya Lopez"
        assert suggestion["role"] == "Outreach Volunteer"
        assert set(suggestion) == {"volunteerId", "name", "email", "role", "status", "warnings"}
