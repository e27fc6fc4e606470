from model.training import LEGACY_MODULE_ID_MAP
from services.training_service import (
    has_completed_module,
    has_completed_all_modules,
    missing_modules,
)


def test_direct_completion():
    assert has_completed_module(["hipaa_nonclinical"], "hipaa_nonclinical")
    assert not has_completed_module(["portal_howto"], "hipaa_nonclinical")


def test_legacy_id_counts_for_replacement():
    assert has_completed_module(["hipaa_staff_2025"], "hipaa_nonclinical", LEGACY_MODULE_ID_MAP)
    # Without the map the legacy ID is just an unrelated string
    assert not has_completed_module(["hipaa_staff_2025"], "hipaa_nonclinical")


def test_all_modules_ignores_order_and_duplicates():
    completed = ["b", "a", "a", "c"]
    assert has_completed_all_modules(completed, ["a", "b", "c"])
    assert not has_completed_all_modules(completed, ["a", "d"])


def test_empty_requirement_is_satisfied():
    assert has_completed_all_modules([], [])
    assert missing_modules(None, []) == []


def test_none_completed_ids_is_empty():
    assert not has_completed_all_modules(None, ["a"])
    assert missing_modules(None, ["a", "b"]) == ["a", "b"]


def test_missing_modules_keeps_requirement_order():
    assert missing_modules({"b"}, ["c", "b", "a"]) == ["c", "a"]


def test_missing_modules_uses_legacy_map():
    required = ["hmc_orientation", "hmc_champion"]
    assert missing_modules(["hmc_get_to_know_us"], required, LEGACY_MODULE_ID_MAP) == ["hmc_champion"]
