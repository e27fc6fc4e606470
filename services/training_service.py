from typing import Iterable, List, Mapping, Optional


def has_completed_module(completed_ids: Iterable[str], module_id: str,
                         legacy_id_map: Optional[Mapping[str, str]] = None) -> bool:
    """True if module_id, or any legacy ID that maps to it, was completed."""
    completed = completed_ids if isinstance(completed_ids, (set, frozenset)) else set(completed_ids or ())
    if module_id in completed:
        return True
    for legacy_id, new_id in (legacy_id_map or {}).items():
        if new_id == module_id and legacy_id in completed:
            return True
    return False

def has_completed_all_modules(completed_ids: Iterable[str], module_ids: Iterable[str],
                              legacy_id_map: Optional[Mapping[str, str]] = None) -> bool:
    completed = set(completed_ids or ())
    return all(has_completed_module(completed, m, legacy_id_map) for m in module_ids)

def missing_modules(completed_ids: Iterable[str], module_ids: Iterable[str],
                    legacy_id_map: Optional[Mapping[str, str]] = None) -> List[str]:
    """Required module IDs not yet completed, in requirement order."""
    completed = set(completed_ids or ())
    return [m for m in module_ids if not has_completed_module(completed, m, legacy_id_map)]
