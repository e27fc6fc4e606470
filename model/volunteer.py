from common.utils.validators import sanitize_string, string_list

metadata_list = ["name", "email", "role", "status"]

CLEARED_BACKGROUND_CHECK_STATUSES = ("verified", "completed")


def _as_dict(value):
    return value if isinstance(value, dict) else {}


class Volunteer:
    """
    The part of a volunteer record that registration decisions read.

    Documents come from the portal's `volunteers` collection in camelCase.
    Anything missing or malformed falls back to the most permissive value so
    a half-filled profile is still evaluated instead of crashing.
    """
    id = None
    name = ""
    email = ""
    role = ""
    status = ""
    core_volunteer_status = False
    completed_training_ids = frozenset()
    background_check_status = None
    available_days = ()
    unavailable_dates = frozenset()

    @classmethod
    def deserialize(cls, d):
        d = _as_dict(d)
        v = Volunteer()
        v.id = d.get('id')
        v.name = sanitize_string(d.get('name') or d.get('legalFirstName'))
        v.email = sanitize_string(d.get('email'))
        v.role = sanitize_string(d.get('role'))
        v.status = sanitize_string(d.get('status'))
        # Only an explicit True counts as admin approval
        v.core_volunteer_status = d.get('coreVolunteerStatus') is True
        v.completed_training_ids = frozenset(string_list(d.get('completedTrainingIds')))

        background_check = _as_dict(_as_dict(d.get('compliance')).get('backgroundCheck'))
        status = background_check.get('status')
        v.background_check_status = status if isinstance(status, str) else None

        availability = _as_dict(d.get('availability'))
        v.available_days = string_list(availability.get('days'))
        v.unavailable_dates = frozenset(string_list(availability.get('unavailableDates')))
        return v

    @property
    def background_check_cleared(self):
        return self.background_check_status in CLEARED_BACKGROUND_CHECK_STATUSES

    def serialize(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "status": self.status,
            "coreVolunteerStatus": self.core_volunteer_status,
            "completedTrainingIds": sorted(self.completed_training_ids),
            "compliance": {"backgroundCheck": {"status": self.background_check_status}},
            "availability": {
                "days": list(self.available_days),
                "unavailableDates": sorted(self.unavailable_dates),
            },
        }

    def serialize_profile_metadata(self):
        return {m: getattr(self, m) for m in metadata_list}

    def __str__(self):
        return f"Volunteer(id={self.id}, name={self.name}, core={self.core_volunteer_status})"
