from common.utils.validators import sanitize_string


def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool)


class Opportunity:
    id = None
    title = ""
    category = ""
    date = ""
    slots_total = 0
    slots_filled = 0

    @classmethod
    def deserialize(cls, d):
        d = d if isinstance(d, dict) else {}
        o = Opportunity()
        o.id = d.get('id')
        o.title = sanitize_string(d.get('title'))
        o.category = d['category'] if isinstance(d.get('category'), str) else ""
        # Kept verbatim; blackout matching compares the raw string
        o.date = d['date'] if isinstance(d.get('date'), str) else ""
        o.slots_total = d['slotsTotal'] if _is_count(d.get('slotsTotal')) else 0
        o.slots_filled = d['slotsFilled'] if _is_count(d.get('slotsFilled')) else 0
        return o

    def __str__(self):
        return f"Opportunity(id={self.id}, category={self.category}, date={self.date})"
