from typing import Optional
from model.training import Program

# Checked top to bottom; the first rule with a matching substring wins
CATEGORY_RULES = (
    (("street medicine", "smo"), Program.STREET_MEDICINE),
    (("clinic", "clinical"), Program.CLINICAL),
    (("wellness", "unstoppable", "workshop"), Program.COMMUNITY_WELLNESS),
    (("outreach", "health fair", "pop-up", "tabling"), Program.COMMUNITY_HEALTH_OUTREACH),
)


def classify_category(category: Optional[str]) -> Optional[Program]:
    """
    Map an opportunity's free-text category to the program whose Tier 3
    training it requires.

    Returns None for general events (Tier 2 is enough).
    """
    cat = category.lower() if isinstance(category, str) else ""
    for substrings, program in CATEGORY_RULES:
        if any(s in cat for s in substrings):
            return program
    return None
