from __future__ import annotations

DEFAULT_CONDITION = "good"

CONDITION_LABELS = {
    "new_with_tags": "Neuf avec étiquette",
    "very_good": "Très bon état",
    "good": "Bon état",
    "satisfactory": "Satisfaisant",
}

# Keys are compared casefolded.
CONDITION_ALIASES = {
    "neuf": "new_with_tags",
    "neuf avec étiquette": "new_with_tags",
    "new": "new_with_tags",
    "new with tags": "new_with_tags",
    "new_with_tags": "new_with_tags",
    "tres-bon-etat": "very_good",
    "très bon état": "very_good",
    "tres bon etat": "very_good",
    "very good": "very_good",
    "very_good": "very_good",
    "bon-etat": "good",
    "bon état": "good",
    "bon etat": "good",
    "good": "good",
    "satisfaisant": "satisfactory",
    "satisfactory": "satisfactory",
    "fair": "satisfactory",
}
