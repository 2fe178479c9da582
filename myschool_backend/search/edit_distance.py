# myschool_backend/search/edit_distance.py

"""
Edit-Distance Matching

Purpose:
- Levenshtein distance between two strings
- Normalized similarity in [0, 1]
- Threshold-based fuzzy equality

The threshold is ALWAYS chosen by the caller.
"""


# ============================================================
# CALL-SITE THRESHOLDS
# ============================================================

GENERAL_FUZZY = 0.7    # general fuzzy matching
TYPO_FUZZY = 0.8       # strict typo correction / synonym lookup
LOOSE_FUZZY = 0.6      # keyword scoring


# ============================================================
# PUBLIC API
# ============================================================

def levenshtein(a: str, b: str) -> int:
    """
    Unit-cost edit distance (insert / delete / substitute).
    Comparison is case-insensitive.
    """
    a = (a or "").lower()
    b = (b or "").lower()

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the shorter string on the inner loop
    if len(a) < len(b):
        a, b = b, a

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr.append(min(
                prev[j] + 1,
                curr[j - 1] + 1,
                prev[j - 1] + cost,
            ))
        prev = curr

    return prev[-1]


def similarity(a: str, b: str) -> float:
    """
    1 - distance / longest length.
    Two empty strings are fully similar.
    """
    longest = max(len(a or ""), len(b or ""))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def is_fuzzy_match(a: str, b: str, threshold: float) -> bool:
    return similarity(a, b) >= threshold
