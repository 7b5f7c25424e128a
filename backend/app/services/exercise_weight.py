"""In-place weight edits on plan text.

Plan lines look like ``Bench Press - 4x8-10 @ 60kg | 90s | 2min``. Only the
weight portion of matching lines is replaced; the rest of the document is left
byte-for-byte intact.
"""
from __future__ import annotations

import re
from typing import Pattern

# A weight has to fit in the column between "@" and the first "|".
WEIGHT_RE = re.compile(r"[^|\r\n]*\S[^|\r\n]*")


def _exercise_pattern(exercise_name: str) -> Pattern[str]:
    # The name has to open the line, after an optional "-", "*", "•" or "1." bullet:
    # "Incline Bench Press" is not a "Bench Press" line.
    return re.compile(
        r"^([ \t]*(?:(?:[-*•]|\d+[.)])[ \t]*)?"
        + re.escape(exercise_name)
        + r"\s*-\s*\d+x[\d-]+\s*@\s*)"
        r"([^|\n]+?)"
        r"(\s*\|[^\n]*)",
        re.MULTILINE,
    )


def is_valid_weight(new_weight: str) -> bool:
    return WEIGHT_RE.fullmatch(new_weight) is not None


def rewrite_exercise_weight(plan_text: str, exercise_name: str, new_weight: str) -> str:
    """Replace the weight of every ``exercise_name`` line; unknown names are a no-op.

    Weights that are blank or contain ``|`` or a line break are ignored.
    """
    if not plan_text or not exercise_name.strip() or not is_valid_weight(new_weight):
        return plan_text

    pattern = _exercise_pattern(exercise_name.strip())
    return pattern.sub(lambda match: match.group(1) + new_weight + match.group(3), plan_text)
