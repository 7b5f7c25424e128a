"""Parsing of free-form workout plan text into day sections."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# "Day 3 - Legs: Squat 5x5", "Monday - Upper Body" or "Tuesday:" (label before the colon, rest after it).
DAY_HEADER_RE = re.compile(r"^(day \d+[^:]*?|\w+day\b[^:]*?)\s*(?::\s*(.*))?$", re.IGNORECASE)
EXERCISE_LINE_RE = re.compile(r"^-\s*(.+)$")


@dataclass(frozen=True)
class DaySection:
    label: str
    exercises: Tuple[str, ...]


def parse_plan_text(text: str, max_days: int) -> List[DaySection]:
    """
    Extract up to ``max_days`` day sections from plan text.

    Lines that are neither day headers nor ``-`` exercise lines are skipped, as
    are exercise lines seen before the first header. A blank line or a new
    header closes the open section; sections without exercises are dropped.
    Never raises.
    """
    sections: List[DaySection] = []
    if not text or max_days <= 0:
        return sections

    label: Optional[str] = None
    exercises: List[str] = []

    def close() -> bool:
        # Returns True once the caller should stop reading.
        if label is not None and exercises:
            sections.append(DaySection(label=label, exercises=tuple(exercises)))
        return len(sections) >= max_days

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if not line:
            if close():
                return sections
            label, exercises = None, []
            continue

        header = DAY_HEADER_RE.match(line)
        if header:
            if close():
                return sections
            label = header.group(1).strip()
            exercises = []
            rest = (header.group(2) or "").strip()
            if rest:
                exercises.append(rest)
            continue

        exercise = EXERCISE_LINE_RE.match(line)
        if exercise and label is not None:
            exercises.append(exercise.group(1).strip())

    close()
    return sections


def next_workout(text: str) -> Optional[DaySection]:
    """Return the first day section of the plan, if any."""
    sections = parse_plan_text(text, 1)
    return sections[0] if sections else None
