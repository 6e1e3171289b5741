# Heuristic extraction of structured fields from free-text mentor replies
# app/services/extractors.py
"""
Each function scans the completion text with a fixed keyword or pattern rule
and keeps the first matches top-to-bottom, up to a fixed cap. They never raise:
empty or unmatched input gives an empty list, an empty dict, or a fallback string.
"""
import re
from typing import Dict, List, Tuple

MAX_SUGGESTIONS = 5
MAX_PHASES = 10
MAX_APPROACHES = 3
MAX_FIXES = 5
DEFAULT_DURATION = "Variable"

SUGGESTION_KEYWORDS = ("suggestion", "improve", "consider")
APPROACH_KEYWORDS = ("approach", "strategy", "method")
FIX_KEYWORDS = ("fix", "change", "replace")
PHASE_KEYWORDS = ("Phase", "Week") # case-sensitive

TIME_COMPLEXITY_PATTERN = re.compile(r"time.*?O\([^)]+\)", re.IGNORECASE)
SPACE_COMPLEXITY_PATTERN = re.compile(r"space.*?O\([^)]+\)", re.IGNORECASE)
NUMBERED_LINE_PATTERN = re.compile(r"^\d+\.")
DURATION_PATTERN = re.compile(r"(\d+)\s*(week|month|day)s?", re.IGNORECASE)


def _lines_with_keywords(content: str | None, keywords: Tuple[str, ...], limit: int) -> List[str]:
    """Collects trimmed lines containing any keyword, case-insensitively."""
    if not content:
        return []
    matches = []
    for line in content.split("\n"):
        lowered = line.lower()
        if any(keyword in lowered for keyword in keywords):
            matches.append(line.strip())
            if len(matches) == limit:
                break
    return matches


def extract_suggestions(content: str | None) -> List[str]:
    return _lines_with_keywords(content, SUGGESTION_KEYWORDS, MAX_SUGGESTIONS)

def extract_complexity(content: str | None) -> Dict[str, str]:
    """
    Pulls the first "time ... O(...)" and "space ... O(...)" phrases.
    Only attempted when the text mentions big-O at all; missing keys mean no match.
    """
    complexity: Dict[str, str] = {}
    if not content or "O(" not in content:
        return complexity

    time_match = TIME_COMPLEXITY_PATTERN.search(content)
    space_match = SPACE_COMPLEXITY_PATTERN.search(content)
    if time_match:
        complexity["time"] = time_match.group(0)
    if space_match:
        complexity["space"] = space_match.group(0)
    return complexity

def extract_roadmap_phases(content: str | None) -> List[str]:
    if not content:
        return []
    phases = []
    for line in content.split("\n"):
        if NUMBERED_LINE_PATTERN.match(line) or any(keyword in line for keyword in PHASE_KEYWORDS):
            phases.append(line.strip())
            if len(phases) == MAX_PHASES:
                break
    return phases

def extract_duration(content: str | None) -> str:
    if not content:
        return DEFAULT_DURATION
    match = DURATION_PATTERN.search(content)
    return match.group(0) if match else DEFAULT_DURATION

def extract_approach(content: str | None) -> List[str]:
    return _lines_with_keywords(content, APPROACH_KEYWORDS, MAX_APPROACHES)

def extract_fixes(content: str | None) -> List[str]:
    return _lines_with_keywords(content, FIX_KEYWORDS, MAX_FIXES)
