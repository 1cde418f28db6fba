# services/value_extractor.py
"""
Reads a lab value and its flag from the text next to a matched term.

Looks for patterns like "LDL: 142 mg/dL (high)" or
"Triglycerides 160 mg/dL (borderline high)". The number is kept exactly as
written; the unit is consumed but not stored; the parenthesized annotation,
when present, is turned into a status.
"""

import os
import re
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from models.medical_term import MatchedTerm, TermStatus

load_dotenv()

DEFAULT_VALUE_UNITS = ("mg/dL", "mmol/L", "g/dL")


def units_from_env() -> List[str]:
    """Unit tokens from REPORT_VALUE_UNITS (comma separated), or the defaults"""
    raw = os.getenv("REPORT_VALUE_UNITS", "")
    units = [unit.strip() for unit in raw.split(",") if unit.strip()]
    return units or list(DEFAULT_VALUE_UNITS)


def classify_status(annotation: str) -> TermStatus:
    """Map a free-form flag like "borderline high" onto a status"""
    annotation = annotation.lower()
    if "high" in annotation:
        return "borderline-high" if "borderline" in annotation else "high"
    if "low" in annotation:
        return "borderline-low" if "borderline" in annotation else "low"
    if "normal" in annotation:
        return "normal"
    return "abnormal"


def term_names(term: MatchedTerm) -> List[str]:
    """
    Names a term can be written under in a report: the display name, the
    dictionary key, and the display name without its parenthetical
    ("LDL (Low-Density Lipoprotein)" -> "LDL"). Longest first.
    """
    names = [term.term, term.key, re.sub(r"\s*\([^)]*\)", "", term.term).strip()]
    unique = []
    for name in names:
        if name and name.lower() not in (n.lower() for n in unique):
            unique.append(name)
    return sorted(unique, key=len, reverse=True)


class ValueExtractor:
    def __init__(self, units: Optional[Sequence[str]] = None):
        units = list(units) if units else list(DEFAULT_VALUE_UNITS)
        # mg/dL must be tried before g/dL
        self.units = sorted(units, key=len, reverse=True)
        self._unit_pattern = "|".join(re.escape(unit) for unit in self.units)

    def build_pattern(self, term: MatchedTerm) -> re.Pattern:
        names = "|".join(re.escape(name) for name in term_names(term))
        return re.compile(
            rf"(?<!\w)(?:{names})[:\s]+(\d+(?:\.\d+)?)\s*(?:{self._unit_pattern})?\s*(?:\(([^)]+)\))?",
            re.IGNORECASE,
        )

    def extract(self, text: Optional[str], term: MatchedTerm) -> MatchedTerm:
        """
        Return a copy of the term with value and status filled in when the
        text has a number right after the term name. The input is not changed;
        when nothing is found the term is returned as it was.
        """
        if not text:
            return term

        match = self.build_pattern(term).search(text)
        if not match:
            return term

        update = {"value": match.group(1)}
        if match.group(2):
            update["status"] = classify_status(match.group(2))

        return term.model_copy(update=update)
