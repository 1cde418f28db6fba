# services/medical_dictionary.py
"""
Medical dictionary for the report simplifier.

Holds the authored lexicon of lab-report terms: each entry has a display name,
a plain-language phrase, a short definition and, for lab values, a reference
range. The lexicon is validated once at import time and is read-only after
that, so it can be shared by every request without locking.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from models.medical_term import TermRecord

logger = logging.getLogger(__name__)


class LexiconError(Exception):
    """Raised when the dictionary data cannot be loaded"""
    pass


MEDICAL_DICTIONARY = {
    "cholesterol": {
        "term": "cholesterol",
        "simplified": "fat-like substance in blood",
        "definition": "A waxy, fat-like substance found in all cells of the body. Your body needs some cholesterol to make hormones, vitamin D, and substances that help you digest foods. High cholesterol can lead to heart disease."
    },
    "elevated cholesterol levels": {
        "term": "elevated cholesterol levels",
        "simplified": "high cholesterol",
        "definition": "When the amount of cholesterol in your blood is higher than recommended, increasing the risk of heart disease and stroke."
    },
    "LDL": {
        "term": "LDL (Low-Density Lipoprotein)",
        "simplified": "\"Bad\" cholesterol (LDL)",
        "definition": "Often called \"bad\" cholesterol, LDL can build up in your arteries and form plaque that makes them narrower. Higher levels mean higher risk of heart disease.",
        "normal_range": "< 100 mg/dL (optimal)"
    },
    "HDL": {
        "term": "HDL (High-Density Lipoprotein)",
        "simplified": "\"Good\" cholesterol (HDL)",
        "definition": "Known as \"good\" cholesterol, HDL helps remove other forms of cholesterol from your bloodstream. Higher levels are better and may lower your risk of heart disease.",
        "normal_range": "> 40 mg/dL for men, > 50 mg/dL for women"
    },
    "triglycerides": {
        "term": "Triglycerides",
        "simplified": "Blood fats (Triglycerides)",
        "definition": "A type of fat found in your blood. When you eat, your body converts calories it doesn't need into triglycerides, which are stored in fat cells. High levels may contribute to hardening of the arteries and increased risk of heart disease.",
        "normal_range": "< 150 mg/dL"
    },
    "atherosclerotic cardiovascular disease": {
        "term": "atherosclerotic cardiovascular disease",
        "simplified": "heart disease caused by plaque buildup in arteries",
        "definition": "A condition where plaque builds up inside the arteries. Plaque is made up of fat, cholesterol, calcium, and other substances. Over time, plaque hardens and narrows the arteries, limiting blood flow to organs and other parts of the body."
    },
    "statin therapy": {
        "term": "statin therapy",
        "simplified": "cholesterol-lowering medication",
        "definition": "Medications that help lower cholesterol levels in the blood by reducing the amount of cholesterol produced by the liver."
    },
    "lifestyle modifications": {
        "term": "lifestyle modifications",
        "simplified": "changes to daily habits",
        "definition": "Changes to diet, exercise, and other daily habits to improve health outcomes."
    },
    "hypertension": {
        "term": "hypertension",
        "simplified": "high blood pressure",
        "definition": "A condition in which the force of the blood against the artery walls is too high. Normal blood pressure is below 120/80 mm Hg."
    },
    "glucose": {
        "term": "glucose",
        "simplified": "blood sugar",
        "definition": "A simple sugar that is an important energy source in living organisms and is a component of many carbohydrates."
    },
    "HbA1c": {
        "term": "HbA1c",
        "simplified": "average blood sugar level",
        "definition": "A test that measures your average blood sugar levels over the past 2-3 months. It's used to diagnose diabetes and monitor how well diabetes is being controlled.",
        "normal_range": "< 5.7% (normal), 5.7-6.4% (prediabetes), ≥ 6.5% (diabetes)"
    },
    "creatinine": {
        "term": "creatinine",
        "simplified": "kidney function indicator",
        "definition": "A waste product produced by muscles from the breakdown of a compound called creatine. Creatinine levels in the blood are used to calculate how well your kidneys are working.",
        "normal_range": "0.7-1.3 mg/dL (men), 0.6-1.1 mg/dL (women)"
    },
    "thyroid-stimulating hormone": {
        "term": "thyroid-stimulating hormone",
        "simplified": "hormone that controls thyroid function",
        "definition": "A hormone produced by the pituitary gland that regulates the production of hormones by the thyroid gland.",
        "normal_range": "0.4-4.0 mIU/L"
    },
    "anemia": {
        "term": "anemia",
        "simplified": "low red blood cell count",
        "definition": "A condition in which you lack enough healthy red blood cells to carry adequate oxygen to your body's tissues."
    },
    "hemoglobin": {
        "term": "hemoglobin",
        "simplified": "oxygen-carrying protein in blood",
        "definition": "A protein in your red blood cells that carries oxygen from your lungs to the rest of your body.",
        "normal_range": "13.5-17.5 g/dL (men), 12.0-15.5 g/dL (women)"
    },
    "platelet count": {
        "term": "platelet count",
        "simplified": "blood clotting cells count",
        "definition": "A measure of how many platelets are in your blood. Platelets are parts of the blood that help with clotting.",
        "normal_range": "150,000-450,000 per microliter of blood"
    },
}


class MedicalLexicon:
    """
    Read-only view over the dictionary data.

    Keys keep their authored casing (``LDL``, ``HbA1c``); lookups ignore case.
    """

    def __init__(self, entries: Dict[str, Dict]):
        records: Dict[str, TermRecord] = {}
        index: Dict[str, str] = {}

        for key, entry in entries.items():
            folded = key.lower()
            if folded in index:
                raise LexiconError(f"Duplicate dictionary key '{key}' (already defined as '{index[folded]}')")
            try:
                records[key] = TermRecord(key=key, **entry)
            except (TypeError, ValidationError) as e:
                raise LexiconError(f"Invalid dictionary entry '{key}': {e}") from e
            index[folded] = key

        self._records = records
        self._index = index
        self._keys: Tuple[str, ...] = tuple(records)
        logger.info(f"Loaded medical dictionary with {len(self._keys)} terms")

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[TermRecord]:
        return iter(self._records.values())

    def lookup(self, key: str) -> Optional[TermRecord]:
        """Get the record for a dictionary key, ignoring case"""
        if not key:
            return None
        canonical = self._index.get(key.strip().lower())
        return self._records[canonical] if canonical else None

    def all_keys(self) -> Tuple[str, ...]:
        return self._keys

    def search(self, query: Optional[str] = None) -> List[TermRecord]:
        """
        Filter the dictionary the way the dictionary browser does: a record is
        kept when the query appears in its key, name, plain-language phrase or
        definition. A blank query returns every record.
        """
        if not query or not query.strip():
            return list(self._records.values())

        needle = query.strip().lower()
        return [
            record for record in self._records.values()
            if needle in record.key.lower()
            or needle in record.term.lower()
            or needle in record.simplified.lower()
            or needle in record.definition.lower()
        ]


# Global instance
medical_lexicon = MedicalLexicon(MEDICAL_DICTIONARY)
