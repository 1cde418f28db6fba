# services/term_matcher.py
"""
Finds dictionary terms in report text.

Detection is a plain case-insensitive substring test on each dictionary key.
There is no word-boundary check here, so "LDL" is also found inside "VLDL";
boundaries are only enforced later when values are read and text is rewritten.
"""

from typing import List, Optional

from models.medical_term import MatchedTerm
from services.medical_dictionary import MedicalLexicon


class TermMatcher:
    def __init__(self, lexicon: MedicalLexicon):
        self.lexicon = lexicon

    def match(self, text: Optional[str]) -> List[MatchedTerm]:
        """Return one term per dictionary key found in the text, in dictionary order"""
        if not text:
            return []

        text_lower = text.lower()
        matched = []

        for key in self.lexicon.all_keys():
            if key.lower() in text_lower:
                matched.append(MatchedTerm.from_record(self.lexicon.lookup(key)))

        return matched
