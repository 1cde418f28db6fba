# services/text_simplifier.py
"""
Rewrites report text with plain-language phrasing.

Each matched term's display name is replaced by its simplified phrase. All
names go into one case-insensitive alternation, longest first, and the text
is rewritten in a single pass: replaced text is never scanned again, so
"cholesterol" can not break up "elevated cholesterol levels" once that phrase
has become "high cholesterol". The simplified phrases themselves are part of
the alternation and map to themselves, which keeps text that is already
simplified unchanged on a second run.

One consequence: a display name that sits inside one of those phrases in the
original report ("family history of high cholesterol") is left alone rather
than rewritten, unlike a plain replace-every-occurrence rewrite.

Word boundaries are only checked on the edges of a name that are word
characters. "LDL (Low-Density Lipoprotein)" ends in ")", so it is replaced
even when a letter follows it.
"""

import re
from typing import Dict, Optional, Sequence

from models.medical_term import MatchedTerm


def bounded(name: str) -> str:
    """Escaped name with a boundary check on each word-character edge"""
    pattern = re.escape(name)
    if re.match(r"\w", name[0]):
        pattern = r"(?<!\w)" + pattern
    if re.match(r"\w", name[-1]):
        pattern = pattern + r"(?!\w)"
    return pattern


class TextSimplifier:
    def build_replacements(self, terms: Sequence[MatchedTerm]) -> Dict[str, Optional[str]]:
        """Lowercased name -> replacement; None keeps the matched text as written"""
        replacements = {}
        for term in terms:
            replacements[term.simplified.lower()] = None
        # display names win over a plain phrase spelled the same way
        for term in terms:
            replacements[term.term.lower()] = term.simplified
        return replacements

    def simplify(self, text: Optional[str], terms: Sequence[MatchedTerm]) -> Optional[str]:
        if not text or not terms:
            return text

        replacements = self.build_replacements(terms)
        names = sorted(replacements, key=len, reverse=True)
        pattern = re.compile("|".join(bounded(name) for name in names), re.IGNORECASE)

        def replace(match):
            replacement = replacements.get(match.group(0).lower())
            return match.group(0) if replacement is None else replacement

        return pattern.sub(replace, text)
