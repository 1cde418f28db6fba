# services/report_processor.py
"""
Report Processor for the medical report simplifier

Turns raw report text into:
1. The dictionary terms it mentions, with any value and status read next to them
2. A rewritten version of the report with those terms in plain language

Both steps read the original text; the rewrite never feeds back into value
extraction. Nothing is kept between calls, so one processor instance can
serve every request.
"""

import logging
from typing import Optional

from models.medical_report import ProcessedReport
from services.medical_dictionary import MedicalLexicon, medical_lexicon
from services.term_matcher import TermMatcher
from services.text_simplifier import TextSimplifier
from services.value_extractor import ValueExtractor, units_from_env

logger = logging.getLogger(__name__)


class ReportProcessor:
    def __init__(
        self,
        lexicon: MedicalLexicon,
        matcher: Optional[TermMatcher] = None,
        extractor: Optional[ValueExtractor] = None,
        simplifier: Optional[TextSimplifier] = None
    ):
        self.lexicon = lexicon
        self.matcher = matcher or TermMatcher(lexicon)
        self.extractor = extractor or ValueExtractor()
        self.simplifier = simplifier or TextSimplifier()

    def process(self, text: Optional[str]) -> ProcessedReport:
        """Identify terms in the report and produce its simplified text"""
        text = text or ""

        terms = self.matcher.match(text)
        terms = [self.extractor.extract(text, term) for term in terms]
        simplified_text = self.simplifier.simplify(text, terms)

        with_values = sum(1 for term in terms if term.value is not None)
        logger.info(f"Processed report: {len(text)} chars, {len(terms)} terms, {with_values} with values")

        return ProcessedReport(identified_terms=terms, simplified_text=simplified_text)


# Global instance
report_processor = ReportProcessor(
    medical_lexicon,
    extractor=ValueExtractor(units_from_env())
)


def process_medical_report(text: Optional[str]) -> ProcessedReport:
    """
    Helper for callers that only need the one operation.

    Usage:

        from services.report_processor import process_medical_report

        result = process_medical_report(report_text)
        result.identified_terms, result.simplified_text
    """
    return report_processor.process(text)
