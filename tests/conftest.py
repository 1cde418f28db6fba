import pytest
from fastapi.testclient import TestClient

from services.database_service import MemoryReportStorage
from services.medical_dictionary import medical_lexicon
from services.report_processor import ReportProcessor
from services.term_matcher import TermMatcher
from services.text_simplifier import TextSimplifier
from services.value_extractor import ValueExtractor

SAMPLE_REPORT = (
    "Patient has hypertension and elevated cholesterol levels. "
    "LDL: 142 mg/dL (high). HDL: 38 mg/dL (low)."
)


@pytest.fixture
def lexicon():
    return medical_lexicon


@pytest.fixture
def matcher(lexicon):
    return TermMatcher(lexicon)


@pytest.fixture
def extractor():
    return ValueExtractor()


@pytest.fixture
def simplifier():
    return TextSimplifier()


@pytest.fixture
def processor(lexicon):
    return ReportProcessor(lexicon)


@pytest.fixture
def storage(monkeypatch):
    storage = MemoryReportStorage()
    monkeypatch.setattr("routes.reports.report_storage", storage)
    return storage


@pytest.fixture
def client(storage):
    from main import app

    return TestClient(app)
