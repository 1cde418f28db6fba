from conftest import SAMPLE_REPORT
from services.report_processor import ProcessedReport, process_medical_report


def test_sample_report(processor):
    result = processor.process(SAMPLE_REPORT)
    terms = {term.key: term for term in result.identified_terms}

    assert list(terms) == ["cholesterol", "elevated cholesterol levels", "LDL", "HDL", "hypertension"]
    assert (terms["LDL"].value, terms["LDL"].status) == ("142", "high")
    assert (terms["HDL"].value, terms["HDL"].status) == ("38", "low")
    assert terms["hypertension"].value is None
    assert terms["elevated cholesterol levels"].status is None
    assert result.simplified_text == (
        "Patient has high blood pressure and high cholesterol. "
        "LDL: 142 mg/dL (high). HDL: 38 mg/dL (low)."
    )


def test_empty_input(processor):
    for text in ("", None):
        result = processor.process(text)

        assert result.identified_terms == []
        assert result.simplified_text == ""


def test_text_without_terms_is_unchanged(processor):
    text = "Follow-up visit in six weeks. No acute distress."
    result = processor.process(text)

    assert result.identified_terms == []
    assert result.simplified_text == text


def test_values_are_read_from_the_original_text(processor):
    result = processor.process("Triglycerides: 160 mg/dL (borderline high)")
    term = result.identified_terms[0]

    assert term.value == "160"
    assert term.status == "borderline-high"
    assert result.simplified_text == "Blood fats (Triglycerides): 160 mg/dL (borderline high)"


def test_repeated_term_appears_once(processor):
    result = processor.process("hemoglobin 12.1 g/dL (normal). Repeat hemoglobin in 3 months.")

    assert [term.key for term in result.identified_terms] == ["hemoglobin"]
    assert result.identified_terms[0].status == "normal"


def test_calls_are_independent(processor):
    first = processor.process("LDL: 142 mg/dL (high)")
    second = processor.process("LDL was not measured")

    assert first.identified_terms[0].value == "142"
    assert second.identified_terms[0].value is None


def test_serialized_with_camel_case_keys():
    result = process_medical_report("HbA1c: 5.4")
    data = result.model_dump(by_alias=True, exclude_none=True)

    assert isinstance(result, ProcessedReport)
    assert set(data) == {"identifiedTerms", "simplifiedText"}
    assert data["identifiedTerms"][0]["normalRange"].startswith("< 5.7%")
    assert data["identifiedTerms"][0]["value"] == "5.4"
    assert data["simplifiedText"] == "average blood sugar level: 5.4"
