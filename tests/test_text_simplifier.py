import pytest

from conftest import SAMPLE_REPORT
from models.medical_term import MatchedTerm


def test_nothing_to_replace(simplifier, matcher):
    assert simplifier.simplify("Patient has hypertension.", []) == "Patient has hypertension."
    assert simplifier.simplify("", matcher.match("hypertension")) == ""


def test_longer_phrase_is_replaced_whole(simplifier, matcher):
    terms = matcher.match("Patient has elevated cholesterol levels.")

    simplified = simplifier.simplify("Patient has elevated cholesterol levels.", terms)

    assert simplified == "Patient has high cholesterol."
    assert "fat-like substance" not in simplified


def test_replacement_respects_word_boundaries(simplifier, matcher):
    text = "History of hypercholesterolemia; cholesterol is now controlled."

    simplified = simplifier.simplify(text, matcher.match(text))

    assert simplified == "History of hypercholesterolemia; fat-like substance in blood is now controlled."


def test_replacement_ignores_case(simplifier, matcher):
    assert simplifier.simplify("HYPERTENSION noted", matcher.match("hypertension")) == "high blood pressure noted"


def test_display_name_with_parenthetical(simplifier, matcher):
    text = "LDL (Low-Density Lipoprotein) was 150"

    assert simplifier.simplify(text, matcher.match(text)) == "\"Bad\" cholesterol (LDL) was 150"


def test_plain_phrases_already_in_text_are_kept(simplifier, matcher):
    terms = matcher.match("elevated cholesterol levels")

    simplified = simplifier.simplify("High cholesterol runs in the family; cholesterol is 240.", terms)

    assert simplified == "High cholesterol runs in the family; fat-like substance in blood is 240."


def test_glued_parenthetical_names_are_both_replaced(simplifier, matcher):
    text = "LDL (Low-Density Lipoprotein)HDL (High-Density Lipoprotein)"
    terms = matcher.match(text)

    once = simplifier.simplify(text, terms)

    assert once == "\"Bad\" cholesterol (LDL)\"Good\" cholesterol (HDL)"
    assert simplifier.simplify(once, terms) == once


def test_simplify_is_idempotent(simplifier, matcher):
    for text in (SAMPLE_REPORT, "Triglycerides: 160 mg/dL (borderline high)"):
        terms = matcher.match(text)
        once = simplifier.simplify(text, terms)

        assert simplifier.simplify(once, terms) == once


@pytest.mark.parametrize("separator", ["", " ", "-", ")", ". "])
def test_simplify_is_idempotent_for_every_pair_of_names(simplifier, matcher, lexicon, separator):
    all_terms = [MatchedTerm.from_record(record) for record in lexicon]
    pieces = []
    for record in lexicon:
        for piece in (record.term, record.simplified, record.key):
            if piece not in pieces:
                pieces.append(piece)

    for first in pieces:
        for second in pieces:
            text = first + separator + second
            for terms in (all_terms, matcher.match(text)):
                once = simplifier.simplify(text, terms)

                assert simplifier.simplify(once, terms) == once, text
