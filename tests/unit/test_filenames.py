"""Unit tests for output filename derivation."""

import re

import pytest

from cvmanager.contexts.generation.filenames import (
    build_output_filename,
    safe_profile_name,
    safe_target_name,
    source_filename_for,
)


@pytest.mark.unit
def test_company_and_name_are_sanitized():
    filename = build_output_filename("Jane Doe", "ACME Corp.", "Default", "2025-01-31")
    assert filename == "CV_Jane_Doe_ACME_Corp__2025-01-31.pdf"


@pytest.mark.unit
def test_configuration_name_used_without_company():
    filename = build_output_filename("Jane Doe", "", "Data Science", "2025-01-31")
    assert filename == "CV_Jane_Doe_Data_Science_2025-01-31.pdf"


@pytest.mark.unit
def test_umlauts_are_kept():
    assert safe_target_name("Müller & Söhne GmbH", None) == "Müller___Söhne_GmbH"
    assert safe_profile_name("Jürgen Groß") == "Jürgen_Groß"


@pytest.mark.unit
def test_profile_name_drops_punctuation_and_collapses_spaces():
    assert safe_profile_name("Dr.  Jane   O'Doe") == "Dr_Jane_ODoe"


@pytest.mark.unit
def test_fallbacks():
    assert safe_target_name(None, None) == "cv"
    assert safe_profile_name(None) == "CV"


@pytest.mark.unit
def test_same_inputs_same_day_collide():
    first = build_output_filename("Jane", "ACME", "x", "2025-01-31")
    second = build_output_filename("Jane", "ACME", "y", "2025-01-31")
    assert first == second


@pytest.mark.unit
def test_default_date_is_today():
    filename = build_output_filename("Jane", "ACME", None)
    assert re.fullmatch(r"CV_Jane_ACME_\d{4}-\d{2}-\d{2}\.pdf", filename)


@pytest.mark.unit
def test_source_filename_for():
    assert source_filename_for("CV_Jane_ACME_2025-01-31.pdf") == "CV_Jane_ACME_2025-01-31.tex"
