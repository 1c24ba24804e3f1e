import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from competency_rating.services.rater_policy import (
    RaterCode,
    is_rater_required,
    leadership_applies,
    rater_code,
    rating_display,
    required_codes,
)


@pytest.mark.parametrize("rater_type,code", [
    ("Chairperson", "CHAIR"),
    ("Vice-Chairperson", "VICE"),
    ("Regular Member", "REGMEM"),
    ("DENREU", "DENREU"),
    ("Gender and Development", "GAD"),
    ("End-User", "END-USER"),
])
def test_rater_code_maps_known_types(rater_type, code):
    assert rater_code(rater_type) == code


def test_rater_code_unmapped_and_missing():
    assert rater_code("Observer") == "Observer"
    assert rater_code(None) == "UNKNOWN"
    assert rater_code("") == "UNKNOWN"


def test_low_grade_only_counts_regular_member_and_end_user():
    for sg in (1, 12, 14):
        assert is_rater_required(sg, "REGMEM")
        assert is_rater_required(sg, RaterCode.END_USER)
        for code in ("CHAIR", "VICE", "GAD", "DENREU"):
            assert not is_rater_required(sg, code)


def test_higher_grades_count_every_code():
    for sg in (15, 18, 24):
        for code in RaterCode:
            assert is_rater_required(sg, code)


def test_missing_grade_or_unknown_code_never_counts():
    assert not is_rater_required(None, "REGMEM")
    assert not is_rater_required(0, "REGMEM")
    assert not is_rater_required(20, "UNKNOWN")
    assert not is_rater_required(20, "Observer")


def test_required_codes_follow_report_order():
    assert required_codes(12) == ["REGMEM", "END-USER"]
    assert required_codes(20) == ["CHAIR", "VICE", "GAD", "DENREU", "REGMEM", "END-USER"]
    assert required_codes(None) == []


def test_leadership_applies_from_grade_18_with_competencies():
    assert leadership_applies(18, 1)
    assert leadership_applies(24, 3)
    assert not leadership_applies(17, 1)
    assert not leadership_applies(20, 0)
    assert not leadership_applies(None, 2)


def test_rating_display_cells():
    assert rating_display(12, "CHAIR", 5) == "NA"
    assert rating_display(20, "CHAIR", None) == "-"
    assert rating_display(20, "VICE", 4) == "4.00"
    assert rating_display(12, RaterCode.REGMEM, 3) == "3.00"
