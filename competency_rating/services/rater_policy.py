"""Rater eligibility keyed by salary grade.

A rater's *type*, never the individual, decides whether a score counts. Rater
types map onto six short codes; positions at salary grade 14 and below only
take scores from regular members and the end-user, above that every code
counts. Leadership competencies apply from salary grade 18 up.
"""
from enum import Enum


class RaterType(str, Enum):
    CHAIRPERSON = "Chairperson"
    VICE_CHAIRPERSON = "Vice-Chairperson"
    REGULAR_MEMBER = "Regular Member"
    DENREU = "DENREU"
    GENDER_AND_DEVELOPMENT = "Gender and Development"
    END_USER = "End-User"


class RaterCode(str, Enum):
    CHAIR = "CHAIR"
    VICE = "VICE"
    GAD = "GAD"
    DENREU = "DENREU"
    REGMEM = "REGMEM"
    END_USER = "END-USER"


RATER_CODES = {
    RaterType.CHAIRPERSON: RaterCode.CHAIR,
    RaterType.VICE_CHAIRPERSON: RaterCode.VICE,
    RaterType.REGULAR_MEMBER: RaterCode.REGMEM,
    RaterType.DENREU: RaterCode.DENREU,
    RaterType.GENDER_AND_DEVELOPMENT: RaterCode.GAD,
    RaterType.END_USER: RaterCode.END_USER,
}

# column order used by reports
CODE_ORDER = (RaterCode.CHAIR, RaterCode.VICE, RaterCode.GAD, RaterCode.DENREU, RaterCode.REGMEM, RaterCode.END_USER)

LOW_GRADE_CODES = frozenset({RaterCode.REGMEM.value, RaterCode.END_USER.value})
ALL_CODES = frozenset(c.value for c in RaterCode)

LOW_GRADE_CEILING = 14
LEADERSHIP_MIN_GRADE = 18

UNKNOWN_CODE = "UNKNOWN"


def rater_code(rater_type):
    """Map a rater type to its code.

    Unmapped types fall back to the raw string, and a missing type to
    ``"UNKNOWN"``; neither is ever eligible.
    """
    if not rater_type:
        return UNKNOWN_CODE
    try:
        return RATER_CODES[RaterType(rater_type)].value
    except ValueError:
        return str(rater_type)


def is_rater_required(salary_grade, code):
    if not salary_grade:
        return False
    code = getattr(code, "value", code)
    if salary_grade <= LOW_GRADE_CEILING:
        return code in LOW_GRADE_CODES
    return code in ALL_CODES


def required_codes(salary_grade):
    return [c.value for c in CODE_ORDER if is_rater_required(salary_grade, c)]


def leadership_applies(salary_grade, leadership_count):
    return bool(salary_grade) and salary_grade >= LEADERSHIP_MIN_GRADE and leadership_count > 0


def rating_display(salary_grade, code, score):
    """Report cell: ``NA`` (not applicable), ``-`` (not yet rated) or the score."""
    if not is_rater_required(salary_grade, code):
        return "NA"
    if score is None:
        return "-"
    return f"{float(score):.2f}"
