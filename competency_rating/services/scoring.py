"""Turn per-rater competency scores into the Psycho-Social and Potential indices.

For each competency, the scores of eligible raters (see ``rater_policy``) are
averaged. Per type, the competency means are summed and divided by 5 for
basic, organizational and leadership (full-marks normalization, not a count),
and by the number of assigned competencies for minimum. Then::

    psycho_social = avg(basic) * 2
    potential     = ((avg(org) + avg(leadership) + avg(minimum)) / 3) * 2   # leadership applies
                  = ((avg(org) + avg(minimum)) / 2) * 2                     # otherwise

Leadership applies only at salary grade 18 and up with at least one
leadership competency assigned; otherwise it is left out of the formula and
the breakdown, not counted as zero.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict

from .competencies import CompetencyType
from .rater_policy import is_rater_required, leadership_applies

FULL_MARKS_DIVISOR = 5
TWO_PLACES = Decimal("0.01")


class RoundingMode(str, Enum):
    # round competency means and type averages before they feed the indices
    PER_STEP = "per_step"
    # carry unrounded values; round only what is reported
    END_TO_END = "end_to_end"


def round2(value):
    """Half-up rounding to two decimals on the decimal representation."""
    return float(Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ScoredRating:
    competency_id: int
    competency_type: str
    rater_code: str
    score: float


@dataclass
class ScoreBreakdown:
    psycho_social: float
    potential: float
    breakdown: Dict[str, float]
    leadership_included: bool
    rounding: RoundingMode
    competency_means: Dict[int, float] = field(default_factory=dict)

    def to_dict(self):
        return {
            "psychoSocial": self.psycho_social,
            "potential": self.potential,
            "breakdown": self.breakdown,
            "leadershipIncluded": self.leadership_included,
            "rounding": self.rounding.value,
            "competencyMeans": {str(k): v for k, v in self.competency_means.items()},
        }


def mean_eligible_score(ratings, competency_id, competency_type, salary_grade):
    scores = [
        r.score
        for r in ratings
        if r.competency_id == competency_id
        and r.competency_type == competency_type
        and is_rater_required(salary_grade, r.rater_code)
    ]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def type_average(competency_type, means, competency_count):
    total = sum(means)
    if competency_type == CompetencyType.MINIMUM.value:
        return total / competency_count if competency_count else 0.0
    return total / FULL_MARKS_DIVISOR


def _competency_id(competency):
    return competency if isinstance(competency, int) else competency.id


def compute_scores(ratings, competencies_by_type, salary_grade, rounding=RoundingMode.END_TO_END):
    """Aggregate stored ratings for one candidate and item number.

    ``ratings`` is an iterable of ``ScoredRating``; ``competencies_by_type``
    maps each type to the competencies (or competency ids) assigned to the
    vacancy.
    """
    rounding = RoundingMode(rounding)
    step = round2 if rounding is RoundingMode.PER_STEP else (lambda v: v)
    ratings = list(ratings)

    means = {}
    averages = {}
    for ctype in CompetencyType:
        assigned = [_competency_id(c) for c in competencies_by_type.get(ctype.value, [])]
        type_means = []
        for cid in assigned:
            m = step(mean_eligible_score(ratings, cid, ctype.value, salary_grade))
            means[cid] = m
            type_means.append(m)
        averages[ctype.value] = step(type_average(ctype.value, type_means, len(assigned)))

    include_leadership = leadership_applies(
        salary_grade, len(competencies_by_type.get(CompetencyType.LEADERSHIP.value, []))
    )
    basic = averages[CompetencyType.BASIC.value]
    org = averages[CompetencyType.ORGANIZATIONAL.value]
    minimum = averages[CompetencyType.MINIMUM.value]
    psycho_social = basic * 2
    if include_leadership:
        potential = ((org + averages[CompetencyType.LEADERSHIP.value] + minimum) / 3) * 2
    else:
        potential = ((org + minimum) / 2) * 2

    breakdown = {k: round2(v) for k, v in averages.items()}
    if not include_leadership:
        breakdown.pop(CompetencyType.LEADERSHIP.value)
    return ScoreBreakdown(
        psycho_social=round2(psycho_social),
        potential=round2(potential),
        breakdown=breakdown,
        leadership_included=include_leadership,
        rounding=rounding,
        competency_means={cid: round2(m) for cid, m in means.items()},
    )
