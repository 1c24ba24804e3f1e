from flask import current_app

from ..errors import NotFoundError
from ..extensions import db
from ..models.candidate import Candidate
from ..models.rating import Rating
from .competencies import find_vacancy_by_item_number, group_by_type, resolve_applicable_competencies
from .rater_policy import CODE_ORDER, is_rater_required, rater_code, rating_display, required_codes
from .scoring import RoundingMode, ScoredRating, compute_scores


def _scored(rating):
    return ScoredRating(
        competency_id=rating.competency_id,
        competency_type=rating.competency_type,
        rater_code=rater_code(rating.rater.rater_type if rating.rater else None),
        score=rating.score,
    )


def _cell(salary_grade, code, scores):
    # raters sharing a code are shown side by side, oldest rating first
    if not scores or not is_rater_required(salary_grade, code):
        return rating_display(salary_grade, code, None)
    return " / ".join(rating_display(salary_grade, code, s) for s in scores)


def candidate_score_report(candidate_id, item_number=None, rounding=None):
    """Score a candidate for one item number from the ratings stored right now."""
    candidate = db.session.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError(f"Candidate {candidate_id} not found")
    item_number = item_number or candidate.item_number
    vacancy = find_vacancy_by_item_number(item_number)
    grouped = group_by_type(resolve_applicable_competencies(vacancy.id))
    rounding = RoundingMode(rounding or current_app.config.get("SCORE_ROUNDING_MODE", "end_to_end"))

    ratings = (
        Rating.query.filter_by(candidate_id=candidate_id, item_number=item_number)
        .order_by(Rating.id)
        .all()
    )
    scored = [_scored(r) for r in ratings]
    scores = compute_scores(scored, grouped, vacancy.salary_grade, rounding=rounding)

    cells = {}
    for s in scored:
        cells.setdefault((s.competency_id, s.competency_type, s.rater_code), []).append(s.score)
    matrix = {}
    for ctype, competencies in grouped.items():
        if ctype == "leadership" and not scores.leadership_included:
            continue
        matrix[ctype] = [
            {
                "competencyId": c.id,
                "name": c.name,
                "ordinal": index,
                "cells": {
                    code.value: _cell(vacancy.salary_grade, code, cells.get((c.id, ctype, code.value)))
                    for code in CODE_ORDER
                },
                "average": scores.competency_means.get(c.id, 0.0),
            }
            for index, c in enumerate(competencies, start=1)
        ]

    report = scores.to_dict()
    report.update(
        candidateId=candidate.id,
        fullName=candidate.full_name,
        status=candidate.status,
        ratable=candidate.is_ratable,
        itemNumber=item_number,
        salaryGrade=vacancy.salary_grade,
        requiredRaters=required_codes(vacancy.salary_grade),
        ratingCount=len(ratings),
        matrix=matrix,
    )
    return report
