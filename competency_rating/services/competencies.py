from enum import Enum
from sqlalchemy import or_
from ..extensions import db
from ..errors import NotFoundError
from ..models.competency import Competency
from ..models.vacancy import Vacancy


class CompetencyType(str, Enum):
    BASIC = "basic"
    ORGANIZATIONAL = "organizational"
    LEADERSHIP = "leadership"
    MINIMUM = "minimum"


TYPE_ORDER = {t.value: i for i, t in enumerate(CompetencyType)}


def find_vacancy_by_item_number(item_number):
    vacancy = (
        Vacancy.query
        .filter_by(item_number=item_number, is_archived=False)
        .order_by(Vacancy.id.desc())
        .first()
    )
    if vacancy is None:
        raise NotFoundError(f"Vacancy not found for item number {item_number}")
    return vacancy


def resolve_applicable_competencies(vacancy_id):
    """Competencies that apply to a vacancy: fixed ones plus those listing it.

    A competency that is neither fixed nor linked to any vacancy is orphaned
    and applies to nothing.
    """
    if db.session.get(Vacancy, vacancy_id) is None:
        raise NotFoundError(f"Vacancy {vacancy_id} not found")
    rows = Competency.query.filter(
        or_(
            Competency.is_fixed.is_(True),
            Competency.vacancies.any(Vacancy.id == vacancy_id),
        )
    ).all()
    return sorted(rows, key=lambda c: (TYPE_ORDER.get(c.type, len(TYPE_ORDER)), c.name))


def group_by_type(competencies):
    grouped = {t.value: [] for t in CompetencyType}
    for c in competencies:
        grouped.setdefault(c.type, []).append(c)
    return grouped
