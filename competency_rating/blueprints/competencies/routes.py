from flask import jsonify
from flask_login import login_required
from . import bp
from ...services.competencies import group_by_type, resolve_applicable_competencies


@bp.get("/vacancy/<int:vacancy_id>")
@login_required
def for_vacancy(vacancy_id):
    competencies = resolve_applicable_competencies(vacancy_id)
    grouped = group_by_type(competencies)
    return jsonify({
        "vacancyId": vacancy_id,
        "competencies": [c.to_dict() for c in competencies],
        "byType": {ctype: [c.to_dict() for c in items] for ctype, items in grouped.items()},
    })
