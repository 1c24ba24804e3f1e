from flask import jsonify, request
from flask_login import login_required
from . import bp
from ...errors import ValidationError
from ...services.reports import candidate_score_report
from ...services.scoring import RoundingMode


@bp.get("/scores/<int:candidate_id>")
@login_required
def scores(candidate_id):
    rounding = request.args.get("rounding")
    if rounding and rounding not in {m.value for m in RoundingMode}:
        raise ValidationError(f"rounding must be one of {', '.join(m.value for m in RoundingMode)}")
    return jsonify(candidate_score_report(candidate_id, request.args.get("itemNumber"), rounding=rounding))
