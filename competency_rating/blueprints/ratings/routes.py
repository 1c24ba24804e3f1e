from flask import abort, current_app, jsonify, request
from flask_login import login_required, current_user
from . import bp
from ...errors import ValidationError
from ...forms import parse_rating_items
from ...models.candidate import Candidate
from ...services.audit import RequestProvenance
from ...services.conflicts import check_existing
from ...services.rating_upsert import ratings_for_candidate, ratings_for_rater, reset_ratings, submit_batch
from ...utils.decorators import rater_required


def _require_ratable(candidate_ids):
    # only long-listed candidates are ratable
    blocked = sorted(
        c.id for c in Candidate.query.filter(Candidate.id.in_(candidate_ids)) if not c.is_ratable
    )
    if blocked:
        raise ValidationError("Only long-listed candidates can be rated", errors={"candidateIds": blocked})


@bp.route("/submit", methods=["POST"])
@login_required
@rater_required
def submit():
    payload = request.get_json(silent=True) or {}
    items = parse_rating_items(payload.get("ratings"))
    _require_ratable({i.candidate_id for i in items})
    result = submit_batch(
        items,
        current_user,
        # only a JSON true confirms overwriting existing ratings
        is_update=payload.get("isUpdate") is True,
        provenance=RequestProvenance.from_request(request),
    )
    return jsonify({
        "message": "Ratings updated successfully" if result.is_update else "Ratings submitted successfully",
        "isUpdate": result.is_update,
        "ratingsProcessed": result.ratings_processed,
        "changesLogged": result.changes_logged,
    })


@bp.get("/check-existing")
@login_required
def existing():
    candidate_id = request.args.get("candidateId", type=int)
    item_number = (request.args.get("itemNumber") or "").strip()
    rater_id = request.args.get("raterId", type=int)
    rater_type = request.args.get("raterType")
    if not candidate_id or not item_number:
        raise ValidationError("candidateId and itemNumber are required")
    if rater_id is None and not rater_type:
        raise ValidationError("raterId or raterType is required")
    result = check_existing(candidate_id, item_number, rater_id=rater_id, rater_type=rater_type)
    return jsonify(result.to_dict())


def _reset(candidate_id, rater_id, item_number=None):
    if current_user.id != rater_id and current_user.user_type != "admin":
        abort(403)
    deleted = reset_ratings(
        candidate_id,
        rater_id,
        current_user,
        item_number=item_number,
        provenance=RequestProvenance.from_request(request),
    )
    return jsonify({"message": "Ratings reset successfully", "deletedCount": deleted})


@bp.delete("/candidate/<int:candidate_id>/rater/<int:rater_id>")
@login_required
def reset_all(candidate_id, rater_id):
    return _reset(candidate_id, rater_id)


@bp.delete("/candidate/<int:candidate_id>/rater/<int:rater_id>/item/<path:item_number>")
@login_required
def reset_item(candidate_id, rater_id, item_number):
    return _reset(candidate_id, rater_id, item_number=item_number)


@bp.get("/candidate/<int:candidate_id>")
@login_required
def by_candidate(candidate_id):
    rows = ratings_for_candidate(candidate_id, request.args.get("itemNumber"))
    return jsonify([r.to_dict() for r in rows])


@bp.get("/rater/<int:rater_id>")
@login_required
def by_rater(rater_id):
    if current_user.id != rater_id and not current_user.can_view_audit:
        abort(403)
    rows = ratings_for_rater(rater_id)
    current_app.logger.debug("ratings for rater=%s: %d", rater_id, len(rows))
    return jsonify([r.to_dict() for r in rows])
