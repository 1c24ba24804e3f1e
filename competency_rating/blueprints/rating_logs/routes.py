from io import BytesIO

from flask import current_app, jsonify, request, send_file
from flask_login import login_required
from . import bp
from ...errors import ValidationError
from ...models.rating_log import LOG_ACTIONS
from ...services.audit import export_logs_csv, group_for_display, log_stats, query_logs
from ...utils.decorators import admin_required


def _filters():
    action = request.args.get("action")
    if action and action not in LOG_ACTIONS:
        raise ValidationError(f"action must be one of {', '.join(LOG_ACTIONS)}")
    return {
        "candidate_id": request.args.get("candidateId", type=int),
        "rater_id": request.args.get("raterId", type=int),
        "item_number": request.args.get("itemNumber"),
        "action": action,
    }


def _page():
    limit = request.args.get("limit", current_app.config["RATING_LOGS_PAGE_LIMIT"], type=int)
    skip = request.args.get("skip", 0, type=int)
    limit = max(1, min(limit, current_app.config["RATING_LOGS_MAX_LIMIT"]))
    return limit, max(0, skip)


@bp.get("")
@login_required
@admin_required
def index():
    limit, skip = _page()
    logs, total = query_logs(**_filters(), limit=limit, skip=skip)
    return jsonify({"logs": [l.to_dict() for l in logs], "total": total, "limit": limit, "skip": skip})


@bp.get("/stats")
@login_required
@admin_required
def stats():
    return jsonify(log_stats())


@bp.get("/batches")
@login_required
@admin_required
def batches():
    limit, skip = _page()
    logs, total = query_logs(**_filters(), limit=limit, skip=skip)
    return jsonify({"batches": group_for_display(logs), "total": total, "limit": limit, "skip": skip})


@bp.get("/export-csv")
@login_required
@admin_required
def export_csv():
    bio = BytesIO(export_logs_csv().encode("utf-8"))
    current_app.logger.info("rating logs exported")
    return send_file(bio, as_attachment=True, download_name="rating-logs.csv", mimetype="text/csv")
