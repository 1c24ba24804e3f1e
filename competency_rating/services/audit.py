"""Append-only audit trail for rating changes.

One entry per real score change (created, updated with a different score,
deleted). Entries written by the same submission or reset call share a
``batch_id`` so they can be shown together; each row stays an independent
fact and is never edited afterwards.
"""
import csv
from dataclasses import dataclass
from datetime import datetime
from io import StringIO
from typing import Optional
from uuid import uuid4

from sqlalchemy import case, func

from ..extensions import db
from ..models.rating_log import RatingLog, LOG_ACTIONS
from ..models.user import User


@dataclass(frozen=True)
class RequestProvenance:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_request(cls, req):
        forwarded = req.headers.get("X-Forwarded-For")
        ip = forwarded.split(",")[0].strip() if forwarded else req.remote_addr
        return cls(ip_address=ip, user_agent=req.headers.get("User-Agent"))


def new_batch_id():
    return uuid4().hex


def record_change(action, key, old_score, new_score, actor_id, provenance=None, batch_id=None, rating_id=None):
    """Add one audit entry to the session; the caller commits it with the row it describes.

    ``key`` is the rating's natural key (candidate_id, rater_id, competency_id,
    competency_type, item_number).
    """
    if action not in LOG_ACTIONS:
        raise ValueError(f"unknown audit action {action!r}")
    candidate_id, rater_id, competency_id, competency_type, item_number = key
    provenance = provenance or RequestProvenance()
    entry = RatingLog(
        action=action,
        rating_id=rating_id,
        candidate_id=candidate_id,
        rater_id=rater_id,
        competency_id=competency_id,
        competency_type=competency_type,
        item_number=item_number,
        old_score=old_score,
        new_score=new_score,
        performed_by=actor_id,
        ip_address=provenance.ip_address,
        user_agent=provenance.user_agent[:512] if provenance.user_agent else None,
        batch_id=batch_id,
        created_at=datetime.utcnow(),
    )
    db.session.add(entry)
    return entry


def _filtered(candidate_id=None, rater_id=None, item_number=None, action=None):
    query = RatingLog.query
    if candidate_id:
        query = query.filter(RatingLog.candidate_id == candidate_id)
    if rater_id:
        query = query.filter(RatingLog.rater_id == rater_id)
    if item_number:
        query = query.filter(RatingLog.item_number == item_number)
    if action:
        query = query.filter(RatingLog.action == action)
    return query


def query_logs(candidate_id=None, rater_id=None, item_number=None, action=None, limit=100, skip=0):
    query = _filtered(candidate_id, rater_id, item_number, action)
    total = query.count()
    logs = (
        query.order_by(RatingLog.created_at.desc(), RatingLog.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return logs, total


def log_stats():
    action_rows = (
        db.session.query(RatingLog.action, func.count(RatingLog.id))
        .group_by(RatingLog.action)
        .all()
    )
    action_stats = [{"action": action, "count": count} for action, count in action_rows]

    def _count(action):
        return func.sum(case((RatingLog.action == action, 1), else_=0))

    total = func.count(RatingLog.id)
    activity_rows = (
        db.session.query(
            RatingLog.rater_id,
            User.name,
            User.rater_type,
            total.label("total"),
            _count("created"),
            _count("updated"),
            _count("deleted"),
        )
        .join(User, User.id == RatingLog.rater_id)
        .group_by(RatingLog.rater_id, User.name, User.rater_type)
        .order_by(total.desc())
        .all()
    )
    rater_activity = [
        {
            "raterId": rater_id,
            "raterName": name,
            "raterType": rater_type,
            "totalActions": int(total_actions),
            "created": int(created or 0),
            "updated": int(updated or 0),
            "deleted": int(deleted or 0),
        }
        for rater_id, name, rater_type, total_actions, created, updated, deleted in activity_rows
    ]
    return {"actionStats": action_stats, "raterActivity": rater_activity}


def group_for_display(logs):
    """Group entries into display batches, keeping the incoming (newest-first) order."""
    batches = {}
    for log in logs:
        # entries written outside a batch stand alone
        key = log.batch_id or f"log-{log.id}"
        batch = batches.get(key)
        if batch is None:
            batch = batches[key] = {
                "batchId": key,
                "raterId": log.rater_id,
                "candidateId": log.candidate_id,
                "itemNumber": log.item_number,
                "actions": {},
                "firstAt": log.created_at,
                "lastAt": log.created_at,
                "entries": [],
            }
        batch["entries"].append(log.to_dict())
        batch["actions"][log.action] = batch["actions"].get(log.action, 0) + 1
        if log.created_at and (batch["firstAt"] is None or log.created_at < batch["firstAt"]):
            batch["firstAt"] = log.created_at
        if log.created_at and (batch["lastAt"] is None or log.created_at > batch["lastAt"]):
            batch["lastAt"] = log.created_at
    out = []
    for batch in batches.values():
        batch["firstAt"] = batch["firstAt"].isoformat() if batch["firstAt"] else None
        batch["lastAt"] = batch["lastAt"].isoformat() if batch["lastAt"] else None
        out.append(batch)
    return out


CSV_HEADERS = [
    "Date & Time",
    "Action",
    "Rater Name",
    "Rater Type",
    "Rater Email",
    "Candidate Name",
    "Item Number",
    "Competency",
    "Competency Type",
    "Old Score",
    "New Score",
    "Performed By",
    "IP Address",
]


def _na(value):
    return "N/A" if value is None or value == "" else value


def export_logs_csv():
    logs = RatingLog.query.order_by(RatingLog.created_at.desc(), RatingLog.id.desc()).all()
    buf = StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADERS)
    for log in logs:
        writer.writerow([
            log.created_at.strftime("%b %d, %Y, %I:%M:%S %p") if log.created_at else "N/A",
            log.action.upper(),
            _na(log.rater.name if log.rater else None),
            _na(log.rater.rater_type if log.rater else None),
            _na(log.rater.email if log.rater else None),
            _na(log.candidate.full_name if log.candidate else None),
            _na(log.item_number),
            _na(log.competency.name if log.competency else None),
            _na(log.competency_type),
            _na(log.old_score),
            _na(log.new_score),
            _na(log.performer.name if log.performer else None),
            _na(log.ip_address),
        ])
    # BOM so spreadsheet apps detect UTF-8
    return "\ufeff" + buf.getvalue()
