"""Idempotent, audited recording of rater scores.

A rater submits a batch of per-competency scores. The batch is validated as a
whole, gated on ratings the rater already holds for the same candidate and
item number, and then each item is upserted on the rating's natural key.
Items whose score did not change are skipped: no write, no audit entry.

Every changed row commits together with its audit entry. A storage failure
part way through keeps the rows already committed (with their entries) and
stops; the batch is at-least-once per row, not all-or-nothing.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from ..errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from ..extensions import db
from ..models.candidate import Candidate
from ..models.competency import Competency, COMPETENCY_TYPES
from ..models.rating import Rating, RATING_KEY_COLUMNS
from .audit import new_batch_id, record_change
from .conflicts import find_existing_for_batch

MIN_SCORE = 1
MAX_SCORE = 5


@dataclass
class RatingInput:
    candidate_id: int
    competency_id: int
    competency_type: str
    item_number: str
    score: int

    def key(self, rater_id):
        return (self.candidate_id, rater_id, self.competency_id, self.competency_type, self.item_number)


@dataclass
class BatchResult:
    accepted: List[Rating] = field(default_factory=list)
    changes_logged: int = 0
    is_update: bool = False

    @property
    def ratings_processed(self):
        return len(self.accepted)


def validate_batch(items):
    if not items:
        raise ValidationError("No ratings provided")
    if any(not (item.item_number or "").strip() for item in items):
        raise ValidationError("All ratings must include itemNumber")

    errors = {}
    for index, item in enumerate(items):
        problems = []
        if not item.candidate_id:
            problems.append("candidateId is required")
        if not item.competency_id:
            problems.append("competencyId is required")
        if item.competency_type not in COMPETENCY_TYPES:
            problems.append(f"competencyType must be one of {', '.join(COMPETENCY_TYPES)}")
        if not isinstance(item.score, int) or not MIN_SCORE <= item.score <= MAX_SCORE:
            problems.append(f"score must be between {MIN_SCORE} and {MAX_SCORE}")
        if problems:
            errors[str(index)] = problems
    if errors:
        raise ValidationError("Invalid ratings in batch", errors=errors)


def _ensure_references(items):
    candidate_ids = {i.candidate_id for i in items}
    competency_ids = {i.competency_id for i in items}
    found = {c.id for c in Candidate.query.filter(Candidate.id.in_(candidate_ids)).with_entities(Candidate.id)}
    missing = candidate_ids - found
    if missing:
        raise NotFoundError(f"Candidate not found: {', '.join(str(m) for m in sorted(missing))}")
    found = {c.id for c in Competency.query.filter(Competency.id.in_(competency_ids)).with_entities(Competency.id)}
    missing = competency_ids - found
    if missing:
        raise NotFoundError(f"Competency not found: {', '.join(str(m) for m in sorted(missing))}")


def _native_insert():
    dialect = db.engine.dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


def _find_by_key(key):
    return Rating.query.filter_by(**key).first()


def _compare_and_swap(values):
    key = {c: values[c] for c in RATING_KEY_COLUMNS}
    row = _find_by_key(key)
    if row is None:
        try:
            with db.session.begin_nested():
                db.session.add(Rating(**values))
            return
        except IntegrityError:
            # another writer inserted the key first; fall through to update it
            row = Rating.query.filter_by(**key).one()
    row.score = values["score"]
    row.submitted_at = values["submitted_at"]


def upsert_rating(key, score, now=None):
    """Insert or overwrite the rating on its natural key and return the stored row."""
    now = now or datetime.utcnow()
    values = dict(zip(RATING_KEY_COLUMNS, key))
    values.update(score=score, submitted_at=now)
    insert = _native_insert()
    if insert is None:
        _compare_and_swap(values)
    else:
        stmt = insert(Rating.__table__).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(RATING_KEY_COLUMNS),
            set_={
                "score": stmt.excluded.score,
                "submitted_at": stmt.excluded.submitted_at,
                "updated_at": now,
            },
        )
        db.session.execute(stmt)
    return (
        Rating.query.filter_by(**dict(zip(RATING_KEY_COLUMNS, key)))
        .populate_existing()
        .one()
    )


def submit_batch(items, rater, is_update=False, provenance=None):
    validate_batch(items)
    _ensure_references(items)

    pairs = [(i.candidate_id, i.item_number) for i in items]
    existing = find_existing_for_batch(rater.id, pairs)
    if existing and not is_update:
        current_app.logger.warning(
            "rating batch rejected: rater=%s has %d existing ratings", rater.id, len(existing)
        )
        raise ConflictError(existing_count=len(existing))

    current_scores = {r.key: r.score for r in existing}
    result = BatchResult(is_update=bool(existing))
    batch_id = new_batch_id()

    for item in items:
        key = item.key(rater.id)
        old_score = current_scores.get(key)
        if old_score == item.score:
            continue
        try:
            row = upsert_rating(key, item.score)
            record_change(
                "updated" if old_score is not None else "created",
                key,
                old_score,
                item.score,
                actor_id=rater.id,
                provenance=provenance,
                batch_id=batch_id,
                rating_id=row.id,
            )
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception(
                "rating upsert failed after %d rows: rater=%s key=%s", len(result.accepted), rater.id, key
            )
            raise PersistenceError(str(e), written=len(result.accepted)) from e
        current_scores[key] = item.score
        result.accepted.append(row)
        result.changes_logged += 1

    current_app.logger.info(
        "rating batch stored: rater=%s items=%d changed=%d update=%s",
        rater.id, len(items), result.changes_logged, result.is_update,
    )
    return result


def reset_ratings(candidate_id, rater_id, actor, item_number=None, provenance=None):
    """Delete a rater's ratings for a candidate, optionally scoped to one item number.

    Returns the number of rows removed; each removed row gets a ``deleted``
    audit entry, and a reset that matches nothing writes none.
    """
    query = Rating.query.filter_by(candidate_id=candidate_id, rater_id=rater_id)
    if item_number is not None:
        query = query.filter_by(item_number=item_number)
    rows = query.all()
    if not rows:
        return 0

    batch_id = new_batch_id()
    try:
        for row in rows:
            record_change(
                "deleted",
                row.key,
                row.score,
                None,
                actor_id=actor.id,
                provenance=provenance,
                batch_id=batch_id,
                rating_id=row.id,
            )
            db.session.delete(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("rating reset failed: candidate=%s rater=%s", candidate_id, rater_id)
        raise PersistenceError(str(e)) from e

    current_app.logger.info(
        "ratings reset: candidate=%s rater=%s item=%s deleted=%d by=%s",
        candidate_id, rater_id, item_number, len(rows), actor.id,
    )
    return len(rows)


def ratings_for_candidate(candidate_id, item_number=None):
    query = Rating.query.options(joinedload(Rating.rater), joinedload(Rating.competency)).filter_by(candidate_id=candidate_id)
    if item_number:
        query = query.filter_by(item_number=item_number)
    return query.order_by(Rating.item_number, Rating.competency_type, Rating.competency_id, Rating.rater_id).all()


def ratings_for_rater(rater_id):
    return (
        Rating.query.options(joinedload(Rating.competency))
        .filter_by(rater_id=rater_id)
        .order_by(Rating.candidate_id, Rating.competency_id)
        .all()
    )
