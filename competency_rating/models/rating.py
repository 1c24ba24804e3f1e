from datetime import datetime
from ..extensions import db
from .base import TimestampMixin

# upsert conflict target; at most one row per key
RATING_KEY_COLUMNS = ("candidate_id", "rater_id", "competency_id", "competency_type", "item_number")

class Rating(db.Model, TimestampMixin):
    __tablename__ = "ratings"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    rater_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    competency_id = db.Column(db.Integer, db.ForeignKey("competencies.id"), nullable=False)
    competency_type = db.Column(db.String(20), nullable=False)
    item_number = db.Column(db.String(120), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    candidate = db.relationship("Candidate")
    rater = db.relationship("User")
    competency = db.relationship("Competency")

    __table_args__ = (
        db.UniqueConstraint(*RATING_KEY_COLUMNS, name="uq_ratings_natural_key"),
        db.CheckConstraint("score BETWEEN 1 AND 5", name="ck_ratings_score"),
        db.Index("ix_ratings_candidate_item", "candidate_id", "item_number"),
    )

    @property
    def key(self):
        return tuple(getattr(self, c) for c in RATING_KEY_COLUMNS)

    def to_dict(self):
        return {
            "id": self.id,
            "candidateId": self.candidate_id,
            "raterId": self.rater_id,
            "rater": self.rater.to_summary() if self.rater else None,
            "competencyId": self.competency_id,
            "competency": {"id": self.competency.id, "name": self.competency.name, "type": self.competency.type} if self.competency else None,
            "competencyType": self.competency_type,
            "itemNumber": self.item_number,
            "score": self.score,
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
        }

    def __repr__(self) -> str:
        return f"<Rating id={self.id} key={self.key} score={self.score}>"
