from sqlalchemy import event
from ..extensions import db

LOG_ACTIONS = ("created", "updated", "deleted")

class RatingLog(db.Model):
    """Append-only audit entry for one score change."""

    __tablename__ = "rating_logs"

    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(20), nullable=False)
    # not a foreign key: deleted ratings keep their history
    rating_id = db.Column(db.Integer)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    rater_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    competency_id = db.Column(db.Integer, db.ForeignKey("competencies.id"))
    competency_type = db.Column(db.String(20))
    item_number = db.Column(db.String(120), nullable=False)
    old_score = db.Column(db.Integer)
    new_score = db.Column(db.Integer)
    performed_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(512))
    batch_id = db.Column(db.String(32), index=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)

    candidate = db.relationship("Candidate")
    rater = db.relationship("User", foreign_keys=[rater_id])
    performer = db.relationship("User", foreign_keys=[performed_by])
    competency = db.relationship("Competency")

    __table_args__ = (
        db.Index("ix_rating_logs_candidate_created", "candidate_id", "created_at"),
        db.Index("ix_rating_logs_rater_created", "rater_id", "created_at"),
        db.Index("ix_rating_logs_item_created", "item_number", "created_at"),
        db.Index("ix_rating_logs_action_created", "action", "created_at"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "action": self.action,
            "ratingId": self.rating_id,
            "candidateId": self.candidate_id,
            "candidate": {"id": self.candidate.id, "fullName": self.candidate.full_name, "itemNumber": self.candidate.item_number} if self.candidate else None,
            "raterId": self.rater_id,
            "rater": {"id": self.rater.id, "name": self.rater.name, "raterType": self.rater.rater_type, "email": self.rater.email} if self.rater else None,
            "competencyId": self.competency_id,
            "competency": {"id": self.competency.id, "name": self.competency.name, "type": self.competency.type} if self.competency else None,
            "competencyType": self.competency_type,
            "itemNumber": self.item_number,
            "oldScore": self.old_score,
            "newScore": self.new_score,
            "performedBy": {"id": self.performer.id, "name": self.performer.name, "userType": self.performer.user_type} if self.performer else None,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
            "batchId": self.batch_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<RatingLog id={self.id} action={self.action} {self.old_score}->{self.new_score}>"


class ImmutableLogError(RuntimeError):
    pass


@event.listens_for(RatingLog, "before_update")
def _refuse_update(mapper, connection, target):
    raise ImmutableLogError(f"rating log {target.id} is append-only")


@event.listens_for(RatingLog, "before_delete")
def _refuse_delete(mapper, connection, target):
    raise ImmutableLogError(f"rating log {target.id} is append-only")
