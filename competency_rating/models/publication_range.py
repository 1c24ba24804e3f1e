from ..extensions import db
from .base import TimestampMixin

class PublicationRange(db.Model, TimestampMixin):
    __tablename__ = "publication_ranges"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(160), unique=True, nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_archived = db.Column(db.Boolean, nullable=False, default=False)

    __table_args__ = (
        db.CheckConstraint("end_date > start_date", name="ck_publication_ranges_dates"),
        db.Index("ix_publication_ranges_state", "is_archived", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<PublicationRange id={self.id} name={self.name!r}>"
