from ..extensions import db
from .base import TimestampMixin, ArchivableMixin

CANDIDATE_STATUSES = ("general_list", "long_list", "disqualified", "for_review")

class Candidate(db.Model, TimestampMixin, ArchivableMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    # one vacancy at a time; a repost moves the candidate to a new item number
    item_number = db.Column(db.String(120), nullable=False, index=True)
    status = db.Column(db.String(30), nullable=False, default="general_list", index=True)
    publication_range_id = db.Column(db.Integer, db.ForeignKey("publication_ranges.id"), nullable=False)

    @property
    def is_ratable(self):
        return self.status == "long_list"

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.full_name!r}>"
