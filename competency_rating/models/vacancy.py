from ..extensions import db
from .base import TimestampMixin, ArchivableMixin

class Vacancy(db.Model, TimestampMixin, ArchivableMixin):
    __tablename__ = "vacancies"

    id = db.Column(db.Integer, primary_key=True)
    item_number = db.Column(db.String(120), nullable=False, index=True)
    position = db.Column(db.String(200), nullable=False)
    assignment = db.Column(db.String(200), nullable=False)
    salary_grade = db.Column(db.Integer, nullable=False)
    publication_range_id = db.Column(db.Integer, db.ForeignKey("publication_ranges.id"), nullable=False)

    publication_range = db.relationship("PublicationRange")

    __table_args__ = (
        db.UniqueConstraint("item_number", "publication_range_id", name="uq_vacancies_item_range"),
        db.CheckConstraint("salary_grade BETWEEN 1 AND 24", name="ck_vacancies_salary_grade"),
    )

    def __repr__(self) -> str:
        return f"<Vacancy id={self.id} item_number={self.item_number!r} sg={self.salary_grade}>"
