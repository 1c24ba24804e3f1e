from ..extensions import db
from .base import TimestampMixin

COMPETENCY_TYPES = ("basic", "organizational", "leadership", "minimum")

competency_vacancies = db.Table(
    "competency_vacancies",
    db.Column("competency_id", db.Integer, db.ForeignKey("competencies.id", ondelete="CASCADE"), primary_key=True),
    db.Column("vacancy_id", db.Integer, db.ForeignKey("vacancies.id", ondelete="CASCADE"), primary_key=True),
)

class Competency(db.Model, TimestampMixin):
    __tablename__ = "competencies"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(20), nullable=False, index=True)
    # fixed competencies apply to every vacancy regardless of the list below
    is_fixed = db.Column(db.Boolean, nullable=False, default=False)

    vacancies = db.relationship("Vacancy", secondary=competency_vacancies, lazy="selectin")

    @property
    def scope(self):
        if self.is_fixed:
            return "fixed"
        if self.vacancies:
            return "scoped"
        return "orphaned"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "isFixed": bool(self.is_fixed),
            "vacancyIds": [v.id for v in self.vacancies],
            "scope": self.scope,
        }

    def __repr__(self) -> str:
        return f"<Competency id={self.id} type={self.type} name={self.name!r}>"
