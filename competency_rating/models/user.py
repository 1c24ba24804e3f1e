from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin
from werkzeug.security import generate_password_hash, check_password_hash

USER_TYPES = ("rater", "secretariat", "admin")

class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    user_type = db.Column(db.String(20), nullable=False, default="rater", index=True)
    # Chairperson / Vice-Chairperson / Regular Member / DENREU / Gender and Development / End-User
    rater_type = db.Column(db.String(50), index=True)
    position = db.Column(db.String(160))
    designation = db.Column(db.String(160))
    administrative_privilege = db.Column(db.Boolean, nullable=False, default=False)

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    @property
    def is_rater(self):
        return self.user_type == "rater"

    @property
    def can_view_audit(self):
        return self.user_type == "admin" or bool(self.administrative_privilege)

    def to_summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "raterType": self.rater_type,
            "position": self.position,
            "designation": self.designation,
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} type={self.user_type} rater_type={self.rater_type!r}>"
