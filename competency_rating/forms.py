from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import Form, IntegerField, PasswordField, SelectField, StringField
from wtforms.validators import DataRequired, Email, NumberRange

from .errors import ValidationError
from .models.competency import COMPETENCY_TYPES
from .services.rating_upsert import MAX_SCORE, MIN_SCORE, RatingInput


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class LoginForm(FlaskForm):
    class Meta:
        csrf = False

    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class RatingItemForm(Form):
    candidate_id = IntegerField("candidateId", validators=[DataRequired()])
    competency_id = IntegerField("competencyId", validators=[DataRequired()])
    competency_type = SelectField("competencyType", choices=[(t, t) for t in COMPETENCY_TYPES])
    item_number = StringField("itemNumber", filters=[_strip], validators=[DataRequired()])
    score = IntegerField("score", validators=[DataRequired(), NumberRange(min=MIN_SCORE, max=MAX_SCORE)])


# JSON field name -> form field name
ITEM_FIELDS = {
    "candidateId": "candidate_id",
    "competencyId": "competency_id",
    "competencyType": "competency_type",
    "itemNumber": "item_number",
    "score": "score",
}


def parse_rating_items(raw_items):
    """Coerce a JSON ``ratings`` array into ``RatingInput`` objects.

    Per-item problems are collected by index; nothing is returned unless the
    whole array is well formed.
    """
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("No ratings provided")
    if any(not isinstance(raw, dict) or not str(raw.get("itemNumber") or "").strip() for raw in raw_items):
        raise ValidationError("All ratings must include itemNumber")

    items = []
    errors = {}
    for index, raw in enumerate(raw_items):
        data = MultiDict(
            (field, str(raw[key])) for key, field in ITEM_FIELDS.items() if raw.get(key) is not None
        )
        form = RatingItemForm(formdata=data)
        if not form.validate():
            errors[str(index)] = {
                key: form.errors[field] for key, field in ITEM_FIELDS.items() if field in form.errors
            }
            continue
        items.append(RatingInput(
            candidate_id=form.candidate_id.data,
            competency_id=form.competency_id.data,
            competency_type=form.competency_type.data,
            item_number=form.item_number.data,
            score=form.score.data,
        ))
    if errors:
        raise ValidationError("Invalid ratings in batch", errors=errors)
    return items
