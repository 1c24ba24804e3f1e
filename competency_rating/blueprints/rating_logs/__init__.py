from flask import Blueprint

bp = Blueprint("rating_logs", __name__)

from . import routes  # noqa: E402,F401
