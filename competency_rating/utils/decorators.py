from functools import wraps
from flask import abort
from flask_login import current_user

def admin_required(view):
    """Admins and users holding administrative privilege."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if not getattr(current_user, "can_view_audit", False):
            abort(403)
        return view(*args, **kwargs)
    return wrapped

def rater_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if not getattr(current_user, "is_rater", False):
            abort(403)
        return view(*args, **kwargs)
    return wrapped
