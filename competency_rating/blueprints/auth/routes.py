from flask import current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from ...forms import LoginForm
from ...models.user import User


@bp.route("/login", methods=["POST"])
def login():
    # JSON bodies are picked up by Flask-WTF as form data
    form = LoginForm()
    if not form.validate():
        return jsonify({"message": "Email and password are required", "errors": form.errors}), 400
    user = User.query.filter_by(email=form.email.data.strip().lower()).first()
    if user is None or not user.check_password(form.password.data):
        current_app.logger.warning("failed login for %s", form.email.data)
        return jsonify({"message": "Invalid credentials"}), 401
    login_user(user)
    return jsonify({"message": "Logged in", "user": _me(user)})


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"message": "Logged out"})


@bp.get("/me")
@login_required
def me():
    return jsonify(_me(current_user))


def _me(user):
    body = user.to_summary()
    body.update(
        email=user.email,
        userType=user.user_type,
        administrativePrivilege=bool(user.administrative_privilege),
    )
    return body
