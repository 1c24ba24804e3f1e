"""Create the initial administrator account.

Usage: python scripts/seed_admin.py [email] [password]
Falls back to ADMIN_EMAIL / ADMIN_PASSWORD from the environment.
"""
import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from competency_rating import create_app
from competency_rating.extensions import db
from competency_rating.models.user import User


def seed_admin(email, password, name="System Administrator"):
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        print(f"User with email {email} already exists, skipping")
        return None
    user = User(
        name=name,
        email=email,
        user_type="admin",
        position="System Administrator",
        designation="IT Administrator",
        administrative_privilege=True,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    print(f"Created admin {email} (id={user.id})")
    return user


if __name__ == '__main__':
    email = sys.argv[1] if len(sys.argv) > 1 else os.getenv('ADMIN_EMAIL')
    password = sys.argv[2] if len(sys.argv) > 2 else os.getenv('ADMIN_PASSWORD')
    if not email or not password:
        print('email and password are required (args or ADMIN_EMAIL / ADMIN_PASSWORD)')
        raise SystemExit(1)
    app = create_app()
    with app.app_context():
        seed_admin(email, password)
