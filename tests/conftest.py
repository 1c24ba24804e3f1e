import os
import sys
from datetime import date
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from competency_rating import create_app
from competency_rating.extensions import db
from competency_rating.models import Candidate, Competency, PublicationRange, User, Vacancy

PASSWORD = "secret123"
# low-cost hash so fixtures stay fast
PASSWORD_HASH = generate_password_hash(PASSWORD, method="pbkdf2:sha256:1000")

ITEM_LOW = "OSEC-DENRB-ADA4-1-2026"
ITEM_MID = "OSEC-DENRB-PLO2-1-2026"
ITEM_HIGH = "OSEC-DENRB-CHF1-1-2026"
ITEM_NO_LEADERSHIP = "OSEC-DENRB-ENG5-1-2026"


def _user(name, email, user_type="rater", rater_type=None, privileged=False):
    return User(
        name=name,
        email=email,
        password_hash=PASSWORD_HASH,
        user_type=user_type,
        rater_type=rater_type,
        administrative_privilege=privileged,
    )


def _seed():
    pub = PublicationRange(name="2026 First Call", start_date=date(2026, 1, 1), end_date=date(2026, 3, 31))
    db.session.add(pub)
    db.session.flush()

    def vacancy(item, sg, position):
        v = Vacancy(item_number=item, position=position, assignment="Central Office",
                    salary_grade=sg, publication_range_id=pub.id)
        db.session.add(v)
        return v

    v_low = vacancy(ITEM_LOW, 12, "Administrative Assistant IV")
    v_mid = vacancy(ITEM_MID, 17, "Planning Officer II")
    v_high = vacancy(ITEM_HIGH, 20, "Chief Administrative Officer")
    v_no_lead = vacancy(ITEM_NO_LEADERSHIP, 22, "Engineer V")

    integrity = Competency(name="Exemplifying Integrity", type="basic", is_fixed=True)
    service = Competency(name="Delivering Service Excellence", type="basic", is_fixed=True)
    planning = Competency(name="Planning and Organizing", type="organizational", is_fixed=True)
    leading = Competency(name="Leading Change", type="leadership", vacancies=[v_high])
    writing = Competency(name="Technical Writing", type="minimum", vacancies=[v_mid, v_high])
    records = Competency(name="Records Management", type="minimum", vacancies=[v_low])
    orphan = Competency(name="Legacy Competency", type="basic")
    db.session.add_all([integrity, service, planning, leading, writing, records, orphan])

    def candidate(name, item):
        c = Candidate(full_name=name, item_number=item, status="long_list", publication_range_id=pub.id)
        db.session.add(c)
        return c

    c_low = candidate("Juan Dela Cruz", ITEM_LOW)
    c_mid = candidate("Maria Santos", ITEM_MID)
    c_high = candidate("Jose Rizal", ITEM_HIGH)
    c_no_lead = candidate("Andres Reyes", ITEM_NO_LEADERSHIP)

    users = {
        "chair": _user("Chair Person", "chair@agency.gov.ph", rater_type="Chairperson"),
        "vice": _user("Vice Chair", "vice@agency.gov.ph", rater_type="Vice-Chairperson"),
        "regmem": _user("Regular Member", "regmem@agency.gov.ph", rater_type="Regular Member"),
        "denreu": _user("Union Rep", "denreu@agency.gov.ph", rater_type="DENREU"),
        "gad": _user("GAD Focal", "gad@agency.gov.ph", rater_type="Gender and Development"),
        "end_user": _user("End User", "enduser@agency.gov.ph", rater_type="End-User"),
        "admin": _user("System Administrator", "admin@agency.gov.ph", user_type="admin"),
        "hr": _user("HR Secretariat", "hr@agency.gov.ph", user_type="secretariat", privileged=True),
        "clerk": _user("Clerk", "clerk@agency.gov.ph", user_type="secretariat"),
    }
    db.session.add_all(users.values())
    db.session.commit()

    return SimpleNamespace(
        publication_range=pub.id,
        v_low=v_low.id, v_mid=v_mid.id, v_high=v_high.id, v_no_lead=v_no_lead.id,
        integrity=integrity.id, service=service.id, planning=planning.id, leading=leading.id,
        writing=writing.id, records=records.id, orphan=orphan.id,
        c_low=c_low.id, c_mid=c_mid.id, c_high=c_high.id, c_no_lead=c_no_lead.id,
        **{name: u.id for name, u in users.items()},
    )


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seed(app):
    with app.app_context():
        return _seed()


@pytest.fixture
def ctx(app, seed):
    """App context for tests that call services directly."""
    with app.app_context():
        yield


@pytest.fixture
def client(app, seed):
    return app.test_client()


def login(client, user_id):
    with client.session_transaction() as sess:
        sess["_user_id"] = str(user_id)
        sess["_fresh"] = True
