import pytest

from competency_rating.errors import NotFoundError
from competency_rating.extensions import db
from competency_rating.models import User
from competency_rating.services.rating_upsert import RatingInput, submit_batch
from competency_rating.services.reports import candidate_score_report
from conftest import ITEM_HIGH, ITEM_LOW, PASSWORD_HASH


def _submit(rater_id, items):
    submit_batch(items, db.session.get(User, rater_id))


def _rate_high(seed):
    _submit(seed.chair, [
        RatingInput(seed.c_high, seed.integrity, "basic", ITEM_HIGH, 5),
        RatingInput(seed.c_high, seed.service, "basic", ITEM_HIGH, 4),
        RatingInput(seed.c_high, seed.planning, "organizational", ITEM_HIGH, 5),
        RatingInput(seed.c_high, seed.leading, "leadership", ITEM_HIGH, 5),
        RatingInput(seed.c_high, seed.writing, "minimum", ITEM_HIGH, 4),
    ])
    _submit(seed.vice, [RatingInput(seed.c_high, seed.integrity, "basic", ITEM_HIGH, 3)])


def test_report_for_senior_vacancy(ctx, seed):
    _rate_high(seed)
    report = candidate_score_report(seed.c_high)

    assert report["itemNumber"] == ITEM_HIGH
    assert report["salaryGrade"] == 20
    assert report["requiredRaters"] == ["CHAIR", "VICE", "GAD", "DENREU", "REGMEM", "END-USER"]
    assert report["ratingCount"] == 6
    assert report["ratable"] is True
    assert report["leadershipIncluded"] is True
    assert report["breakdown"] == {"basic": 1.6, "organizational": 1.0, "leadership": 1.0, "minimum": 4.0}
    assert report["psychoSocial"] == 3.2
    assert report["potential"] == 4.0

    basic = report["matrix"]["basic"]
    assert [row["name"] for row in basic] == ["Delivering Service Excellence", "Exemplifying Integrity"]
    integrity = basic[1]
    assert integrity["ordinal"] == 2
    assert integrity["average"] == 4.0
    assert integrity["cells"] == {
        "CHAIR": "5.00", "VICE": "3.00", "GAD": "-", "DENREU": "-", "REGMEM": "-", "END-USER": "-",
    }


def test_report_for_low_grade_vacancy(ctx, seed):
    _submit(seed.chair, [RatingInput(seed.c_low, seed.records, "minimum", ITEM_LOW, 5)])
    _submit(seed.regmem, [RatingInput(seed.c_low, seed.records, "minimum", ITEM_LOW, 3)])
    report = candidate_score_report(seed.c_low, rounding="end_to_end")

    assert report["rounding"] == "end_to_end"
    assert report["leadershipIncluded"] is False
    assert "leadership" not in report["matrix"]
    assert report["breakdown"]["minimum"] == 3.0
    assert report["potential"] == 3.0
    cells = report["matrix"]["minimum"][0]["cells"]
    assert cells["CHAIR"] == "NA"
    assert cells["REGMEM"] == "3.00"
    assert cells["END-USER"] == "-"


def test_report_without_ratings(ctx, seed):
    report = candidate_score_report(seed.c_no_lead)
    assert report["ratingCount"] == 0
    assert report["psychoSocial"] == 0.0
    assert report["potential"] == 0.0
    # grade 22 but no leadership competency linked to the vacancy
    assert report["leadershipIncluded"] is False


def test_report_uses_configured_rounding(app, ctx, seed):
    app.config["SCORE_ROUNDING_MODE"] = "per_step"
    assert candidate_score_report(seed.c_high)["rounding"] == "per_step"


def test_report_unknown_candidate(ctx, seed):
    with pytest.raises(NotFoundError):
        candidate_score_report(9999)


def test_report_default_rounding_matches_unrounded_chain(ctx, seed):
    _submit(seed.chair, [RatingInput(seed.c_high, seed.integrity, "basic", ITEM_HIGH, 4)])
    _submit(seed.vice, [RatingInput(seed.c_high, seed.integrity, "basic", ITEM_HIGH, 4)])
    _submit(seed.regmem, [RatingInput(seed.c_high, seed.integrity, "basic", ITEM_HIGH, 3)])
    report = candidate_score_report(seed.c_high)
    assert report["rounding"] == "end_to_end"
    assert report["psychoSocial"] == 1.47
    assert report["matrix"]["basic"][1]["average"] == 3.67


def test_raters_sharing_a_code_both_show(ctx, seed):
    second = User(name="Second Member", email="regmem2@agency.gov.ph", password_hash=PASSWORD_HASH,
                  user_type="rater", rater_type="Regular Member")
    db.session.add(second)
    db.session.commit()

    _submit(seed.regmem, [RatingInput(seed.c_low, seed.records, "minimum", ITEM_LOW, 3)])
    _submit(second.id, [RatingInput(seed.c_low, seed.records, "minimum", ITEM_LOW, 5)])
    row = candidate_score_report(seed.c_low)["matrix"]["minimum"][0]

    assert row["cells"]["REGMEM"] == "3.00 / 5.00"
    assert row["average"] == 4.0
