import pytest

from competency_rating.extensions import db
from competency_rating.models import User
from competency_rating.services.conflicts import check_existing, find_existing_for_batch
from competency_rating.services.rating_upsert import RatingInput, submit_batch
from conftest import ITEM_HIGH, ITEM_MID


def _rate(seed, rater_id, item=ITEM_HIGH):
    items = [
        RatingInput(seed.c_high, seed.integrity, "basic", item, 4),
        RatingInput(seed.c_high, seed.service, "basic", item, 3),
    ]
    submit_batch(items, db.session.get(User, rater_id))


def test_nothing_stored_yet(ctx, seed):
    assert check_existing(seed.c_high, ITEM_HIGH, rater_id=seed.chair).to_dict() == {"hasExisting": False}
    assert check_existing(seed.c_high, ITEM_HIGH, rater_type="Chairperson").to_dict() == {"hasExisting": False}


def test_own_ratings_by_rater_id(ctx, seed):
    _rate(seed, seed.chair)
    result = check_existing(seed.c_high, ITEM_HIGH, rater_id=seed.chair)
    assert result.to_dict() == {"hasExisting": True, "ratingCount": 2}
    assert not check_existing(seed.c_high, ITEM_MID, rater_id=seed.chair).has_existing
    assert not check_existing(seed.c_high, ITEM_HIGH, rater_id=seed.vice).has_existing


def test_slot_held_by_rater_type(ctx, seed):
    _rate(seed, seed.chair)
    body = check_existing(seed.c_high, ITEM_HIGH, rater_type="Chairperson").to_dict()
    assert body["hasExisting"] is True
    assert body["ratingCount"] == 2
    assert body["existingRater"] == {"id": seed.chair, "name": "Chair Person", "raterType": "Chairperson"}
    assert not check_existing(seed.c_high, ITEM_HIGH, rater_type="Vice-Chairperson").has_existing


def test_rater_type_with_no_users(ctx, seed):
    assert not check_existing(seed.c_high, ITEM_HIGH, rater_type="Observer").has_existing


def test_needs_rater_id_or_type(ctx, seed):
    with pytest.raises(ValueError):
        check_existing(seed.c_high, ITEM_HIGH)


def test_find_existing_for_batch_spans_pairs(ctx, seed):
    _rate(seed, seed.chair)
    _rate(seed, seed.chair, item=ITEM_MID)
    pairs = [(seed.c_high, ITEM_HIGH), (seed.c_high, ITEM_HIGH), (seed.c_high, ITEM_MID)]
    assert len(find_existing_for_batch(seed.chair, pairs)) == 4
    assert len(find_existing_for_batch(seed.chair, [(seed.c_high, ITEM_MID)])) == 2
    assert find_existing_for_batch(seed.vice, pairs) == []
    assert find_existing_for_batch(seed.chair, []) == []
