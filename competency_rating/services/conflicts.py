from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, or_

from ..models.rating import Rating
from ..models.user import User


@dataclass
class ExistingCheck:
    has_existing: bool
    existing_rater: Optional[dict] = None
    rating_count: int = 0

    def to_dict(self):
        if not self.has_existing:
            return {"hasExisting": False}
        body = {"hasExisting": True, "ratingCount": self.rating_count}
        if self.existing_rater is not None:
            body["existingRater"] = self.existing_rater
        return body


def find_existing_for_batch(rater_id, pairs):
    """Ratings the rater already holds across distinct (candidate_id, item_number) pairs."""
    pairs = list(dict.fromkeys(pairs))
    if not pairs:
        return []
    clause = or_(*[and_(Rating.candidate_id == cid, Rating.item_number == item) for cid, item in pairs])
    return Rating.query.filter(Rating.rater_id == rater_id).filter(clause).all()


def check_existing(candidate_id, item_number, rater_id=None, rater_type=None):
    """Existing ratings for a candidate and item number.

    With ``rater_id`` the check is for that rater's own ratings (create vs
    update flow). With ``rater_type`` it looks for any rater of that type,
    so one rater-type slot is not filled twice, and names who holds it.
    """
    if rater_id is None and not rater_type:
        raise ValueError("check_existing needs rater_id or rater_type")

    query = Rating.query.filter_by(candidate_id=candidate_id, item_number=item_number)
    if rater_id is not None:
        count = query.filter(Rating.rater_id == rater_id).count()
        return ExistingCheck(has_existing=count > 0, rating_count=count)

    rater_ids = [u.id for u in User.query.filter_by(rater_type=rater_type).with_entities(User.id)]
    if not rater_ids:
        return ExistingCheck(has_existing=False)
    existing = query.filter(Rating.rater_id.in_(rater_ids)).order_by(Rating.id).all()
    if not existing:
        return ExistingCheck(has_existing=False)
    holder = existing[0].rater
    return ExistingCheck(
        has_existing=True,
        existing_rater={"id": holder.id, "name": holder.name, "raterType": holder.rater_type},
        rating_count=len(existing),
    )
