from datetime import datetime, timedelta
import pytest
from bizhub.models import Promotion
from bizhub.service import promotion_lifecycle as lifecycle
from bizhub.utils.errors import ValidationError
from bizhub.utils.helper import utcnow

NOW = datetime(2024, 6, 1, 12, 0, 0)
DAY = timedelta(days=1)


@pytest.mark.parametrize(
    "start, end, current, expected",
    [
        (NOW + DAY, None, "draft", "scheduled"),
        (NOW + DAY, NOW + 2 * DAY, "active", "scheduled"),
        (NOW - DAY, None, "draft", "active"),
        (NOW - 2 * DAY, NOW - DAY, "active", "expired"),
        (NOW - 2 * DAY, NOW - DAY, "paused", "expired"),
        (NOW - DAY, None, "paused", "paused"),
        (NOW - DAY, NOW + DAY, "active", "active"),
        (NOW, None, "draft", "active"),
        (NOW - DAY, None, "scheduled", "active"),
    ],
)
def test_derive_status(start, end, current, expected):
    assert lifecycle.derive_status(start, end, current, NOW) == expected


def test_is_active_window():
    assert lifecycle.is_active("active", NOW - DAY, None, NOW)
    assert lifecycle.is_active("active", NOW - DAY, NOW + DAY, NOW)
    assert not lifecycle.is_active("active", NOW - DAY, NOW, NOW)
    assert not lifecycle.is_active("paused", NOW - DAY, None, NOW)
    assert not lifecycle.is_active("active", NOW + DAY, None, NOW)


def test_status_is_derived_on_insert(store, make_business, make_promotion):
    business = make_business()
    running = make_promotion(business, start_date=utcnow() - DAY)
    upcoming = make_promotion(business, start_date=utcnow() + DAY)
    finished = make_promotion(business, start_date=utcnow() - 3 * DAY, end_date=utcnow() - DAY)

    assert running.status == "active"
    assert running.is_active
    assert upcoming.status == "scheduled"
    assert finished.status == "expired"


def test_status_is_rederived_on_update(store, make_business, make_promotion):
    promotion = make_promotion(make_business(), start_date=utcnow() + DAY)
    assert promotion.status == "scheduled"

    promotion.start_date = utcnow() - DAY
    store.commit(Promotion)

    assert promotion.status == "active"

    promotion.end_date = utcnow() - timedelta(hours=1)
    store.commit(Promotion)
    assert promotion.status == "expired"


def test_pause_and_resume(store, make_business, make_promotion):
    promotion = make_promotion(make_business())
    assert promotion.status == "active"

    lifecycle.pause(promotion)
    store.commit(Promotion)
    assert promotion.status == "paused"
    assert not promotion.is_active
    assert store.count(Promotion, Promotion.is_active) == 0

    lifecycle.resume(promotion)
    store.commit(Promotion)
    assert promotion.status == "active"
    assert store.count(Promotion, Promotion.is_active) == 1


def test_pause_requires_active_and_resume_requires_paused(store, make_business, make_promotion):
    promotion = make_promotion(make_business(), start_date=utcnow() + DAY)

    with pytest.raises(ValidationError):
        lifecycle.pause(promotion)
    with pytest.raises(ValidationError):
        lifecycle.resume(promotion)


def test_resume_after_end_goes_to_expired():
    promotion = Promotion(status="paused", start_date=NOW - 2 * DAY, end_date=NOW - DAY)
    lifecycle.resume(promotion, now=NOW)
    assert promotion.status == "expired"


def test_coupon_codes_are_uppercased():
    promotion = Promotion(coupon_code=" save10 ")
    assert promotion.coupon_code == "SAVE10"
