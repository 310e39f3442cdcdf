from datetime import timedelta
from sqlalchemy import update
from bizhub.models import Promotion
from bizhub.utils.helper import utcnow


def iso(value):
    return value.replace(microsecond=0).isoformat()


def promotion_payload(**overrides):
    payload = {
        "name": "Summer sale",
        "description": "Everything must go",
        "discount_type": "percentage",
        "discount_value": 15,
        "start_date": iso(utcnow() - timedelta(days=1)),
        "end_date": iso(utcnow() + timedelta(days=7)),
        "platforms": ["facebook", "website"],
    }
    payload.update(overrides)
    return payload


def test_create_promotion_derives_status(client, make_business, auth):
    business = make_business()
    headers = auth(business.owner)

    res = client.post("/api/promotions", json=promotion_payload(status="expired"), headers=headers)
    assert res.status_code == 201
    promotion = res.get_json()["promotion"]
    assert promotion["status"] == "active"
    assert promotion["is_active"] is True
    assert promotion["performance"] == {"impressions": 0, "clicks": 0, "conversions": 0, "revenue": 0}

    res = client.post(
        "/api/promotions",
        json=promotion_payload(start_date=iso(utcnow() + timedelta(days=2)), end_date=None),
        headers=headers,
    )
    assert res.get_json()["promotion"]["status"] == "scheduled"


def test_create_promotion_rules(client, make_business, auth):
    headers = auth(make_business().owner)

    res = client.post("/api/promotions", json=promotion_payload(discount_value=0), headers=headers)
    assert res.status_code == 400
    assert "discount_value" in res.get_json()["errors"]

    res = client.post(
        "/api/promotions",
        json=promotion_payload(end_date=iso(utcnow() - timedelta(days=2))),
        headers=headers,
    )
    assert res.status_code == 400
    assert "end_date" in res.get_json()["errors"]

    res = client.post("/api/promotions", json=promotion_payload(type="coupon"), headers=headers)
    assert res.status_code == 400
    assert "coupon_code" in res.get_json()["errors"]


def test_update_rechecks_merged_rules_and_status(client, make_business, make_promotion, auth):
    business = make_business()
    promotion = make_promotion(business, discount_type="fixed", discount_value=5)
    headers = auth(business.owner)

    res = client.put(f"/api/promotions/{promotion.id}", json={"discount_value": 0}, headers=headers)
    assert res.status_code == 400

    res = client.put(
        f"/api/promotions/{promotion.id}",
        json={"end_date": iso(utcnow() - timedelta(hours=1)), "name": "Flash sale"},
        headers=headers,
    )
    assert res.status_code == 200
    body = res.get_json()["promotion"]
    assert body["name"] == "Flash sale"
    assert body["status"] == "expired"


def test_pause_and_resume_routes(client, make_business, make_promotion, auth):
    business = make_business()
    promotion = make_promotion(business)
    headers = auth(business.owner)

    res = client.post(f"/api/promotions/{promotion.id}/pause", headers=headers)
    assert res.get_json()["promotion"]["status"] == "paused"

    res = client.post(f"/api/promotions/{promotion.id}/pause", headers=headers)
    assert res.status_code == 400

    res = client.post(f"/api/promotions/{promotion.id}/resume", headers=headers)
    assert res.get_json()["promotion"]["status"] == "active"


def test_only_owner_manages_promotion(client, make_business, make_promotion, auth):
    promotion = make_promotion(make_business())
    intruder = make_business().owner

    assert client.delete(f"/api/promotions/{promotion.id}", headers=auth(intruder)).status_code == 403
    assert client.post(f"/api/promotions/{promotion.id}/pause", headers=auth(intruder)).status_code == 403


def test_track_increments_counters(client, store, make_business, make_promotion):
    promotion = make_promotion(make_business())

    for kind in ("impression", "impression", "click"):
        res = client.post(f"/api/promotion/{promotion.id}/track", json={"type": kind})
        assert res.get_json() == {"success": True}

    res = client.post(f"/api/promotion/{promotion.id}/track", json={"type": "conversion"})
    assert res.status_code == 400

    store.session.expire_all()
    promotion = store.find_by_id(Promotion, promotion.id)
    assert promotion.impressions == 2
    assert promotion.clicks == 1


def test_active_promotion_listing(client, make_business, make_promotion):
    business = make_business()
    running = make_promotion(business)
    make_promotion(business, start_date=utcnow() + timedelta(days=3))
    make_promotion(make_business(status="suspended"))

    res = client.get("/api/promotions?active=true")
    assert [p["id"] for p in res.get_json()["promotions"]] == [running.id]

    res = client.get(f"/api/business/{business.id}/promotions")
    assert res.get_json()["count"] == 2

    res = client.get(f"/api/promotions/{running.id}")
    assert res.get_json()["promotion"]["name"] == "Launch sale"
    assert client.get("/api/promotions/9999").status_code == 404


def test_update_rederives_status_without_column_changes(client, store, make_business, make_promotion, auth):
    business = make_business()
    promotion = make_promotion(business, end_date=utcnow() + timedelta(days=1))
    assert promotion.status == "active"

    # Let the end date pass without touching the ORM object
    store.session.execute(
        update(Promotion)
        .where(Promotion.id == promotion.id)
        .values(end_date=utcnow() - timedelta(hours=1))
        .execution_options(synchronize_session=False)
    )
    store.commit()

    res = client.put(f"/api/promotions/{promotion.id}", json={"name": "Launch sale"}, headers=auth(business.owner))
    assert res.status_code == 200
    assert res.get_json()["promotion"]["status"] == "expired"

    store.session.expire_all()
    assert store.find_by_id(Promotion, promotion.id).status == "expired"
