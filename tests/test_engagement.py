import pytest
from bizhub.models import Business
from bizhub.service.comments import add_comment
from bizhub.service.engagement import engagement_rate, recompute_engagement, toggle_follow, toggle_like


@pytest.mark.parametrize(
    "total, followers, expected",
    [
        (0, 0, 0.0),
        (5, 0, 0.0),
        (1, 1, 100.0),
        (1, 3, 33.33),
        (7, 2, 350.0),
    ],
)
def test_engagement_rate(total, followers, expected):
    assert engagement_rate(total, followers) == expected


def test_follow_and_like_scenario(store, make_business, make_post, make_client):
    business = make_business()
    post = make_post(business)
    client = make_client()

    follow = toggle_follow(store, business.id, client.id)
    assert follow.is_active and follow.count == 1

    like = toggle_like(store, post.id, client.id)
    assert like.is_active and like.count == 1

    store.session.expire_all()
    business = store.find_by_id(Business, business.id)
    assert business.followers == 1
    assert business.engagement_rate == 100.0


def test_recompute_counts_posts_products_and_comments(store, make_business, make_post, make_product, make_client):
    business = make_business()
    first = make_post(business, shares=2)
    make_post(business)
    make_product(business)
    fan, other = make_client(), make_client()

    toggle_follow(store, business.id, fan.id)
    toggle_follow(store, business.id, other.id)
    add_comment(store, first.id, fan.id, "nice")
    toggle_like(store, first.id, other.id)

    rate = recompute_engagement(store, business.id)

    # (1 like + 1 comment + 2 shares) / 2 followers
    assert rate == 200.0
    business = store.find_by_id(Business, business.id)
    assert business.total_posts == 2
    assert business.total_products == 1


def test_unfollow_drops_rate_back_to_zero(store, make_business, make_post, make_client):
    business = make_business()
    post = make_post(business)
    client = make_client()
    toggle_follow(store, business.id, client.id)
    toggle_like(store, post.id, client.id)

    toggle_follow(store, business.id, client.id)

    store.session.expire_all()
    assert store.find_by_id(Business, business.id).engagement_rate == 0.0
