from datetime import timedelta
import pytest
from sqlalchemy.exc import OperationalError
from bizhub.service.analytics import get_business_analytics, create_snapshot
from bizhub.utils.dashboard_service import DashboardService
from bizhub.utils.errors import DashboardError, NotFound
from bizhub.utils.helper import utcnow


@pytest.fixture
def populated(store, make_business, make_post, make_product, make_promotion):
    business = make_business(followers=4)
    base = utcnow() - timedelta(days=1)
    for i in range(6):
        make_post(
            business,
            content=f"Post number {i} with a fairly long body of text",
            likes_count=i,
            comments_count=1,
            shares=2,
            platforms=["facebook", "instagram"] if i % 2 else ["twitter"],
            created_at=base + timedelta(minutes=2 * i),
        )
    for i in range(6):
        make_product(
            business,
            name=f"Product {i}",
            price=2.5,
            total_sold=i,
            created_at=base + timedelta(minutes=2 * i + 1),
        )
    make_promotion(business)
    make_promotion(business, start_date=utcnow() + timedelta(days=2))
    return business


def test_dashboard_totals(store, populated):
    dashboard = DashboardService.get_dashboard(store, populated.id)
    stats = dashboard["stats"]

    assert stats["totalPosts"] == 6
    assert stats["totalProducts"] == 6
    assert stats["totalPromotions"] == 1
    # likes 0..5 = 15, comments 6, shares 12
    assert stats["totalEngagement"] == 33
    # total_sold 0..5 = 15, times 2.5
    assert stats["totalRevenue"] == 37.5
    assert stats["followers"] == 4
    assert dashboard["business"]["name"] == populated.name


def test_recent_activity_is_merged_newest_first(store, populated):
    activity = DashboardService.get_dashboard(store, populated.id)["recentActivity"]

    assert len(activity) == 10
    times = [item["time"] for item in activity]
    assert times == sorted(times, reverse=True)
    assert len(set(times)) == len(times)
    assert activity[0]["type"] == "product"
    assert activity[0]["description"] == "New product added: Product 5"
    assert activity[0]["engagement"] == "5 sales"
    assert activity[1]["type"] == "post"
    assert activity[1]["description"] == 'New post: "Post number 5 with a fairly lo..."'
    assert activity[1]["engagement"] == "5 likes, 1 comments"


def test_platform_performance_groups_by_tag(store, populated):
    performance = DashboardService.get_dashboard(store, populated.id)["platformPerformance"]

    assert [group["platform"] for group in performance] == ["facebook", "instagram", "twitter"]
    facebook = performance[0]
    # odd posts: likes 1, 3, 5
    assert facebook["count"] == 3
    assert facebook["totalEngagement"] == (1 + 3 + 5) + 3 * 3
    assert performance[2]["count"] == 3


def test_platform_performance_skips_untagged_posts(store, make_business, make_post):
    business = make_business()
    make_post(business, platforms=[])
    assert DashboardService.get_dashboard(store, business.id)["platformPerformance"] == []


def test_dashboard_for_unknown_business(store):
    with pytest.raises(NotFound):
        DashboardService.get_dashboard(store, 9999)


def test_database_failure_surfaces_as_dashboard_error(store, make_business, monkeypatch):
    business = make_business()

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(DashboardService, "get_recent_activity", staticmethod(broken))
    with pytest.raises(DashboardError) as excinfo:
        DashboardService.get_dashboard(store, business.id)
    assert excinfo.value.code == 500
    assert excinfo.value.data["message"] == "Failed to fetch dashboard"


def test_platform_stats_and_table(store, populated, make_business):
    make_business(status="pending", verified=False)

    stats = DashboardService.get_platform_stats(store)
    assert stats["totalBusinesses"] == 2
    assert stats["pendingApprovals"] == 1
    assert stats["activeBusinesses"] == 1
    assert stats["totalRevenue"] == 37.5

    table = DashboardService.get_business_analytics_table(store)
    row = next(r for r in table if r["businessId"] == populated.id)
    assert row["totalPosts"] == 6
    assert row["totalPromotions"] == 1
    assert row["totalEngagement"] == 33
    assert row["revenue"] == 37.5


def test_business_analytics_creates_snapshot_once(store, populated):
    first = get_business_analytics(store, populated, populated.owner_id)
    second = get_business_analytics(store, populated, populated.owner_id)

    assert first["analytics"]["revenue"] == 37.5
    assert first["analytics"]["posts"] == 6
    assert first["detailedAnalytics"]["id"] == second["detailedAnalytics"]["id"]
    assert first["detailedAnalytics"]["likes"] == 15


def test_snapshot_growth_is_relative_to_previous(store, populated):
    create_snapshot(store, populated, populated.owner_id)
    populated.followers = 10
    store.commit()

    snapshot = create_snapshot(store, populated, populated.owner_id)
    assert snapshot.followers_total == 10
    assert snapshot.followers_growth == 6
