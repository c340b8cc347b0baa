import pytest
from fastapi.testclient import TestClient

from referral_discount import ResolverSettings
from referral_discount.service import ONE_TIME_CODE_PATH, TIERED_PATH, create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ResolverSettings()))


def candidate(body: dict) -> dict:
    (operation,) = body["operations"]
    (cand,) = operation["orderDiscountsAdd"]["candidates"]
    return cand


def test_tiered_endpoint_applies_legacy_code(client):
    resp = client.post(
        TIERED_PATH,
        json={
            "discount": {"discountClasses": ["ORDER"]},
            "cart": {
                "cost": {"totalAmount": {"amount": "80.00"}},
                "referralShopifyDiscountCode": {"value": "SAVE5"},
            },
        },
    )

    assert resp.status_code == 200
    cand = candidate(resp.json())
    assert cand["value"] == {"percentage": {"value": "10.0"}}
    assert cand["associatedDiscountCode"] == {"code": "SAVE5"}
    assert cand["message"] == "Referral Discount (10%)"


def test_tiered_endpoint_without_order_class(client):
    resp = client.post(
        TIERED_PATH,
        json={
            "discount": {
                "discountClasses": ["PRODUCT"],
                "metafieldDiscountPercentage": {"value": "15"},
            },
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {"operations": []}


def test_one_time_code_endpoint_drops_code(client):
    resp = client.post(
        ONE_TIME_CODE_PATH,
        json={
            "discount": {"discountClasses": ["ORDER"]},
            "cart": {
                "cost": {"totalAmount": {"amount": "12"}},
                "referralOneTimeCode": {"value": "GACHI-BOB-Z9"},
                "referralDiscountPercentage": {"value": "20"},
                "referralDiscountType": {"value": "fixed_amount"},
            },
        },
    )

    assert resp.status_code == 200
    cand = candidate(resp.json())
    assert cand["value"] == {"fixedAmount": {"amount": "12"}}
    assert cand["associatedDiscountCode"] is None


def test_routes_are_post_only(client):
    assert client.get(TIERED_PATH).status_code == 405


def test_application_lists_routes():
    from referral_discount.ops import discount_runner
    from referral_discount.wire import HTTPRouteTrigger, application, endpoint
    from referral_discount.wire.codecs.function import ONE_TIME_CODE_CODEC, TIERED_CODEC

    endp = (
        endpoint(discount_runner())
        .expose(HTTPRouteTrigger("POST", "/a"), TIERED_CODEC)
        .expose(HTTPRouteTrigger("POST", "/b"), ONE_TIME_CODE_CODEC)
    )
    assert application().mount(endp).routes() == [("POST", "/a"), ("POST", "/b")]


def test_route_path_must_be_absolute():
    from referral_discount.wire import HTTPRouteTrigger

    with pytest.raises(ValueError, match="must start with"):
        HTTPRouteTrigger("POST", "discounts/tiered")
