from decimal import Decimal

import pytest
from kungfu import Nothing, Some

from referral_discount import DiscountKind, ResolverSettings, normalize_kind
from referral_discount.signals import (
    AppDiscountTier,
    CartTier,
    SignalOrigin,
    TierSignals,
    extract_tiers,
    first_present,
    parse_amount,
    parse_percentage,
)
from tests.helpers import some_value, tiered


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15", Decimal("15")),
        ("12.5", Decimal("12.5")),
        ("-3", Decimal("-3")),
        (Decimal("7"), Decimal("7")),
        ("+5", Decimal("5")),
        ("1.", Decimal("1")),
        (".5", Decimal("0.5")),
        ("1.5e1", Decimal("15")),
        ("1E308", Decimal("1E308")),
        ("1E-50000000", Decimal("1E-50000000")),
    ],
)
def test_parse_percentage_reads_decimals(raw, expected):
    assert some_value(parse_percentage(raw)) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "abc",
        "10%",
        "NaN",
        "Infinity",
        Decimal("NaN"),
        " 15 ",
        "15\n",
        "1_5",
        "+-5",
        "1E309",
        "1E999999999",
        "-1E50000000",
        Decimal("1E400"),
    ],
)
def test_parse_percentage_unreadable_is_absent(raw):
    assert isinstance(parse_percentage(raw), Nothing)


def test_parse_amount_defaults_to_zero():
    assert parse_amount("not-money") == Decimal("0")
    assert parse_amount(None) == Decimal("0")
    assert parse_amount("49.99") == Decimal("49.99")


@pytest.mark.parametrize(
    "raw, kind",
    [
        (None, DiscountKind.PERCENTAGE),
        ("", DiscountKind.PERCENTAGE),
        ("percentage", DiscountKind.PERCENTAGE),
        ("fixed_amount", DiscountKind.FIXED_AMOUNT),
        ("fixed", DiscountKind.FIXED_AMOUNT),
        ("Percentage", DiscountKind.FIXED_AMOUNT),
    ],
)
def test_normalize_kind(raw, kind):
    assert normalize_kind(raw) is kind


def test_extract_tiers_keeps_priority_order(settings):
    ctx = tiered(
        app=AppDiscountTier(percentage="20"),
        metafield=CartTier(code="META", percentage="15"),
        attribute=CartTier(code="ATTR", percentage="oops"),
    )
    app, meta, attr = extract_tiers(ctx, settings)

    assert [t.origin for t in (app, meta, attr)] == [
        SignalOrigin.APP_DISCOUNT,
        SignalOrigin.CART_METAFIELD,
        SignalOrigin.CART_ATTRIBUTE,
    ]
    assert isinstance(app.code, Nothing)
    assert some_value(meta.code) == "META"
    assert isinstance(attr.percentage, Nothing)


def test_extract_tiers_metafields_only_drops_attributes():
    ctx = tiered(attribute=CartTier(code="ATTR"))
    tiers = extract_tiers(ctx, ResolverSettings(metafields_only=True))

    assert [t.origin for t in tiers] == [
        SignalOrigin.APP_DISCOUNT,
        SignalOrigin.CART_METAFIELD,
    ]


class TestFirstPresent:
    def test_first_some_wins(self):
        tiers = (
            TierSignals(SignalOrigin.APP_DISCOUNT),
            TierSignals(SignalOrigin.CART_METAFIELD, percentage=Some(Decimal("15"))),
            TierSignals(SignalOrigin.CART_ATTRIBUTE, percentage=Some(Decimal("5"))),
        )
        pick = first_present(tiers, lambda t: t.percentage, Decimal("10.0"))

        assert pick.value == Decimal("15")
        assert pick.origin is SignalOrigin.CART_METAFIELD

    def test_default_when_all_absent(self):
        tiers = (TierSignals(SignalOrigin.APP_DISCOUNT), TierSignals(SignalOrigin.CART_ATTRIBUTE))
        pick = first_present(tiers, lambda t: t.type, "percentage")

        assert pick.value == "percentage"
        assert pick.origin is SignalOrigin.DEFAULT

    def test_present_empty_string_still_wins(self):
        tiers = (
            TierSignals(SignalOrigin.CART_METAFIELD, code=Some("")),
            TierSignals(SignalOrigin.CART_ATTRIBUTE, code=Some("SAVE5")),
        )
        pick = first_present(tiers, lambda t: t.code, "")

        assert pick.value == ""
        assert pick.origin is SignalOrigin.CART_METAFIELD

    def test_fields_resolve_independently(self):
        tiers = (
            TierSignals(SignalOrigin.APP_DISCOUNT, type=Some("fixed_amount")),
            TierSignals(SignalOrigin.CART_METAFIELD, percentage=Some(Decimal("25"))),
        )
        assert first_present(tiers, lambda t: t.type, "").origin is SignalOrigin.APP_DISCOUNT
        assert (
            first_present(tiers, lambda t: t.percentage, Decimal("10")).origin
            is SignalOrigin.CART_METAFIELD
        )
