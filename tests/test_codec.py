import json
from decimal import Decimal

import pytest

from referral_discount import DiscountClass
from referral_discount.ops import ResolveOneTimeCode, ResolveTiered
from referral_discount.resolve import (
    AssociatedDiscountCode,
    DiscountDecision,
    FixedAmount,
    OrderDiscountOperation,
    Percentage,
)
from referral_discount.ops import discount_runner
from referral_discount.wire import HTTPRouteTrigger, endpoint
from referral_discount.wire.codecs import FunctionInputError, RequestResponseCodec
from referral_discount.wire.codecs.function import (
    ONE_TIME_CODE_CODEC,
    TIERED_CODEC,
    FunctionResult,
    ValueField,
)

TIERED_DOC = {
    "discount": {
        "discountClasses": ["ORDER", "PRODUCT", "SOMETHING_NEW"],
        "metafieldDiscountPercentage": {"value": "15"},
        "metafieldDiscountType": None,
    },
    "cart": {
        "cost": {"totalAmount": {"amount": "100.0"}},
        "metafieldShopifyDiscountCode": {"value": "GACHI-ALICE"},
        "metafieldDiscountPercentage": {"value": 20},
        "referralShopifyDiscountCode": {"value": None},
        "referralDiscountType": {"value": "fixed_amount"},
        "lines": [],
    },
}


def test_tiered_input_to_domain():
    op = TIERED_CODEC.decode(json.dumps(TIERED_DOC))

    assert isinstance(op, ResolveTiered)
    ctx = op.context
    assert ctx.discount_classes == frozenset({DiscountClass.ORDER, DiscountClass.PRODUCT})
    assert ctx.cart_total == "100.0"
    assert ctx.app_discount.percentage == "15"
    assert ctx.app_discount.type is None
    assert ctx.cart_metafield.code == "GACHI-ALICE"
    assert ctx.cart_metafield.percentage == "20"
    assert ctx.cart_attribute.code is None
    assert ctx.cart_attribute.type == "fixed_amount"


def test_empty_document_is_all_absent():
    ctx = TIERED_CODEC.decode("{}").context

    assert ctx.discount_classes == frozenset()
    assert ctx.cart_total == "0"
    assert ctx.cart_metafield.code is None


def test_null_sections_are_absent():
    doc = {"discount": None, "cart": {"cost": None}}
    ctx = TIERED_CODEC.decode(json.dumps(doc)).context
    assert ctx.discount_classes == frozenset()


def test_one_time_code_input_to_domain():
    doc = {
        "discount": {"discountClasses": ["ORDER"]},
        "cart": {
            "cost": {"totalAmount": {"amount": 42}},
            "referralOneTimeCode": {"value": "GACHI-ALICE-K2"},
            "referralDiscountPercentage": {"value": "25"},
        },
    }
    op = ONE_TIME_CODE_CODEC.decode(json.dumps(doc))

    assert isinstance(op, ResolveOneTimeCode)
    assert op.context.code == "GACHI-ALICE-K2"
    assert op.context.cart_total == "42"
    assert op.context.percentage == "25"
    assert op.context.type is None


@pytest.mark.parametrize("raw", ["not json", "[]", '"text"'])
def test_non_object_documents_raise(raw):
    with pytest.raises(FunctionInputError) as exc_info:
        TIERED_CODEC.decode(raw)
    assert exc_info.value.code == "invalid_input"


def test_undecodable_bytes_raise():
    with pytest.raises(FunctionInputError, match="not UTF-8"):
        TIERED_CODEC.decode(b'{"cart": {"metafieldShopifyDiscountCode": {"value": "\xff"}}}')


def test_bytes_documents_decode():
    op = TIERED_CODEC.decode(json.dumps(TIERED_DOC).encode())
    assert op.context.cart_metafield.code == "GACHI-ALICE"


@pytest.mark.parametrize(
    "value, text",
    [(20, "20"), (12.5, "12.5"), (True, None), (10**400, None), ({"a": 1}, None)],
)
def test_value_field_text(value, text):
    assert ValueField(value=value).text() == text


def test_empty_decision_output():
    out = json.loads(FunctionResult.from_decision(DiscountDecision.empty()).to_json())
    assert out == {"operations": []}


def test_percentage_output_shape():
    decision = DiscountDecision.single(
        OrderDiscountOperation(
            message="Referral Discount (15%)",
            value=Percentage(Decimal("15")),
        )
    )
    out = json.loads(FunctionResult.from_decision(decision).to_json())

    assert out == {
        "operations": [
            {
                "orderDiscountsAdd": {
                    "selectionStrategy": "FIRST",
                    "candidates": [
                        {
                            "targets": [{"orderSubtotal": {"excludedCartLineIds": []}}],
                            "message": "Referral Discount (15%)",
                            "value": {"percentage": {"value": "15"}},
                            "conditions": None,
                            "associatedDiscountCode": None,
                        }
                    ],
                }
            }
        ]
    }


def test_fixed_amount_output_with_code():
    decision = DiscountDecision.single(
        OrderDiscountOperation(
            message="Referral Discount (50%)",
            value=FixedAmount(Decimal("30")),
            associated_discount_code=AssociatedDiscountCode("SAVE5"),
        )
    )
    out = json.loads(FunctionResult.from_decision(decision).to_json())
    candidate = out["operations"][0]["orderDiscountsAdd"]["candidates"][0]

    assert candidate["value"] == {"fixedAmount": {"amount": "30"}}
    assert candidate["associatedDiscountCode"] == {"code": "SAVE5"}


def test_codec_knows_its_op_type():
    assert TIERED_CODEC.op_type is ResolveTiered
    assert ONE_TIME_CODE_CODEC.op_type is ResolveOneTimeCode


def test_expose_rejects_op_the_runner_cannot_handle():
    from referral_discount.ops import ops

    empty_runner = ops().compile()
    with pytest.raises(ValueError, match="does not handle"):
        endpoint(empty_runner).expose(HTTPRouteTrigger("POST", "/tiered"), TIERED_CODEC)

    # the full runner handles both strategies
    endp = endpoint(discount_runner()).expose(HTTPRouteTrigger("POST", "/tiered"), TIERED_CODEC)
    assert len(endp.exposures) == 1


def test_encode_error_result_is_empty():
    from kungfu import Error

    assert TIERED_CODEC.encode(Error("boom")) == FunctionResult()


def test_codec_rejects_non_pydantic_request():
    class Plain:
        def to_domain(self) -> ResolveTiered: ...

    with pytest.raises(TypeError):
        RequestResponseCodec(Plain, FunctionResult).decode("{}")
