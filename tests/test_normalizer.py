import asyncio

import pytest

from checkout_gateway.services.payments.errors import (
    CheckoutValidationError,
    ConfigurationError,
    ProviderAuthError,
    ProviderError,
    ProviderRequestError,
    ProviderUnavailableError,
)
from checkout_gateway.services.payments.models import CheckoutErrorKind, CheckoutFailure, CheckoutSuccess
from checkout_gateway.services.payments.normalizer import (
    normalize_provider_error,
    normalize_provider_result,
)


def test_success_passes_both_fields_through_unmodified():
    result = normalize_provider_result({"session_id": "cks_1", "checkout_url": "https://pay/cks_1?x=1", "extra": 1})
    assert isinstance(result, CheckoutSuccess)
    assert result.model_dump(by_alias=True) == {"sessionId": "cks_1", "checkoutUrl": "https://pay/cks_1?x=1"}


def test_camel_case_provider_keys_accepted():
    result = normalize_provider_result({"sessionId": "s", "checkoutUrl": "u"})
    assert isinstance(result, CheckoutSuccess)
    assert (result.session_id, result.checkout_url) == ("s", "u")


def test_attribute_style_result_accepted():
    class SdkObject:
        session_id = "s"
        checkout_url = "u"

    assert isinstance(normalize_provider_result(SdkObject()), CheckoutSuccess)


@pytest.mark.parametrize(
    "raw",
    [
        {"session_id": "s1"},
        {"checkout_url": "https://pay/s1"},
        {"session_id": "", "checkout_url": "https://pay/s1"},
        {"session_id": "s1", "checkout_url": None},
        {},
        None,
    ],
)
def test_incomplete_response_is_never_partial_success(raw):
    result = normalize_provider_result(raw)
    assert isinstance(result, CheckoutFailure)
    assert result.error_kind is CheckoutErrorKind.INCOMPLETE_PROVIDER_RESPONSE


@pytest.mark.parametrize(
    "exc,kind",
    [
        (ConfigurationError("no key"), CheckoutErrorKind.NOT_CONFIGURED),
        (ProviderAuthError("401 unauthorized"), CheckoutErrorKind.NOT_CONFIGURED),
        (ProviderUnavailableError("connect timeout"), CheckoutErrorKind.PROVIDER_UNAVAILABLE),
        (asyncio.TimeoutError(), CheckoutErrorKind.PROVIDER_UNAVAILABLE),
        (ProviderRequestError("422 bad product"), CheckoutErrorKind.INVALID_REQUEST),
        (CheckoutValidationError("bad qty"), CheckoutErrorKind.INVALID_REQUEST),
        (ProviderError("weird"), CheckoutErrorKind.UNKNOWN),
        (RuntimeError("boom"), CheckoutErrorKind.UNKNOWN),
    ],
)
def test_error_kinds_are_from_closed_set(exc, kind):
    failure = normalize_provider_error(exc)
    assert failure.error_kind is kind
    assert failure.message


def test_error_details_preserve_underlying_message():
    failure = normalize_provider_error(ProviderRequestError("product pdt_x does not exist"))
    assert failure.details == "product pdt_x does not exist"


def test_empty_error_message_falls_back_to_class_name():
    failure = normalize_provider_error(asyncio.TimeoutError())
    assert failure.details == "TimeoutError"
