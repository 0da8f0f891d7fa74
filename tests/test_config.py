import pytest

from checkout_gateway.infra.config import load_gateway_config
from checkout_gateway.services.payments.config_validator import (
    require_webhook_secret,
    validate_checkout_config,
)
from checkout_gateway.services.payments.errors import ConfigurationError


def test_load_defaults_from_empty_env():
    cfg = load_gateway_config({})
    assert cfg.api_key is None
    assert cfg.product_id is None
    assert cfg.environment == "test_mode"
    assert cfg.payment_provider == "dodo"
    assert cfg.port == 3000
    assert cfg.provider_timeout_sec == 15.0
    assert cfg.success_path == "/success"
    assert cfg.cors_allow_origins == ["*"]


def test_load_full_env():
    cfg = load_gateway_config(
        {
            "DODO_PAYMENTS_API_KEY": " key ",
            "DODO_PAYMENTS_ENVIRONMENT": "live",
            "PRODUCT_ID": "pdt_1",
            "PRODUCT_QUANTITY": "2",
            "DODO_WEBHOOK_SECRET": "whsec",
            "CUSTOMER_NAME": "Ada",
            "CUSTOMER_EMAIL": "ada@example.com",
            "PORT": "8080",
            "PROVIDER_TIMEOUT_SEC": "5",
            "CORS_ALLOW_ORIGINS": "https://a.example, https://b.example",
        }
    )
    assert cfg.api_key == "key"
    assert cfg.environment == "live_mode"
    assert cfg.product_id == "pdt_1"
    assert cfg.product_quantity == "2"
    assert cfg.webhook_secret == "whsec"
    assert cfg.port == 8080
    assert cfg.provider_timeout_sec == 5.0
    assert cfg.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_stripe_provider_uses_stripe_key():
    cfg = load_gateway_config({"PAYMENT_PROVIDER": "stripe", "STRIPE_SECRET_KEY": "sk_test_1"})
    assert cfg.payment_provider == "stripe"
    assert cfg.api_key == "sk_test_1"


@pytest.mark.parametrize(
    "env,kind",
    [
        ({"DODO_PAYMENTS_ENVIRONMENT": "staging"}, "invalid_environment"),
        ({"PORT": "eighty"}, "invalid_value"),
        ({"PROVIDER_TIMEOUT_SEC": "0"}, "invalid_value"),
        ({"PAYMENT_PROVIDER": "paypal"}, "invalid_value"),
    ],
)
def test_bad_env_values_fail_at_load(env, kind):
    with pytest.raises(ConfigurationError) as exc:
        load_gateway_config(env)
    assert exc.value.kind == kind


def test_config_is_immutable():
    cfg = load_gateway_config({})
    with pytest.raises(Exception):
        cfg.api_key = "changed"


@pytest.mark.parametrize(
    "env,kind",
    [
        ({"PRODUCT_ID": "p1"}, "missing_api_key"),
        ({"DODO_PAYMENTS_API_KEY": "k"}, "missing_product_id"),
        ({"DODO_PAYMENTS_API_KEY": "your-api-key-here", "PRODUCT_ID": "p1"}, "placeholder_value"),
        ({"DODO_PAYMENTS_API_KEY": "k", "PRODUCT_ID": "your-product-id"}, "placeholder_value"),
        ({}, "missing_api_key"),
    ],
)
def test_validate_checkout_config_rejects(env, kind):
    with pytest.raises(ConfigurationError) as exc:
        validate_checkout_config(load_gateway_config(env))
    assert exc.value.kind == kind


def test_validate_checkout_config_accepts():
    validate_checkout_config(load_gateway_config({"DODO_PAYMENTS_API_KEY": "k", "PRODUCT_ID": "p1"}))


def test_require_webhook_secret():
    with pytest.raises(ConfigurationError) as exc:
        require_webhook_secret(load_gateway_config({}).webhook_secret)
    assert exc.value.kind == "missing_webhook_secret"
    with pytest.raises(ConfigurationError) as exc:
        require_webhook_secret("your-webhook-secret")
    assert exc.value.kind == "missing_webhook_secret"
    assert require_webhook_secret(load_gateway_config({"DODO_PAYMENTS_WEBHOOK_SECRET": " s "}).webhook_secret) == "s"
