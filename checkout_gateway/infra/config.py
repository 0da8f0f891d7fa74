import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from checkout_gateway.services.payments.errors import ConfigurationError

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_PROVIDER_TIMEOUT_SEC = 15.0
DEFAULT_SUCCESS_PATH = "/success"
DEFAULT_SOURCE_TAG = "web_checkout"

_ENVIRONMENT_ALIASES = {
    "test": "test_mode",
    "test_mode": "test_mode",
    "live": "live_mode",
    "live_mode": "live_mode",
}


class GatewayConfig(BaseModel):
    """Process-wide configuration. Built once at startup, read-only afterwards."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    environment: Literal["test_mode", "live_mode"] = "test_mode"
    product_id: Optional[str] = None
    product_quantity: Optional[str] = None
    webhook_secret: Optional[str] = None

    customer_name: str = ""
    customer_email: str = ""

    port: int = DEFAULT_PORT
    payment_provider: Literal["dodo", "stripe"] = "dodo"
    provider_timeout_sec: float = DEFAULT_PROVIDER_TIMEOUT_SEC
    success_path: str = DEFAULT_SUCCESS_PATH
    source_tag: str = DEFAULT_SOURCE_TAG
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    public_dir: str = "public"


def _env(env: Mapping[str, str], name: str, default: str = "") -> str:
    return (env.get(name) or default).strip()


def _optional(value: str) -> Optional[str]:
    return value or None


def _parse_environment(raw: str) -> str:
    value = (raw or "test_mode").lower()
    if value not in _ENVIRONMENT_ALIASES:
        raise ConfigurationError(
            f"Invalid DODO_PAYMENTS_ENVIRONMENT: {raw!r} (expected test_mode or live_mode)",
            kind="invalid_environment",
        )
    return _ENVIRONMENT_ALIASES[value]


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _env(env, name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: {raw!r}", kind="invalid_value")


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _env(env, name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: {raw!r}", kind="invalid_value")
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {raw!r}", kind="invalid_value")
    return value


def load_gateway_config(env: Optional[Mapping[str, str]] = None) -> GatewayConfig:
    """
    Read the gateway configuration from the environment (.env already loaded).
    Missing credentials are NOT an error here: the server still boots and the
    checkout endpoint answers 400 until they are set.
    """
    env = os.environ if env is None else env

    provider = _env(env, "PAYMENT_PROVIDER", "dodo").lower() or "dodo"
    if provider not in ("dodo", "stripe"):
        raise ConfigurationError(f"Unsupported PAYMENT_PROVIDER: {provider}", kind="invalid_value")

    if provider == "stripe":
        api_key = _env(env, "STRIPE_SECRET_KEY") or _env(env, "DODO_PAYMENTS_API_KEY")
    else:
        api_key = _env(env, "DODO_PAYMENTS_API_KEY")

    webhook_secret = _env(env, "DODO_PAYMENTS_WEBHOOK_SECRET") or _env(env, "DODO_WEBHOOK_SECRET")

    origins = [o.strip() for o in _env(env, "CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

    return GatewayConfig(
        api_key=_optional(api_key),
        environment=_parse_environment(_env(env, "DODO_PAYMENTS_ENVIRONMENT")),
        product_id=_optional(_env(env, "PRODUCT_ID")),
        product_quantity=_optional(_env(env, "PRODUCT_QUANTITY")),
        webhook_secret=_optional(webhook_secret),
        customer_name=_env(env, "CUSTOMER_NAME"),
        customer_email=_env(env, "CUSTOMER_EMAIL"),
        port=_parse_int(env, "PORT", DEFAULT_PORT),
        payment_provider=provider,
        provider_timeout_sec=_parse_float(env, "PROVIDER_TIMEOUT_SEC", DEFAULT_PROVIDER_TIMEOUT_SEC),
        success_path=_env(env, "CHECKOUT_SUCCESS_PATH", DEFAULT_SUCCESS_PATH) or DEFAULT_SUCCESS_PATH,
        source_tag=_env(env, "CHECKOUT_SOURCE_TAG", DEFAULT_SOURCE_TAG) or DEFAULT_SOURCE_TAG,
        cors_allow_origins=origins or ["*"],
        public_dir=_env(env, "PUBLIC_DIR", "public") or "public",
    )
