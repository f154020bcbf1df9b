from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from snapmark_billing.application.dto.billing import ProPriceConfig
from snapmark_billing.domain.exceptions import ConfigurationError


load_dotenv()


DEFAULT_FRONTEND_URL = "https://snapmark-success.netlify.app"


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    service_name: str
    stripe_secret_key: str
    stripe_webhook_secret: str
    resend_api_key: str
    resend_api_base: str
    resend_timeout_seconds: float
    admin_email: str
    notification_from: str
    frontend_url: str
    port: int
    customer_email_domain: str
    pro_price: ProPriceConfig


def get_settings() -> Settings:
    return Settings(
        service_name=_env("SERVICE_NAME", "SnapMark Payment Backend"),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        resend_api_key=_env("RESEND_API_KEY", ""),
        resend_api_base=_env("RESEND_API_BASE", "https://api.resend.com"),
        resend_timeout_seconds=float(_env("RESEND_TIMEOUT_SECONDS", "10")),
        admin_email=_env("ADMIN_EMAIL", ""),
        notification_from=_env("NOTIFICATION_FROM", "SnapMark <onboarding@resend.dev>"),
        frontend_url=_env("FRONTEND_URL") or DEFAULT_FRONTEND_URL,
        port=int(_env("PORT") or "3001"),
        customer_email_domain=_env("CUSTOMER_EMAIL_DOMAIN", "snapmark.temp"),
        pro_price=ProPriceConfig(
            currency=_env("PRO_PRICE_CURRENCY", "usd"),
            unit_amount=int(_env("PRO_PRICE_UNIT_AMOUNT", "299")),
            interval=_env("PRO_PRICE_INTERVAL", "month"),
            product_name=_env("PRO_PRODUCT_NAME", "SnapMark Pro"),
            product_description=_env("PRO_PRODUCT_DESCRIPTION", "Unlimited screenshots per day"),
        ),
    )


def require_stripe_secret(settings: Settings) -> str:
    if not settings.stripe_secret_key:
        raise ConfigurationError("STRIPE_SECRET_KEY not found!")
    return settings.stripe_secret_key
