from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from snapmark_billing import main
from snapmark_billing.domain.exceptions import ConfigurationError
from snapmark_billing.shared.config import DEFAULT_FRONTEND_URL, get_settings, require_stripe_secret


def test_defaults(monkeypatch):
    for name in ("FRONTEND_URL", "PORT", "RESEND_API_KEY", "ADMIN_EMAIL", "PRO_PRICE_UNIT_AMOUNT"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.frontend_url == DEFAULT_FRONTEND_URL
    assert settings.port == 3001
    assert settings.resend_api_key == ""
    assert settings.pro_price.unit_amount == 299
    assert settings.pro_price.interval == "month"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("FRONTEND_URL", "https://frontend.test")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("PRO_PRICE_UNIT_AMOUNT", "499")

    settings = get_settings()

    assert require_stripe_secret(settings) == "sk_test_123"
    assert settings.frontend_url == "https://frontend.test"
    assert settings.port == 8080
    assert settings.pro_price.unit_amount == 499


def test_missing_stripe_secret_is_fatal(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        require_stripe_secret(get_settings())


def test_app_refuses_to_start_without_stripe_secret(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        with TestClient(main.create_app()):
            pass


def test_run_exits_without_stripe_secret(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: pytest.fail("server started"))

    with pytest.raises(SystemExit) as exc_info:
        main.run()

    assert exc_info.value.code == 1


def test_run_starts_server_on_configured_port(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("PORT", "4321")
    calls: list[dict] = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    main.run()

    assert calls == [{"host": "0.0.0.0", "port": 4321}]
