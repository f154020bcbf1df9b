from __future__ import annotations


class DomainError(Exception):
    """Base for billing domain errors."""


class ConfigurationError(DomainError):
    """Required configuration is missing."""


class BillingInputError(DomainError):
    """Request is missing a required field."""


class WebhookVerificationError(DomainError):
    """Webhook payload could not be authenticated."""


class CustomerNotFoundError(DomainError):
    """No Stripe customer could be resolved for the user."""


class PaymentProviderError(DomainError):
    """A call to the payment provider failed."""
