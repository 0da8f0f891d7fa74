from abc import ABC, abstractmethod

from checkout_gateway.services.payments.models import CheckoutRequest


class PaymentProviderClient(ABC):
    """Payment provider capability used by the checkout gateway."""

    name: str = "provider"

    @abstractmethod
    async def create_checkout_session(self, request: CheckoutRequest) -> dict:
        """
        Create a hosted checkout session.
        Returns the provider's answer as a dict carrying session_id / checkout_url;
        raises ProviderError (or a subclass) on failure.
        """
        raise NotImplementedError
