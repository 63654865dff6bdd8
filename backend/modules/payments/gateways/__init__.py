from .stripe_gateway import StripeGateway, get_stripe_gateway, to_cents

__all__ = ["StripeGateway", "get_stripe_gateway", "to_cents"]
