from .payment_config import PaymentConfig, payment_config, validate_payment_config

__all__ = ["PaymentConfig", "payment_config", "validate_payment_config"]
