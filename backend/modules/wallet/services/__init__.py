from .wallet_service import WalletService, to_money

__all__ = ["WalletService", "to_money"]
