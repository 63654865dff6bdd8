from .wallet_models import WalletTransaction, WalletTransactionType

__all__ = ["WalletTransaction", "WalletTransactionType"]
