"""Store helpers (single-file bucket store, transactions, bucket handles)."""

from .store import NOTES_PATH, BucketHandle, Store, Transaction

__all__ = ["NOTES_PATH", "BucketHandle", "Store", "Transaction"]
