"""
In-memory inventory records.

Models:
- Item (catalog fields + locally owned history)
- SaleRecord / DeliveryRecord / CostEntry (append-only history entries)
"""

from .history import CostEntry, DeliveryRecord, SaleRecord
from .item import Item

__all__ = ["Item", "SaleRecord", "DeliveryRecord", "CostEntry"]
