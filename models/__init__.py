"""
Data models for the InvPay backend
Based on the frontend TypeScript invoice interface
"""

from .invoices import (
    AdditionalInfo,
    Discount,
    DiscountType,
    InvoiceRecord,
    LineItem,
    PartyFields,
    PartyRole,
)

__all__ = [
    "AdditionalInfo",
    "Discount",
    "DiscountType",
    "InvoiceRecord",
    "LineItem",
    "PartyFields",
    "PartyRole",
]
