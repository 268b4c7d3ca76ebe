"""
Tools package for Semantic Kernel
Contains the invoice generation tools exposed as the "invoice" plugin
"""

from .invoice_tools import InvoiceTools

__all__ = [
    "InvoiceTools"
]
