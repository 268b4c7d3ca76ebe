"""
API package for the InvPay backend
Exposes REST API routes for invoice generation
"""

from .routes import agent_router, invoice_router

__all__ = ["agent_router", "invoice_router"]
