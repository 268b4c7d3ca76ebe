from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from enum import Enum
from datetime import date


class PartyRole(str, Enum):
    CLIENT = "client"
    BUSINESS = "business"
    UNCLASSIFIED = "unclassified"


class DiscountType(str, Enum):
    PERCENT = "percent"
    FLAT = "flat"


class Discount(BaseModel):
    type: DiscountType = Field(..., description="Whether the discount is a percentage or a flat amount")
    value: float = Field(..., description="Fraction of the subtotal for percent discounts, currency amount for flat ones")


class PartyFields(BaseModel):
    """A value resolved for both sides of the invoice"""
    client: str = Field(..., description="Value for the billed client")
    business: str = Field(..., description="Value for the issuing business")


class AdditionalInfo(BaseModel):
    poNumber: Optional[str] = Field(None, description="Purchase order number")
    paymentTerms: Optional[str] = Field(None, description="Payment method or terms")
    notes: Optional[str] = Field(None, description="Free-text notes")


class LineItem(BaseModel):
    description: str = Field(..., description="Item description")
    quantity: float = Field(..., description="Item quantity")
    rate: float = Field(..., description="Unit rate")
    amount: float = Field(default=0.0, description="quantity * rate, always recomputed")

    @model_validator(mode="after")
    def compute_amount(self):
        """Amount is derived, never taken from the caller"""
        self.amount = self.quantity * self.rate
        return self


class InvoiceRecord(BaseModel):
    invoiceNumber: str = Field(..., description="Invoice number")
    issueDate: date = Field(..., description="Invoice issue date")
    dueDate: date = Field(..., description="Invoice due date")
    clientName: str = Field(..., description="Client display name")
    clientEmail: str = Field(..., description="Client email address")
    clientAddress: str = Field(..., description="Client postal address")
    businessName: str = Field(..., description="Business display name")
    businessEmail: str = Field(..., description="Business email address")
    businessAddress: str = Field(..., description="Business postal address")
    lineItems: List[LineItem] = Field(default_factory=list, description="Billable line items")
    subtotal: float = Field(..., description="Sum of item amounts after discount")
    taxRate: float = Field(default=0.0, description="Tax rate as a fraction")
    tax: float = Field(..., description="subtotal * taxRate")
    total: float = Field(..., description="subtotal + tax")
    discount: Optional[Discount] = Field(None, description="Discount applied to the subtotal")
    notes: str = Field(default="", description="Notes including PO and payment lines")
