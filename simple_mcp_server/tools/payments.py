# simple_mcp_server/tools/payments.py
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

from simple_mcp.models import InscriptionType, PaymentType, TokenOperation


class PaymentHandlerIn(BaseModel):
    type: PaymentType = Field(..., description="Payment type")
    basket: Optional[str] = Field(None, description="Basket name for tracking payments (default: payments)")
    changeBasket: Optional[str] = Field(
        None, description="Basket that receives reinternalized change outputs"
    )


class TokenHandlerIn(BaseModel):
    operations: List[TokenOperation] = Field(..., description="Token operations to generate")


class InscriptionHandlerIn(BaseModel):
    types: List[InscriptionType] = Field(..., description="Inscription types to generate")
