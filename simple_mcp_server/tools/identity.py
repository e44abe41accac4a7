# simple_mcp_server/tools/identity.py
from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field

from simple_mcp.models import DIDFeature, SchemaField


class CredentialIssuerIn(BaseModel):
    schemaFields: List[SchemaField] = Field(..., description="Schema field definitions, in order")
    revocation: bool = Field(..., description="Enable revocation support")


class DIDIntegrationIn(BaseModel):
    features: List[DIDFeature] = Field(..., description="DID features to generate")
