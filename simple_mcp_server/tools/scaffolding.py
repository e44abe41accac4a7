# simple_mcp_server/tools/scaffolding.py
from typing import List
from pydantic import BaseModel, Field

from simple_mcp.models import Framework, ScaffoldFeature, WalletTarget


class ScaffoldIn(BaseModel):
    features: List[ScaffoldFeature] = Field(
        ...,
        description="Features to enable: payments, tokens, inscriptions, messagebox, "
        "certification, did, credentials, overlay, server-wallet",
    )


class WalletSetupIn(BaseModel):
    target: WalletTarget = Field(..., description="Target environment")
    framework: Framework = Field(..., description="Target framework")
