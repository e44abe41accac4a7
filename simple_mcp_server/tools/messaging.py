# simple_mcp_server/tools/messaging.py
from typing import List, Optional
from pydantic import BaseModel, Field

from simple_mcp.models import MessageBoxFeature


class MessageBoxSetupIn(BaseModel):
    features: List[MessageBoxFeature] = Field(..., description="MessageBox features to generate")
    registryUrl: Optional[str] = Field(
        None, description="Identity registry URL (default: /api/identity-registry)"
    )
