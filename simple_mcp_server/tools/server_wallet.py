# simple_mcp_server/tools/server_wallet.py
from typing import List
from pydantic import BaseModel, Field

from simple_mcp.models import PersistenceMode, ServerAction


class ServerRouteIn(BaseModel):
    actions: List[ServerAction] = Field(
        ..., description="Actions: create (alias status), request, balance, receive"
    )
    walletPersistence: PersistenceMode = Field(
        ...,
        description="Key persistence: env (env var only), file (file only), "
        "both (env + file fallback)",
    )
