# simple_mcp/models.py
"""
Enum-constrained configuration shared by the request models and the composers.

Member declaration order is the composition precedence for each category:
composers iterate the enum, never the caller's list.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ScaffoldFeature(str, Enum):
    PAYMENTS = "payments"
    TOKENS = "tokens"
    INSCRIPTIONS = "inscriptions"
    MESSAGEBOX = "messagebox"
    CERTIFICATION = "certification"
    DID = "did"
    CREDENTIALS = "credentials"
    OVERLAY = "overlay"
    SERVER_WALLET = "server-wallet"


class WalletTarget(str, Enum):
    BROWSER = "browser"
    SERVER = "server"


class Framework(str, Enum):
    NEXTJS = "nextjs"
    REACT = "react"
    VANILLA = "vanilla"


class PaymentType(str, Enum):
    SIMPLE = "simple"
    MULTI_OUTPUT = "multi-output"
    SERVER_FUNDING = "server-funding"


class TokenOperation(str, Enum):
    CREATE = "create"
    LIST = "list"
    SEND = "send"
    REDEEM = "redeem"
    MESSAGEBOX = "messagebox"


class InscriptionType(str, Enum):
    TEXT = "text"
    JSON = "json"
    FILE_HASH = "file-hash"
    IMAGE_HASH = "image-hash"


class MessageBoxFeature(str, Enum):
    CERTIFY = "certify"
    SEND = "send"
    RECEIVE = "receive"
    SEARCH = "search"


class ServerAction(str, Enum):
    CREATE = "create"
    STATUS = "status"
    REQUEST = "request"
    BALANCE = "balance"
    RECEIVE = "receive"


class PersistenceMode(str, Enum):
    ENV = "env"
    FILE = "file"
    BOTH = "both"


class DIDFeature(str, Enum):
    CREATE = "create"
    GET = "get"
    REGISTER = "register"
    RESOLVE = "resolve"
    UPDATE = "update"
    DEACTIVATE = "deactivate"
    LIST = "list"


class SchemaField(BaseModel):
    """One credential schema field; rendered verbatim, in input order."""

    key: str = Field(..., description="Field key, e.g. 'name'")
    label: str = Field(..., description="Human readable label, e.g. 'Full Name'")
    type: str = Field(..., description="Field type, e.g. 'text', 'email', 'date'")
    required: Optional[bool] = Field(None, description="Mark the field as required")
