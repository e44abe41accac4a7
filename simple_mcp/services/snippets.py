# simple_mcp/services/snippets.py
from __future__ import annotations

from typing import Iterable, Optional

from simple_mcp.fragments import (
    credential,
    did,
    inscription,
    messagebox,
    payment,
    scaffold,
    server_route,
    token,
    wallet,
)
from simple_mcp.models import (
    DIDFeature,
    Framework,
    InscriptionType,
    MessageBoxFeature,
    PaymentType,
    PersistenceMode,
    ScaffoldFeature,
    SchemaField,
    ServerAction,
    TokenOperation,
    WalletTarget,
)


class SnippetService:
    """
    One entry point per operation category.
    Stateless: every call recomputes its document from the arguments alone.
    """

    def scaffold(self, features: Iterable[ScaffoldFeature]) -> str:
        return scaffold.composer.compose(features)

    def wallet_setup(self, target: WalletTarget, framework: Framework) -> str:
        return wallet.compose(target, framework)

    def payment_handler(
        self,
        payment_type: PaymentType,
        basket: Optional[str] = None,
        change_basket: Optional[str] = None,
    ) -> str:
        return payment.compose(payment_type, basket, change_basket)

    def token_handler(self, operations: Iterable[TokenOperation]) -> str:
        return token.composer.compose(operations)

    def inscription_handler(self, types: Iterable[InscriptionType]) -> str:
        return inscription.composer.compose(types)

    def messagebox_setup(
        self, features: Iterable[MessageBoxFeature], registry_url: Optional[str] = None
    ) -> str:
        registry = registry_url or messagebox.DEFAULT_REGISTRY_URL
        return messagebox.composer.compose(features, registry=registry)

    def server_route(self, actions: Iterable[ServerAction], persistence: PersistenceMode) -> str:
        return server_route.compose(actions, persistence)

    def credential_issuer(self, fields: Iterable[SchemaField], revocation: bool) -> str:
        return credential.compose(fields, revocation)

    def did_integration(self, features: Iterable[DIDFeature]) -> str:
        return did.composer.compose(features)
