# simple_mcp/fragments/scaffold.py
"""
Project scaffolding for a Next.js app.

The base configuration is a preamble emitted for any non-empty feature
selection. Every feature contributes its own line under "Features configured";
features that need a route handler also carry a route fragment.
"""
from __future__ import annotations

import json
from simple_mcp.models import ScaffoldFeature
from simple_mcp.services.composer import SnippetComposer, code_block, fragment, section

SIMPLE_PACKAGE_VERSION = "^0.2.0"

SERVER_EXTERNAL_PACKAGES = (
    "@bsv/wallet-toolbox",
    "knex",
    "better-sqlite3",
    "tedious",
    "mysql",
    "mysql2",
    "pg",
    "pg-query-stream",
    "oracledb",
    "dotenv",
)

GITIGNORE_ENTRIES = (".server-wallet.json", ".revocation-secrets.json")


@fragment("next-config")
def next_config() -> str:
    packages = ",\n".join(f'    "{p}"' for p in SERVER_EXTERNAL_PACKAGES)
    body = (
        'import type { NextConfig } from "next";\n'
        "\n"
        "const nextConfig: NextConfig = {\n"
        "  serverExternalPackages: [\n"
        f"{packages}\n"
        "  ]\n"
        "};\n"
        "\n"
        "export default nextConfig;"
    )
    return "## next.config.ts\n\n" + code_block(body)


@fragment("package-json")
def package_json() -> str:
    additions = json.dumps({"dependencies": {"@bsv/simple": SIMPLE_PACKAGE_VERSION}}, indent=2)
    return "## package.json additions\n\n" + code_block(additions, "json")


@fragment("gitignore")
def gitignore() -> str:
    return "## .gitignore additions\n\n" + code_block("\n".join(GITIGNORE_ENTRIES), "")


@fragment("features-configured")
def features_configured() -> str:
    return "## Features configured"


def _feature_line(feature: ScaffoldFeature):
    @fragment(f"feature:{feature.value}", feature)
    def render() -> str:
        return f"- {feature.value}"
    return render


FEATURE_LINES = [_feature_line(f) for f in ScaffoldFeature]


@fragment("server-wallet", ScaffoldFeature.SERVER_WALLET)
def server_wallet_route() -> str:
    return section("Server wallet setup", """
// app/api/server-wallet/route.ts
import { createServerWalletHandler } from '@bsv/simple/server'
const handler = createServerWalletHandler()
export const GET = handler.GET, POST = handler.POST
""")


@fragment("messagebox", ScaffoldFeature.MESSAGEBOX)
def identity_registry_route() -> str:
    return section("MessageBox setup", """
// app/api/identity-registry/route.ts
import { createIdentityRegistryHandler } from '@bsv/simple/server'
const handler = createIdentityRegistryHandler()
export const GET = handler.GET, POST = handler.POST
""")


@fragment("did", ScaffoldFeature.DID)
def did_resolver_route() -> str:
    return section("DID Resolution Proxy", """
// app/api/resolve-did/route.ts
import { createDIDResolverHandler } from '@bsv/simple/server'
const handler = createDIDResolverHandler()
export const GET = handler.GET
""")


@fragment("credentials", ScaffoldFeature.CREDENTIALS)
def credential_issuer_route() -> str:
    return section("Credential Issuer", """
// app/api/credential-issuer/route.ts
import { createCredentialIssuerHandler } from '@bsv/simple/server'
const handler = createCredentialIssuerHandler({
  schemas: [{ id: 'my-cred', name: 'MyCred', fields: [{ key: 'name', label: 'Name', type: 'text', required: true }] }]
})
export const GET = handler.GET, POST = handler.POST
""")


composer = SnippetComposer(
    "scaffold",
    ScaffoldFeature,
    FEATURE_LINES
    + [server_wallet_route, identity_registry_route, did_resolver_route, credential_issuer_route],
    preamble=[next_config, package_json, gitignore, features_configured],
)
