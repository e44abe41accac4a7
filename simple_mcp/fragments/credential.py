# simple_mcp/fragments/credential.py
"""
CredentialIssuer setup. Schema fields are echoed one line each, in input
order; duplicate keys pass through untouched.
"""
from __future__ import annotations

from typing import Iterable, List

from simple_mcp.models import SchemaField
from simple_mcp.services.composer import code_block, join_sections

SCHEMA_ID = "custom-credential"
SCHEMA_NAME = "CustomCredential"


def render_field(field: SchemaField) -> str:
    required = ", required: true" if field.required else ""
    return f"{{ key: '{field.key}', label: '{field.label}', type: '{field.type}'{required} }}"


def render_fields(fields: Iterable[SchemaField], indent: str) -> str:
    return ",\n".join(indent + render_field(f) for f in fields)


def imports(revocation: bool) -> str:
    names = ["CredentialSchema", "CredentialIssuer"]
    if revocation:
        names.append("MemoryRevocationStore")
    names += ["toVerifiableCredential", "toVerifiablePresentation"]
    listed = ",\n".join("  " + n for n in names)
    return f"import {{\n{listed}\n}} from '@bsv/simple/browser'"


def schema_definition(fields: List[SchemaField]) -> str:
    return f"""\
// 1. Define Schema
const schema = new CredentialSchema({{
  id: '{SCHEMA_ID}',
  name: '{SCHEMA_NAME}',
  fields: [
{render_fields(fields, '    ')}
  ],
  computedFields: (values) => ({{
    ...values,
    issuedAt: new Date().toISOString()
  }})
}})"""


def issuer(revocation: bool) -> str:
    if revocation:
        revocation_config = """\
  revocation: {
    enabled: true,
    wallet: issuerWallet.getClient(),
    store: new MemoryRevocationStore()
  }"""
    else:
        revocation_config = """\
  revocation: {
    enabled: false
  }"""
    return f"""\
// 2. Create Issuer
const issuer = await CredentialIssuer.create({{
  privateKey: issuerPrivateKeyHex,
  schemas: [schema.getConfig()],
{revocation_config}
}})

console.log('Issuer DID:', issuer.getInfo().did)"""


def issue_and_verify() -> str:
    return f"""\
// 3. Issue a Credential
async function issueCredential(
  subjectKey: string,
  fields: Record<string, string>
): Promise<VerifiableCredential> {{
  // Validate fields
  const error = schema.validate(fields)
  if (error) throw new Error(error)

  // Issue
  const vc = await issuer.issue(subjectKey, '{SCHEMA_ID}', fields)
  console.log('VC issued to:', vc.credentialSubject.id)
  return vc
}}

// 4. Verify a Credential
async function verifyCredential(vc: VerifiableCredential) {{
  const result = await issuer.verify(vc)
  console.log('Valid:', result.valid, '| Revoked:', result.revoked)
  if (result.errors.length) console.warn('Errors:', result.errors)
  return result
}}"""


def revocation_functions() -> str:
    return """\
// 5. Revoke a Credential
async function revokeCredential(serialNumber: string) {
  const { txid } = await issuer.revoke(serialNumber)
  console.log('Revoked, txid:', txid)
}

// 6. Check Revocation Status
async function checkRevocation(serialNumber: string) {
  const revoked = await issuer.isRevoked(serialNumber)
  console.log('Is revoked:', revoked)
  return revoked
}"""


def wallet_side() -> str:
    return f"""\
// Wallet-side: Acquire + List + Present
async function acquireAndPresent(wallet: BrowserWallet, serverUrl: string) {{
  // Acquire from remote issuer (uses ?action=info and ?action=certify query params)
  const vc = await wallet.acquireCredential({{
    serverUrl,
    schemaId: '{SCHEMA_ID}',
    replaceExisting: true
  }})

  // List credentials
  const vcs = await wallet.listCredentials({{
    certifiers: [issuer.getInfo().publicKey],
    types: [schema.getInfo().certificateTypeBase64]
  }})

  // Create presentation
  const vp = wallet.createPresentation(vcs)
  console.log('VP holder:', vp.holder)
  console.log('VCs in presentation:', vp.verifiableCredential.length)

  return vp
}}"""


def server_handler(fields: List[SchemaField]) -> str:
    return f"""\
// ---- Server-Side Route (REQUIRED for remote issuance) ----
// Use the handler factory; do NOT write manual route code:

// app/api/credential-issuer/route.ts  (no [[...path]] catch-all needed!)
import {{ createCredentialIssuerHandler }} from '@bsv/simple/server'
const handler = createCredentialIssuerHandler({{
  schemas: [{{
    id: '{SCHEMA_ID}',
    name: '{SCHEMA_NAME}',
    fields: [
{render_fields(fields, '      ')}
    ]
  }}]
}})
export const GET = handler.GET, POST = handler.POST

// API endpoints (all query-param based):
// GET  ?action=info           → {{ certifierPublicKey, certificateType, schemas }}
// GET  ?action=schema&id=...  → schema details
// POST ?action=certify        → CertificateData (wallet acquisition)
// POST ?action=issue          → {{ credential: VerifiableCredential }}
// POST ?action=verify         → {{ verification: VerificationResult }}
// POST ?action=revoke         → {{ txid }}"""


def compose(fields: Iterable[SchemaField], revocation: bool) -> str:
    fields = [f if isinstance(f, SchemaField) else SchemaField.model_validate(f) for f in fields]
    parts = [
        imports(revocation),
        schema_definition(fields),
        issuer(revocation),
        issue_and_verify(),
        revocation_functions() if revocation else "",
        wallet_side(),
        server_handler(fields),
    ]
    return code_block(join_sections(parts))
