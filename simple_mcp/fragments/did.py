# simple_mcp/fragments/did.py
from __future__ import annotations

from simple_mcp.models import DIDFeature
from simple_mcp.services.composer import SnippetComposer, code_block, fragment, section


@fragment("imports")
def did_imports() -> str:
    return code_block("import { DID } from '@bsv/simple/browser'")


@fragment("create", DIDFeature.CREATE)
def create_did() -> str:
    return section("Create DID Document", """
function createDIDDocument(identityKey: string) {
  const didDoc = DID.fromIdentityKey(identityKey)
  console.log('DID:', didDoc.id)  // 'did:bsv:{identityKey}'
  return didDoc
}
""")


@fragment("get", DIDFeature.GET)
def get_did() -> str:
    return section("Get Wallet DID", """
function getWalletDID(wallet: BrowserWallet) {
  const didDoc = wallet.getDID()
  console.log('DID:', didDoc.id)
  console.log('Controller:', didDoc.controller)
  console.log('Verification Method:', didDoc.verificationMethod[0].publicKeyHex)
  return didDoc
}
""")


@fragment("register", DIDFeature.REGISTER)
def register_did() -> str:
    return section("Register DID (persist as certificate)", """
async function registerDID(wallet: BrowserWallet) {
  const didDoc = await wallet.registerDID({ persist: true })
  console.log('DID registered:', didDoc.id)
  return didDoc
}
""")


@fragment("resolve", DIDFeature.RESOLVE)
def resolve_did() -> str:
    return section("Resolve DID", """
function resolveDID(wallet: BrowserWallet, didString: string) {
  if (!DID.isValid(didString)) {
    throw new Error('Invalid DID format. Must be: did:bsv:{identityKey}')
  }

  const didDoc = wallet.resolveDID(didString)
  console.log('Resolved DID:', didDoc.id)
  console.log('Public Key:', didDoc.verificationMethod[0].publicKeyHex)
  return didDoc
}

// Static utility (no wallet needed)
function parseDID(didString: string) {
  const parsed = DID.parse(didString)
  console.log('Method:', parsed.method)      // 'bsv'
  console.log('Key:', parsed.identityKey)     // '02abc...'
  return parsed
}
""")


@fragment("update", DIDFeature.UPDATE)
def update_did() -> str:
    return section("Update DID (re-register after key rotation)", """
async function updateDID(wallet: BrowserWallet) {
  // A did:bsv document is derived from the identity key, so an update
  // re-persists the current document as a fresh certificate.
  const didDoc = await wallet.registerDID({ persist: true })
  console.log('DID updated:', didDoc.id)
  return didDoc
}
""")


@fragment("deactivate", DIDFeature.DEACTIVATE)
def deactivate_did() -> str:
    return section("Deactivate DID (relinquish certificate)", """
async function deactivateDID(wallet: BrowserWallet) {
  const client = wallet.getClient()
  const { certificates } = await client.listCertificates({
    certifiers: [],
    types: [DID.getCertificateType()]
  })

  for (const cert of certificates) {
    await client.relinquishCertificate({
      type: cert.type,
      serialNumber: cert.serialNumber,
      certifier: cert.certifier
    })
  }

  console.log('DID certificates relinquished:', certificates.length)
  return certificates.length
}
""")


@fragment("list", DIDFeature.LIST)
def list_dids() -> str:
    return section("List Registered DID Certificates", """
async function listDIDCertificates(wallet: BrowserWallet) {
  const client = wallet.getClient()
  const { certificates } = await client.listCertificates({
    certifiers: [],
    types: [DID.getCertificateType()]
  })

  for (const cert of certificates) {
    console.log('DID certificate:', cert.serialNumber, '| subject:', cert.subject)
  }

  return certificates
}
""")


composer = SnippetComposer(
    "did",
    DIDFeature,
    [create_did, get_did, register_did, resolve_did, update_did, deactivate_did, list_dids],
    preamble=[did_imports],
)
