# simple_mcp/fragments/messagebox.py
"""MessageBox fragments. Every render receives the identity registry URL as `registry`."""
from __future__ import annotations

from simple_mcp.models import MessageBoxFeature
from simple_mcp.services.composer import SnippetComposer, fragment, section

DEFAULT_REGISTRY_URL = "/api/identity-registry"


@fragment("certify", MessageBoxFeature.CERTIFY)
def certify(registry: str) -> str:
    return section("MessageBox Certification", f"""
async function certifyIdentity(wallet: BrowserWallet, handle: string) {{
  // Check if already certified
  const existingHandle = await wallet.getMessageBoxHandle('{registry}')
  if (existingHandle) {{
    console.log('Already certified as:', existingHandle)
    return existingHandle
  }}

  // Register new handle
  const result = await wallet.certifyForMessageBox(handle, '{registry}')
  console.log('Certified as:', result.handle)
  return result.handle
}}

async function revokeIdentity(wallet: BrowserWallet) {{
  await wallet.revokeMessageBoxCertification('{registry}')
  console.log('Identity revoked')
}}
""")


@fragment("send", MessageBoxFeature.SEND)
def send_payment(registry: str) -> str:
    return section("Send Payment via MessageBox", """
async function sendPayment(wallet: BrowserWallet, recipientKey: string, satoshis: number) {
  const result = await wallet.sendMessageBoxPayment(recipientKey, satoshis, 'messagebox-change')

  console.log('Payment sent:', result.amount, 'sats to', result.recipient)
  if (result.reinternalized) {
    console.log('Change recovered:', result.reinternalized.count)
  }

  return result
}
""")


@fragment("receive", MessageBoxFeature.RECEIVE)
def receive_payments(registry: str) -> str:
    return section("Receive Payments from MessageBox", """
async function receivePayments(wallet: BrowserWallet, basket = 'received-payments') {
  const incoming = await wallet.listIncomingPayments()
  console.log(`${incoming.length} incoming payments`)

  const results = []
  for (const payment of incoming) {
    try {
      const accepted = await wallet.acceptIncomingPayment(payment, basket)
      results.push({ success: true, payment: accepted })
    } catch (e) {
      results.push({ success: false, error: (e as Error).message })
    }
  }

  return results
}
""")


@fragment("search", MessageBoxFeature.SEARCH)
def search_identity(registry: str) -> str:
    return section("Search Identity Registry", f"""
async function searchIdentity(wallet: BrowserWallet, query: string) {{
  const results = await wallet.lookupIdentityByTag(query, '{registry}')
  console.log(`Found ${{results.length}} matches for "${{query}}"`)

  for (const match of results) {{
    console.log(`  ${{match.tag}} → ${{match.identityKey.substring(0, 20)}}...`)
  }}

  return results
}}

async function listMyTags(wallet: BrowserWallet) {{
  const tags = await wallet.listMyTags('{registry}')
  console.log('My tags:', tags.map(t => t.tag))
  return tags
}}
""")


composer = SnippetComposer(
    "messagebox",
    MessageBoxFeature,
    [certify, send_payment, receive_payments, search_identity],
)
