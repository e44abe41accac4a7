# simple_mcp/fragments/token.py
from __future__ import annotations

from simple_mcp.models import TokenOperation
from simple_mcp.services.composer import SnippetComposer, fragment, section


@fragment("create", TokenOperation.CREATE)
def create_token() -> str:
    return section("Create Token", """
async function createToken(wallet: BrowserWallet, data: any, basket = 'my-tokens') {
  const result = await wallet.createToken({
    data,
    basket,
    satoshis: 1
  })

  console.log('Token created:', result.txid)
  console.log('Basket:', result.basket, '| Encrypted:', result.encrypted)
  return result
}

// Usage:
// await createToken(wallet, { type: 'loyalty', points: 100 })
""")


@fragment("list", TokenOperation.LIST)
def list_tokens() -> str:
    return section("List Tokens", """
async function listTokens(wallet: BrowserWallet, basket = 'my-tokens') {
  const tokens = await wallet.listTokenDetails(basket)

  for (const token of tokens) {
    console.log(`[${token.outpoint}] ${token.satoshis} sats`, token.data)
  }

  return tokens
}
""")


@fragment("send", TokenOperation.SEND)
def send_token() -> str:
    return section("Send Token", """
async function sendToken(
  wallet: BrowserWallet,
  basket: string,
  outpoint: string,
  recipientKey: string
) {
  const result = await wallet.sendToken({ basket, outpoint, to: recipientKey })
  console.log('Token sent:', result.txid)
  return result
}
""")


@fragment("redeem", TokenOperation.REDEEM)
def redeem_token() -> str:
    return section("Redeem Token", """
async function redeemToken(wallet: BrowserWallet, basket: string, outpoint: string) {
  const result = await wallet.redeemToken({ basket, outpoint })
  console.log('Token redeemed:', result.txid)
  return result
}
""")


@fragment("messagebox", TokenOperation.MESSAGEBOX)
def token_messagebox() -> str:
    return section("Send Token via MessageBox", """
async function sendTokenViaMessageBox(
  wallet: BrowserWallet,
  basket: string,
  outpoint: string,
  recipientKey: string
) {
  const result = await wallet.sendTokenViaMessageBox({ basket, outpoint, to: recipientKey })
  console.log('Token sent via MessageBox:', result.txid)
  return result
}

async function receiveTokens(wallet: BrowserWallet, targetBasket = 'received-tokens') {
  const incoming = await wallet.listIncomingTokens()
  console.log(`${incoming.length} incoming tokens`)

  for (const token of incoming) {
    const accepted = await wallet.acceptIncomingToken(token, targetBasket)
    console.log('Accepted token from:', accepted.sender)
  }

  return incoming.length
}
""")


composer = SnippetComposer(
    "token",
    TokenOperation,
    [create_token, list_tokens, send_token, redeem_token, token_messagebox],
)
