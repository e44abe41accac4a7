# simple_mcp/fragments/wallet.py
"""Wallet initialization: exactly one block per (target, framework) pair."""
from __future__ import annotations

from itertools import product
from typing import Callable, Dict, Tuple

from simple_mcp.models import Framework, WalletTarget
from simple_mcp.services.composer import code_block, require_exhaustive, select_variant


def browser_nextjs() -> str:
    return code_block("""
'use client'
import { useState } from 'react'
import { createWallet, type BrowserWallet } from '@bsv/simple/browser'

export default function WalletProvider({ children }: { children: React.ReactNode }) {
  const [wallet, setWallet] = useState<BrowserWallet | null>(null)
  const [error, setError] = useState<string | null>(null)

  const connect = async () => {
    try {
      setError(null)
      const w = await createWallet()
      setWallet(w)
    } catch (e) {
      setError((e as Error).message)
    }
  }

  if (!wallet) {
    return (
      <div>
        <button onClick={connect}>Connect Wallet</button>
        {error && <p style={{ color: 'red' }}>{error}</p>}
      </div>
    )
  }

  return (
    <div>
      <p>Connected: {wallet.getIdentityKey().substring(0, 20)}...</p>
      <p>Address: {wallet.getAddress()}</p>
      {children}
    </div>
  )
}
""")


def browser_react() -> str:
    return code_block("""
import { useState } from 'react'
import { createWallet, type BrowserWallet } from '@bsv/simple/browser'

export function useWallet() {
  const [wallet, setWallet] = useState<BrowserWallet | null>(null)
  const [loading, setLoading] = useState(false)
  const [error, setError] = useState<string | null>(null)

  const connect = async () => {
    try {
      setLoading(true)
      setError(null)
      const w = await createWallet()
      setWallet(w)
    } catch (e) {
      setError((e as Error).message)
    } finally {
      setLoading(false)
    }
  }

  return { wallet, loading, error, connect }
}
""")


def browser_vanilla() -> str:
    return code_block("""
import { createWallet } from '@bsv/simple/browser'

async function main() {
  const wallet = await createWallet()
  console.log('Connected:', wallet.getIdentityKey())
  console.log('Address:', wallet.getAddress())
  console.log('Status:', wallet.getStatus())
}

main().catch(console.error)
""")


def server_nextjs() -> str:
    handler = code_block("""
// app/api/server-wallet/route.ts
import { createServerWalletHandler } from '@bsv/simple/server'
const handler = createServerWalletHandler()
export const GET = handler.GET, POST = handler.POST
""")
    notes = """\
Handles lazy-init singleton, key persistence, and all actions automatically.

**Key persistence order:**
1. `process.env.SERVER_PRIVATE_KEY` (environment variable, production)
2. `.server-wallet.json` file (persisted from a previous run, development)
3. Auto-generated via `generatePrivateKey()` (fresh key, first run)

**API endpoints:**
- `GET ?action=create` → server identity key + status
- `GET ?action=request&satoshis=1000` → BRC-29 payment request
- `GET ?action=balance` → output count + total satoshis
- `POST ?action=receive` body: `{ tx, senderIdentityKey, derivationPrefix, derivationSuffix, outputIndex }`

No `@bsv/sdk` import needed. Add `.server-wallet.json` to `.gitignore`."""
    return handler + "\n\n" + notes


def server_node() -> str:
    return code_block("""
import { ServerWallet, generatePrivateKey } from '@bsv/simple/server'

async function main() {
  const privateKey = process.env.SERVER_PRIVATE_KEY || generatePrivateKey()

  const wallet = await ServerWallet.create({
    privateKey,
    network: 'main',
    storageUrl: 'https://storage.babbage.systems'
  })

  console.log('Server wallet ready:', wallet.getIdentityKey())
  console.log('Status:', wallet.getStatus())
}

main().catch(console.error)
""")


VARIANTS: Dict[Tuple[WalletTarget, Framework], Callable[[], str]] = {
    (WalletTarget.BROWSER, Framework.NEXTJS): browser_nextjs,
    (WalletTarget.BROWSER, Framework.REACT): browser_react,
    (WalletTarget.BROWSER, Framework.VANILLA): browser_vanilla,
    (WalletTarget.SERVER, Framework.NEXTJS): server_nextjs,
    (WalletTarget.SERVER, Framework.REACT): server_node,
    (WalletTarget.SERVER, Framework.VANILLA): server_node,
}

require_exhaustive("wallet", VARIANTS, product(WalletTarget, Framework))


def compose(target: WalletTarget, framework: Framework) -> str:
    key = (WalletTarget(target), Framework(framework))
    return select_variant("wallet", VARIANTS, key)()
