# simple_mcp/fragments/server_route.py
"""
Next.js API route for a server wallet.

Action fragments fill the GET and POST handlers. Key persistence is one of
three self-contained blocks chosen by PersistenceMode; blocks are never
blended. The route file is server-only, so everything is imported statically.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from simple_mcp.models import PersistenceMode, ServerAction
from simple_mcp.services.composer import (
    SnippetComposer,
    code_block,
    fragment,
    join_sections,
    require_exhaustive,
    select_variant,
)

ROUTE_PATH = "app/api/server-wallet/route.ts"
WALLET_FILE = ".server-wallet.json"


@dataclass(frozen=True)
class PersistenceBlock:
    imports: str
    setup: str
    resolve_key: str
    save_key: str


_FILE_HELPERS = f"""\
const WALLET_FILE = join(process.cwd(), '{WALLET_FILE}')

function loadSavedKey(): string | null {{
  try {{
    if (existsSync(WALLET_FILE)) {{
      return JSON.parse(readFileSync(WALLET_FILE, 'utf-8')).privateKey || null
    }}
  }} catch {{}}
  return null
}}

function saveKey(privateKey: string, identityKey: string) {{
  writeFileSync(WALLET_FILE, JSON.stringify({{ privateKey, identityKey }}, null, 2))
}}"""

_FILE_IMPORTS = """\
import { PrivateKey } from '@bsv/sdk'
import { readFileSync, writeFileSync, existsSync } from 'fs'
import { join } from 'path'"""

PERSISTENCE: Dict[PersistenceMode, PersistenceBlock] = {
    PersistenceMode.ENV: PersistenceBlock(
        imports="",
        setup=(
            "const ENV_PRIVATE_KEY = process.env.SERVER_PRIVATE_KEY\n"
            "if (!ENV_PRIVATE_KEY) throw new Error('SERVER_PRIVATE_KEY env var is required')"
        ),
        resolve_key="const privateKey = ENV_PRIVATE_KEY",
        save_key="",
    ),
    PersistenceMode.FILE: PersistenceBlock(
        imports=_FILE_IMPORTS,
        setup=_FILE_HELPERS,
        resolve_key="const privateKey = loadSavedKey() || PrivateKey.fromRandom().toHex()",
        save_key="saveKey(privateKey, serverWallet.getIdentityKey())",
    ),
    PersistenceMode.BOTH: PersistenceBlock(
        imports=_FILE_IMPORTS,
        setup=_FILE_HELPERS,
        resolve_key=(
            "const privateKey = process.env.SERVER_PRIVATE_KEY || loadSavedKey() "
            "|| PrivateKey.fromRandom().toHex()"
        ),
        save_key=(
            "if (!process.env.SERVER_PRIVATE_KEY) {\n"
            "  saveKey(privateKey, serverWallet.getIdentityKey())\n"
            "}"
        ),
    ),
}

require_exhaustive("server-route", PERSISTENCE, PersistenceMode)


# ---- GET handlers

@fragment("create", ServerAction.CREATE, ServerAction.STATUS)
def get_create() -> str:
    return """\
    if (action === 'create') {
      const wallet = await getServerWallet()
      return NextResponse.json({
        success: true,
        serverIdentityKey: wallet.getIdentityKey(),
        status: wallet.getStatus()
      })
    }"""


@fragment("request", ServerAction.REQUEST)
def get_request() -> str:
    return """\
    if (action === 'request') {
      const wallet = await getServerWallet()
      const satoshis = Number(req.nextUrl.searchParams.get('satoshis')) || 1000
      const request = wallet.createPaymentRequest({ satoshis })
      return NextResponse.json({ success: true, paymentRequest: request })
    }"""


@fragment("balance", ServerAction.BALANCE)
def get_balance() -> str:
    return """\
    if (action === 'balance') {
      const wallet = await getServerWallet()
      const client = wallet.getClient()
      const raw = await client.listOutputs({ basket: 'default', include: 'locking scripts' })
      const outputs = raw?.outputs ?? (Array.isArray(raw) ? raw : [])
      const totalSatoshis = outputs.reduce((sum: number, o: any) => sum + (o.satoshis || 0), 0)
      return NextResponse.json({ success: true, totalOutputs: outputs.length, totalSatoshis })
    }"""


# ---- POST handlers

@fragment("receive", ServerAction.RECEIVE)
def post_receive() -> str:
    return """\
    if (action === 'receive') {
      const wallet = await getServerWallet()
      const { tx, senderIdentityKey, derivationPrefix, derivationSuffix, outputIndex } = await req.json()

      if (!tx || !senderIdentityKey || !derivationPrefix || !derivationSuffix) {
        return NextResponse.json({
          success: false,
          error: 'Missing: tx, senderIdentityKey, derivationPrefix, derivationSuffix'
        }, { status: 400 })
      }

      await wallet.receivePayment({
        tx, senderIdentityKey, derivationPrefix, derivationSuffix,
        outputIndex: outputIndex ?? 0
      })

      return NextResponse.json({ success: true, message: 'Payment internalized' })
    }"""


get_handlers = SnippetComposer(
    "server-route:get",
    ServerAction,
    [get_create, get_request, get_balance],
    inert=[ServerAction.RECEIVE],
)

post_handlers = SnippetComposer(
    "server-route:post",
    ServerAction,
    [post_receive],
    inert=[ServerAction.CREATE, ServerAction.STATUS, ServerAction.REQUEST, ServerAction.BALANCE],
)


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else line for line in text.splitlines())


def _header(block: PersistenceBlock) -> str:
    lines = [f"// {ROUTE_PATH}", "import { NextRequest, NextResponse } from 'next/server'",
             "import { ServerWallet } from '@bsv/simple/server'"]
    if block.imports:
        lines.append(block.imports)
    return "\n".join(lines) + "\n\n" + block.setup


def _wallet_singleton(block: PersistenceBlock) -> str:
    init = [_indent(block.resolve_key, "    "), "",
            "    serverWallet = await ServerWallet.create({",
            "      privateKey,",
            "      network: 'main',",
            "      storageUrl: 'https://storage.babbage.systems'",
            "    })"]
    if block.save_key:
        init.append(_indent(block.save_key, "    "))
    init.append("    return serverWallet")
    body = "\n".join(init)
    return f"""\
let serverWallet: any = null
let initPromise: Promise<any> | null = null

async function getServerWallet() {{
  if (serverWallet) return serverWallet
  if (initPromise) return initPromise

  initPromise = (async () => {{
{body}
  }})()

  return initPromise
}}"""


def _method_handler(method: str, default_action: str, branches: str) -> str:
    body = branches + "\n\n" if branches else ""
    return f"""\
export async function {method}(req: NextRequest) {{
  const action = req.nextUrl.searchParams.get('action') || '{default_action}'

  try {{
{body}    return NextResponse.json({{ error: `Unknown action: ${{action}}` }}, {{ status: 400 }})
  }} catch (error) {{
    return NextResponse.json({{ error: (error as Error).message }}, {{ status: 500 }})
  }}
}}"""


def compose(actions: Iterable[ServerAction], persistence: PersistenceMode) -> str:
    chosen = get_handlers.normalize(actions)
    if not chosen:
        return ""
    block = select_variant("server-route", PERSISTENCE, PersistenceMode(persistence))

    parts = [
        _header(block),
        _wallet_singleton(block),
        _method_handler("GET", "create", get_handlers.compose(chosen)),
    ]
    post = post_handlers.compose(chosen)
    if post:
        parts.append(_method_handler("POST", "receive", post))
    return code_block(join_sections(parts))
