# simple_mcp/fragments/payment.py
from __future__ import annotations

from typing import Callable, Dict, Optional

from simple_mcp.models import PaymentType
from simple_mcp.services.composer import code_block, require_exhaustive, select_variant

DEFAULT_BASKET = "payments"


def _change_option(change_basket: Optional[str], indent: str) -> str:
    if not change_basket:
        return ""
    return f",\n{indent}changeBasket: '{change_basket}'"


def simple_payment(basket: str, change_basket: Optional[str]) -> str:
    return code_block(f"""
async function sendPayment(
  wallet: BrowserWallet,
  recipientKey: string,
  satoshis: number
) {{
  const result = await wallet.pay({{
    to: recipientKey,
    satoshis,
    basket: '{basket}'{_change_option(change_basket, '    ')}
  }})

  console.log('TXID:', result.txid)

  return result
}}
""")


def multi_output_payment(basket: str, change_basket: Optional[str]) -> str:
    return code_block(f"""
async function sendMultiOutput(
  wallet: BrowserWallet,
  outputs: Array<{{
    to?: string
    satoshis?: number
    data?: (string | object | number[])[]
    basket?: string
  }}>
) {{
  const result = await wallet.send({{
    outputs: outputs.map(o => ({{
      to: o.to,
      satoshis: o.satoshis,
      data: o.data,
      basket: o.basket || '{basket}'
    }})),
    description: 'Multi-output transaction'{_change_option(change_basket, '    ')}
  }})

  console.log('TXID:', result.txid)
  console.log('Outputs:', result.outputDetails.map(d => `#${{d.index}}: ${{d.type}} (${{d.satoshis}} sats)`))

  return result
}}

// Usage:
// await sendMultiOutput(wallet, [
//   {{ to: recipientKey, satoshis: 1000 }},                    // P2PKH
//   {{ data: ['Hello!'] }},                                     // OP_RETURN
//   {{ to: wallet.getIdentityKey(), data: [{{ v: 1 }}], satoshis: 1 }}  // PushDrop
// ])
""")


def server_funding(basket: str, change_basket: Optional[str]) -> str:
    fund_args = f"    paymentRequest,\n    '{basket}'"
    if change_basket:
        fund_args += f",\n    '{change_basket}'"
    return code_block(f"""
async function fundServer(wallet: BrowserWallet, serverApiUrl: string) {{
  // 1. Get payment request from server
  const res = await fetch(`${{serverApiUrl}}?action=request`)
  const {{ paymentRequest }} = await res.json()

  // 2. Fund server wallet via BRC-29 derivation
  const result = await wallet.fundServerWallet(
{fund_args}
  )

  if (!result.tx) {{
    throw new Error('No transaction bytes returned')
  }}

  // 3. Send tx to server for internalization
  const receiveRes = await fetch(`${{serverApiUrl}}?action=receive`, {{
    method: 'POST',
    headers: {{ 'Content-Type': 'application/json' }},
    body: JSON.stringify({{
      tx: Array.from(result.tx),
      senderIdentityKey: wallet.getIdentityKey(),
      derivationPrefix: paymentRequest.derivationPrefix,
      derivationSuffix: paymentRequest.derivationSuffix,
      outputIndex: 0
    }})
  }})

  const receiveData = await receiveRes.json()
  if (!receiveData.success) {{
    throw new Error(receiveData.error || 'Server receive failed')
  }}

  console.log('Server funded:', result.txid)
  return result
}}
""")


VARIANTS: Dict[PaymentType, Callable[[str, Optional[str]], str]] = {
    PaymentType.SIMPLE: simple_payment,
    PaymentType.MULTI_OUTPUT: multi_output_payment,
    PaymentType.SERVER_FUNDING: server_funding,
}

require_exhaustive("payment", VARIANTS, PaymentType)


def compose(
    payment_type: PaymentType,
    basket: Optional[str] = None,
    change_basket: Optional[str] = None,
) -> str:
    render = select_variant("payment", VARIANTS, PaymentType(payment_type))
    return render(basket or DEFAULT_BASKET, change_basket)
