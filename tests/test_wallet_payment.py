from itertools import product

import pytest

from simple_mcp.errors import CompositionDegenerate
from simple_mcp.fragments import payment, wallet
from simple_mcp.models import Framework, PaymentType, WalletTarget
from simple_mcp.services.snippets import SnippetService

svc = SnippetService()


@pytest.mark.parametrize("target,framework", list(product(WalletTarget, Framework)))
def test_every_wallet_pair_renders_a_code_block(target, framework):
    out = svc.wallet_setup(target, framework)
    assert out.startswith("```typescript\n")
    assert out == svc.wallet_setup(target.value, framework.value)


def test_browser_and_server_wallets_differ():
    browser = svc.wallet_setup("browser", "nextjs")
    server = svc.wallet_setup("server", "nextjs")
    assert "createWallet" in browser
    assert "'use client'" in browser
    assert "createServerWalletHandler" in server
    assert "createWallet()" not in server


def test_server_without_nextjs_uses_node_wallet():
    assert svc.wallet_setup("server", "react") == svc.wallet_setup("server", "vanilla")
    assert "ServerWallet.create" in svc.wallet_setup("server", "vanilla")


def test_unknown_wallet_pair_is_degenerate():
    with pytest.raises(ValueError):
        wallet.compose("mobile", "nextjs")


def test_payment_variants_are_distinct():
    outs = {t: svc.payment_handler(t) for t in PaymentType}
    assert "wallet.pay(" in outs[PaymentType.SIMPLE]
    assert "wallet.send(" in outs[PaymentType.MULTI_OUTPUT]
    assert "wallet.fundServerWallet(" in outs[PaymentType.SERVER_FUNDING]
    assert len(set(outs.values())) == 3


def test_payment_default_basket():
    out = svc.payment_handler("multi-output")
    assert f"o.basket || '{payment.DEFAULT_BASKET}'" in out


def test_payment_custom_basket_and_change_basket():
    out = svc.payment_handler("simple", basket="tips", change_basket="change")
    assert "basket: 'tips'" in out
    assert "changeBasket: 'change'" in out
    assert "changeBasket" not in svc.payment_handler("simple", basket="tips")


def test_server_funding_passes_change_basket_positionally():
    out = svc.payment_handler("server-funding", "funding", "leftover")
    assert "paymentRequest,\n    'funding',\n    'leftover'\n  )" in out


def test_missing_variant_is_reported():
    with pytest.raises(CompositionDegenerate):
        payment.select_variant("payment", {}, PaymentType.SIMPLE)
