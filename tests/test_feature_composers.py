from itertools import combinations, permutations

import pytest

from simple_mcp.fragments import did, inscription, messagebox, scaffold, token
from simple_mcp.models import (
    DIDFeature,
    InscriptionType,
    MessageBoxFeature,
    ScaffoldFeature,
    TokenOperation,
)
from simple_mcp.services.snippets import SnippetService

svc = SnippetService()

CATEGORIES = [
    (svc.token_handler, TokenOperation),
    (svc.inscription_handler, InscriptionType),
    (svc.messagebox_setup, MessageBoxFeature),
    (svc.did_integration, DIDFeature),
    (svc.scaffold, ScaffoldFeature),
]


@pytest.mark.parametrize("compose,tags", CATEGORIES)
def test_empty_selection_is_empty_document(compose, tags):
    assert compose([]) == ""


@pytest.mark.parametrize("compose,tags", CATEGORIES)
def test_output_is_deterministic(compose, tags):
    selection = list(tags)
    assert compose(selection) == compose(selection)


@pytest.mark.parametrize("compose,tags", CATEGORIES[:4])
def test_input_order_does_not_matter(compose, tags):
    members = list(tags)
    expected = compose(members)
    for perm in permutations(members):
        assert compose(list(perm)) == expected


def test_scaffold_reverse_order_is_identical():
    members = list(ScaffoldFeature)
    assert svc.scaffold(members) == svc.scaffold(list(reversed(members)))


@pytest.mark.parametrize("compose,tags", CATEGORIES)
def test_subset_output_is_embedded_in_superset(compose, tags):
    members = list(tags)
    full = compose(members)
    for size in (1, 2):
        for subset in combinations(members, size):
            sections = compose(list(subset)).split("\n\n")
            pos = -1
            for s in sections:
                found = full.find(s, pos + 1)
                assert found > pos, f"section out of order for {subset}"
                pos = found


def test_token_end_to_end_create_before_redeem():
    out = svc.token_handler(["redeem", "create"])
    assert "### Create Token" in out
    assert "### Redeem Token" in out
    assert out.index("### Create Token") < out.index("### Redeem Token")
    assert "### List Tokens" not in out


def test_token_full_precedence():
    out = svc.token_handler(list(reversed(list(TokenOperation))))
    titles = ["Create Token", "List Tokens", "Send Token\n", "Redeem Token", "Send Token via MessageBox"]
    positions = [out.index("### " + t) for t in titles]
    assert positions == sorted(positions)


def test_each_fragment_is_addressable_by_tag():
    for op in TokenOperation:
        frags = token.composer.select([op])
        assert len(frags) == 1
        assert frags[0].render() in svc.token_handler([op])


def test_inscription_hash_fragments_share_digest_code():
    out = svc.inscription_handler(["image-hash", "file-hash"])
    assert out.count("crypto.subtle.digest('SHA-256', buffer)") == 2
    assert out.index("File Hash Inscription") < out.index("Image Hash Inscription")
    assert "Hash of ${file.name}" in out


def test_messagebox_registry_url_is_passed_through():
    out = svc.messagebox_setup(["search", "certify"], "https://example.com/registry")
    assert "wallet.certifyForMessageBox(handle, 'https://example.com/registry')" in out
    assert "lookupIdentityByTag(query, 'https://example.com/registry')" in out
    assert messagebox.DEFAULT_REGISTRY_URL not in out
    assert out.index("MessageBox Certification") < out.index("Search Identity Registry")


def test_messagebox_default_registry():
    out = svc.messagebox_setup(["certify"])
    assert f"'{messagebox.DEFAULT_REGISTRY_URL}'" in out


def test_did_preamble_only_with_features():
    out = svc.did_integration(["resolve"])
    assert out.startswith("```typescript\nimport { DID } from '@bsv/simple/browser'\n```")
    assert "### Resolve DID" in out
    assert "### Get Wallet DID" not in out


def test_did_precedence():
    out = svc.did_integration(["list", "deactivate", "update", "resolve", "register", "get", "create"])
    order = ["Create DID Document", "Get Wallet DID", "Register DID", "Resolve DID",
             "Update DID", "Deactivate DID", "List Registered DID"]
    positions = [out.index("### " + t) for t in order]
    assert positions == sorted(positions)
    assert len(did.composer.fragments) == len(DIDFeature)


def test_scaffold_features_without_routes_emit_base_configuration():
    out = svc.scaffold(["payments", "overlay"])
    assert "## next.config.ts" in out
    assert '"@bsv/simple": "^0.2.0"' in out
    assert "## Features configured\n\n- payments\n\n- overlay" in out
    assert "### " not in out


def test_scaffold_feature_list_uses_precedence_order():
    out = svc.scaffold(["server-wallet", "did", "payments"])
    assert "## Features configured\n\n- payments\n\n- did\n\n- server-wallet\n\n###" in out
    assert out.index("### DID Resolution Proxy") < out.index("### Server wallet setup")


def test_scaffold_dedicated_fragments():
    out = svc.scaffold(["credentials", "messagebox"])
    assert "createIdentityRegistryHandler" in out
    assert "createCredentialIssuerHandler" in out
    assert "createServerWalletHandler" not in out
    assert not scaffold.composer.inert
    assert [f.name for f in scaffold.composer.select(["did"])] == ["feature:did", "did"]


def test_inscription_composer_covers_all_types():
    assert {t for f in inscription.composer.fragments for t in f.tags} == set(InscriptionType)


def test_scaffold_blocks_of_a_subset_appear_in_superset():
    small = svc.scaffold(["tokens"])
    large = svc.scaffold(["payments", "tokens"])
    for block in small.split("\n\n"):
        assert block in large
    assert "- tokens" in small
    assert "- payments" not in small
