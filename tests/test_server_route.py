import pytest

from simple_mcp.fragments import server_route
from simple_mcp.models import PersistenceMode, ServerAction
from simple_mcp.services.snippets import SnippetService

svc = SnippetService()

ENV_MARKER = "const privateKey = ENV_PRIVATE_KEY"
FILE_MARKER = "const privateKey = loadSavedKey() || PrivateKey.fromRandom().toHex()"
BOTH_MARKER = "process.env.SERVER_PRIVATE_KEY || loadSavedKey() || PrivateKey.fromRandom().toHex()"


def test_empty_actions_yield_empty_document():
    for mode in PersistenceMode:
        assert svc.server_route([], mode) == ""


@pytest.mark.parametrize("mode,present,absent", [
    ("env", ENV_MARKER, [FILE_MARKER, BOTH_MARKER, "loadSavedKey", "saveKey("]),
    ("file", FILE_MARKER, [ENV_MARKER, BOTH_MARKER, "SERVER_PRIVATE_KEY"]),
    ("both", BOTH_MARKER, [ENV_MARKER, FILE_MARKER]),
])
def test_persistence_blocks_are_exclusive(mode, present, absent):
    out = svc.server_route(["create"], mode)
    assert present in out
    for marker in absent:
        assert marker not in out


def test_both_mode_saves_only_when_env_var_absent():
    out = svc.server_route(["create", "balance"], "both")
    assert out.count(BOTH_MARKER) == 1
    assert "if (!process.env.SERVER_PRIVATE_KEY) {" in out
    assert "saveKey(privateKey, serverWallet.getIdentityKey())" in out
    assert "import { PrivateKey } from '@bsv/sdk'" in out
    assert "import(" not in out


def test_env_mode_requires_the_variable():
    out = svc.server_route(["create"], "env")
    assert "SERVER_PRIVATE_KEY env var is required" in out
    assert "@bsv/sdk" not in out


def test_post_handler_only_when_receive_selected():
    get_only = svc.server_route(["create", "request"], "file")
    assert "export async function GET" in get_only
    assert "export async function POST" not in get_only

    with_post = svc.server_route(["receive"], "file")
    assert "export async function GET" in with_post
    assert "export async function POST" in with_post
    assert "if (action === 'receive')" in with_post
    assert "if (action === 'create')" not in with_post


def test_status_is_served_by_create_branch():
    assert svc.server_route(["status"], "env") == svc.server_route(["create"], "env")
    assert svc.server_route(["status", "create"], "env").count("if (action === 'create')") == 1


def test_action_order_follows_precedence():
    out = svc.server_route(["balance", "request", "create"], "env")
    assert out == svc.server_route(["create", "request", "balance"], "env")
    assert out.index("'create')") < out.index("'request')") < out.index("'balance')")


def test_route_is_one_code_block():
    out = svc.server_route(list(ServerAction), PersistenceMode.BOTH)
    assert out.startswith("```typescript\n// app/api/server-wallet/route.ts")
    assert out.endswith("\n```")
    assert out.count("```") == 2


def test_every_persistence_mode_has_a_block():
    assert set(server_route.PERSISTENCE) == set(PersistenceMode)
