import pytest

from simple_mcp.errors import SchemaViolation, UnknownIdentifier
from simple_mcp.services.prompts import PromptService

svc = PromptService()


def _text(name, args=None):
    messages = svc.build(name, args)
    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    assert messages[0]["content"]["type"] == "text"
    return messages[0]["content"]["text"]


def test_list_prompts():
    listed = {p["name"]: p for p in svc.list()}
    assert set(listed) == {"integrate_simplifier", "add_bsv_feature", "debug_simple"}
    required = {a["name"]: a["required"] for a in listed["add_bsv_feature"]["arguments"]}
    assert required == {"feature": True, "framework": False}


def test_integrate_defaults():
    text = _text("integrate_simplifier")
    assert "into my nextjs project" in text
    assert "I need these features: payments." in text


def test_integrate_normalizes_feature_list():
    text = _text("integrate_simplifier", {"framework": "react", "features": "tokens, did ,,"})
    assert "into my react project" in text
    assert "I need these features: tokens, did." in text


def test_add_feature_substitutes_resource_uri():
    text = _text("add_bsv_feature", {"feature": "tokens"})
    assert 'add the "tokens" feature' in text
    assert "simple://api/tokens" in text
    assert "existing nextjs project" in text


@pytest.mark.parametrize("args", [{}, {"feature": ""}, {"feature": "   "}])
def test_missing_required_argument(args):
    with pytest.raises(SchemaViolation) as exc:
        svc.build("add_bsv_feature", args)
    assert exc.value.errors == [{
        "path": "/feature",
        "keyword": "required",
        "message": "Missing required argument 'feature'",
    }]


def test_debug_defaults_feature_to_general():
    text = _text("debug_simple", {"error": "result.tx is undefined"})
    assert 'in the "general" area' in text
    assert "Error/Problem: result.tx is undefined" in text


def test_unexpected_and_non_string_arguments():
    with pytest.raises(SchemaViolation) as exc:
        svc.build("debug_simple", {"error": 42, "verbose": "yes"})
    keywords = {e["keyword"] for e in exc.value.errors}
    assert keywords == {"additionalProperties", "type"}


def test_unknown_prompt():
    with pytest.raises(UnknownIdentifier) as exc:
        svc.build("write_my_app", {})
    assert exc.value.kind == "prompt"
