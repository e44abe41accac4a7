from enum import Enum

import pytest

from simple_mcp.errors import CompositionDegenerate
from simple_mcp.services.composer import (
    SnippetComposer,
    code_block,
    fragment,
    require_exhaustive,
    select_variant,
)


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


@fragment("red", Color.RED)
def red(suffix=""):
    return "R" + suffix


@fragment("green", Color.GREEN)
def green(suffix=""):
    return "G" + suffix


@fragment("blue", Color.BLUE)
def blue(suffix=""):
    return ""


@fragment("header")
def header(suffix=""):
    return "HEAD"


def _composer(**kw):
    return SnippetComposer("color", Color, [red, green, blue], **kw)


def test_compose_follows_declaration_order_not_input_order():
    c = _composer()
    assert c.compose(["green", "red"]) == "R\n\nG"
    assert c.compose([Color.RED, Color.GREEN]) == c.compose([Color.GREEN, Color.RED])


def test_empty_selection_yields_empty_string():
    assert _composer().compose([]) == ""
    assert _composer(preamble=[header]).compose([]) == ""


def test_empty_renders_are_skipped():
    assert _composer().compose(["blue"]) == ""
    assert _composer().compose(["blue", "green"]) == "G"


def test_preamble_precedes_fragments_and_context_is_forwarded():
    c = _composer(preamble=[header])
    assert c.compose(["red"], suffix="!") == "HEAD\n\nR!"


def test_duplicate_tags_are_collapsed():
    assert _composer().compose(["red", "red", Color.RED]) == "R"


def test_unvalidated_tag_fails_loudly():
    with pytest.raises(CompositionDegenerate):
        _composer().compose(["purple"])


def test_missing_fragment_is_detected_at_definition_time():
    with pytest.raises(CompositionDegenerate) as exc:
        SnippetComposer("color", Color, [red, green])
    assert "blue" in str(exc.value)


def test_inert_tags_satisfy_coverage_but_cannot_overlap():
    c = SnippetComposer("color", Color, [red, green], inert=[Color.BLUE])
    assert c.compose(["blue"]) == ""
    with pytest.raises(CompositionDegenerate):
        SnippetComposer("color", Color, [red, green, blue], inert=[Color.BLUE])


def test_duplicate_fragment_names_rejected():
    other_red = fragment("red", Color.BLUE)(lambda **_: "x")
    with pytest.raises(CompositionDegenerate):
        SnippetComposer("color", Color, [red, green, other_red])


def test_ordered_and_fragment_lookup():
    c = _composer()
    assert c.ordered(["blue", "red"]) == [Color.RED, Color.BLUE]
    assert c.fragment("green") is green
    assert [f.name for f in c.select(["blue", "green"])] == ["green", "blue"]


def test_variant_tables():
    table = {Color.RED: 1, Color.GREEN: 2, Color.BLUE: 3}
    require_exhaustive("color", table, Color)
    assert select_variant("color", table, Color.GREEN) == 2
    with pytest.raises(CompositionDegenerate):
        require_exhaustive("color", {Color.RED: 1}, Color)
    with pytest.raises(CompositionDegenerate):
        select_variant("color", {Color.RED: 1}, Color.BLUE)


def test_code_block_trims_surrounding_newlines():
    assert code_block("\nx = 1\n") == "```typescript\nx = 1\n```"
    assert code_block("a", "json") == "```json\na\n```"
