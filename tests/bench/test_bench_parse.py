"""Parse benchmarks for markscope.

Measures whole-document tokenizing with the built-in HTML grammar, grammar
loading from config, and single-matcher detection.

Run: uv run pytest tests/bench/test_bench_parse.py --benchmark-only
"""

from __future__ import annotations

from markscope import (
    Cursor,
    RegistryBuilder,
    Tag,
    TagScope,
    parse,
    parse_grammar_config,
    to_json,
)
from markscope import html

# ── Shared inputs ──────────────────────────────────────────────────────────────

FLAT_DOCUMENT = " ".join(
    f'<p class="row">item {i} <a href="/items/{i}">link</a></p>' for i in range(50)
)
NESTED_DOCUMENT = "<div>" * 20 + "<span>core</span>" + "</div>" * 20
PLAIN_DOCUMENT = "no markup at all, just words " * 40

GRAMMAR_CONFIG = {
    "elements": [
        {"type": "builtin", "type_url": f"markscope.html.v1.{name}"}
        for name in ("div", "span", "p", "heading", "a", "img")
    ]
}


# ═══════════════════════════════════════════════════════════════════════════════
# Whole-document parse
# ═══════════════════════════════════════════════════════════════════════════════


def test_bench_parse_flat(benchmark):
    outcomes = benchmark(parse, FLAT_DOCUMENT)
    assert len([o for o in outcomes if not o.raw]) == 50


def test_bench_parse_nested(benchmark):
    outcomes = benchmark(parse, NESTED_DOCUMENT)
    assert outcomes[0].get("tag") == "div"


def test_bench_parse_plain(benchmark):
    outcomes = benchmark(parse, PLAIN_DOCUMENT)
    assert len(outcomes) == 1


def test_bench_parse_and_serialize(benchmark):
    result = benchmark(lambda: to_json(parse(FLAT_DOCUMENT)))
    assert result.startswith("[")


# ═══════════════════════════════════════════════════════════════════════════════
# Config loading
# ═══════════════════════════════════════════════════════════════════════════════


def test_bench_load_grammar(benchmark):
    registry = html.register(RegistryBuilder()).build()

    def load():
        return registry.load_grammar(parse_grammar_config(GRAMMAR_CONFIG))

    grammar = benchmark(load)
    assert len(grammar.matchers) == 6


# ═══════════════════════════════════════════════════════════════════════════════
# Single detection
# ═══════════════════════════════════════════════════════════════════════════════


def test_bench_detect_tag(benchmark):
    tag = Tag()
    text = '<a href="/x" class="btn primary" title="go">'
    outcome = benchmark(lambda: tag.detect(Cursor(text)))
    assert outcome is not None


def test_bench_detect_tag_scope(benchmark):
    scope = TagScope(name="^div$")
    outcome = benchmark(lambda: scope.detect(Cursor(NESTED_DOCUMENT)))
    assert outcome is not None


def test_bench_detect_pathological_name_pattern(benchmark):
    # RE2 runs in linear time; a backtracking engine would take O(2^N) here.
    tag = Tag(name=r"(a+)+$")
    text = "<" + "a" * 40 + "X>"
    outcome = benchmark(lambda: tag.detect(Cursor(text)))
    assert outcome is None


def test_bench_parse_stray_brackets(benchmark):
    # Unclosed "<" at every position: the tag name is checked before the
    # bracket scan, so this stays linear.
    text = "<" * 2000
    outcomes = benchmark(parse, text)
    assert len(outcomes) == 1
