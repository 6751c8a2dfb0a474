"""
Asset Fallback Tests

SVG extraction and validation heuristics, and the validate-or-placeholder
wrapper (primary -> secondary -> placeholder).
"""

import asyncio
import logging

import pytest

from services.asset_fallback import (
    extract_svg,
    gather_with_fallback,
    has_drawable_elements,
    svg_with_fallback,
    uses_theme_colors,
    validate_svg_asset,
    with_fallback,
)
from services.placeholder_assets import placeholder_for
from services.svg_templates import synthesize_diagram

GOOD_SVG = '<svg viewBox="0 0 10 10"><rect width="5" height="5" fill="hsl(var(--primary))"/></svg>'
EMPTY_SVG = '<svg viewBox="0 0 10 10"><text>hi</text></svg>'


def is_text(value):
    return isinstance(value, str) and bool(value)


class TestSvgValidation:

    def test_extract_from_chatty_output(self):
        raw = f"Sure! Here is your image:\n```svg\n{GOOD_SVG}\n```\nEnjoy."
        assert extract_svg(raw) == GOOD_SVG

    def test_extract_first_fragment_case_insensitive(self):
        raw = '<SVG><circle r="1"/></SVG> and <svg><rect/></svg>'
        assert extract_svg(raw) == '<SVG><circle r="1"/></SVG>'

    def test_extract_missing(self):
        assert extract_svg("no markup here") is None
        assert extract_svg("<svg unterminated") is None
        assert extract_svg(None) is None

    def test_drawable_elements(self):
        assert has_drawable_elements(GOOD_SVG)
        assert has_drawable_elements('<svg><polyline points="0,0 1,1"/></svg>')
        assert not has_drawable_elements(EMPTY_SVG)
        # tag names that merely start with a drawable name don't count
        assert not has_drawable_elements("<svg><linearGradient/></svg>")

    def test_theme_colors(self):
        assert uses_theme_colors(GOOD_SVG)
        assert not uses_theme_colors('<svg><rect fill="#fff"/></svg>')

    def test_validate_svg_asset(self):
        assert validate_svg_asset(f"text {GOOD_SVG} text") == GOOD_SVG
        assert validate_svg_asset(EMPTY_SVG) is None
        assert validate_svg_asset("") is None

    def test_validate_requires_theme_colors_when_asked(self):
        plain = '<svg><rect fill="#fff"/></svg>'
        assert validate_svg_asset(plain) == plain
        assert validate_svg_asset(plain, require_theme_colors=True) is None
        assert validate_svg_asset(GOOD_SVG, require_theme_colors=True) == GOOD_SVG


class TestWithFallback:

    @pytest.mark.asyncio
    async def test_primary_result_used_when_valid(self):
        async def primary():
            return "asset"

        assert await with_fallback(primary, "placeholder", is_text) == "asset"

    @pytest.mark.asyncio
    async def test_sync_generators_accepted(self):
        assert await with_fallback(lambda: "asset", "placeholder", is_text) == "asset"

    @pytest.mark.asyncio
    async def test_primary_error_uses_secondary(self, caplog):
        async def primary():
            raise TimeoutError("model timed out")

        with caplog.at_level(logging.INFO, logger="services.asset_fallback"):
            result = await with_fallback(primary, "placeholder", is_text, secondary=lambda: "synthesized", label="scene")

        assert result == "synthesized"
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors and "[Fallback] scene" in errors[0].getMessage()
        assert "TimeoutError" in errors[0].getMessage()

    @pytest.mark.asyncio
    async def test_invalid_primary_without_secondary_uses_placeholder(self, caplog):
        with caplog.at_level(logging.WARNING, logger="services.asset_fallback"):
            result = await with_fallback(lambda: "", "placeholder", is_text)

        assert result == "placeholder"
        assert any("rejected by validation" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_both_fail_uses_placeholder(self):
        def primary():
            raise ValueError("bad json")

        async def secondary():
            raise RuntimeError("also broken")

        assert await with_fallback(primary, "placeholder", is_text, secondary=secondary) == "placeholder"

    @pytest.mark.asyncio
    async def test_secondary_not_called_when_primary_valid(self):
        calls = []

        def secondary():
            calls.append(1)
            return "secondary"

        assert await with_fallback(lambda: "primary", "placeholder", is_text, secondary=secondary) == "primary"
        assert calls == []

    @pytest.mark.asyncio
    async def test_raising_validator_counts_as_invalid(self):
        def validate(value):
            raise KeyError("schema")

        assert await with_fallback(lambda: "asset", "placeholder", validate) == "placeholder"


class TestGatherWithFallback:

    @pytest.mark.asyncio
    async def test_order_preserved_and_failures_isolated(self):
        async def slow():
            await asyncio.sleep(0.02)
            return "slow"

        async def fast():
            return "fast"

        def broken():
            raise RuntimeError("scene 2 failed")

        results = await gather_with_fallback([slow, broken, fast, lambda: ""], "placeholder", is_text, label="scene")
        assert results == ["slow", "placeholder", "fast", "placeholder"]

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await gather_with_fallback([], "placeholder", is_text) == []


class TestSvgWithFallback:

    @pytest.mark.asyncio
    async def test_extracts_fragment_from_model_text(self):
        async def model():
            return f"Here you go: {GOOD_SVG} Hope it helps!"

        assert await svg_with_fallback(model, "anything", "illustration") == GOOD_SVG

    @pytest.mark.asyncio
    async def test_undrawable_output_gets_matched_placeholder(self):
        result = await svg_with_fallback(lambda: EMPTY_SVG, "court hearing steps", "illustration")
        assert result == placeholder_for("court hearing steps", "illustration")
        assert "Legal Process" in result

    @pytest.mark.asyncio
    async def test_synthesizer_as_secondary(self):
        def model():
            raise ConnectionError("offline")

        concepts = [{"name": "Rent", "description": "monthly"}, {"name": "Deposit", "description": "upfront"}]
        result = await svg_with_fallback(
            model, "lease", "diagram",
            secondary=lambda: synthesize_diagram("Lease", concepts, "Classic"),
        )
        assert result == synthesize_diagram("Lease", concepts, "Classic")

    @pytest.mark.asyncio
    async def test_theme_color_requirement(self):
        plain = '<svg><rect fill="#fff"/></svg>'
        result = await svg_with_fallback(lambda: plain, "", "diagram", require_theme_colors=True)
        assert result == placeholder_for("", "diagram")
