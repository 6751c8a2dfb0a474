"""Validate-or-placeholder wrapper for generated assets

Any creative asset coming back from the model (scene SVG, diagram SVG) goes
through the same path:

    generator() --ok & valid--> asset
        | raises / invalid
        v
    secondary() --ok & valid--> asset      (e.g. the deterministic synthesizer)
        | raises / invalid / absent
        v
    placeholder

Failures are logged and never propagate to the caller.
"""
import asyncio
import inspect
import logging
import re
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar, Union

from services.placeholder_assets import placeholder_for

logger = logging.getLogger(__name__)

T = TypeVar("T")
Generator = Callable[[], Union[T, Awaitable[T]]]

SVG_FRAGMENT_RE = re.compile(r"<svg[\s\S]*?</svg>", re.IGNORECASE)
DRAWABLE_TAG_RE = re.compile(r"<(path|rect|circle|ellipse|polygon|polyline|line)\b", re.IGNORECASE)
THEME_COLOR_MARKER = "hsl(var("


def extract_svg(text: Any) -> Optional[str]:
    """First <svg>...</svg> fragment in model output, or None."""
    if not isinstance(text, str):
        return None
    match = SVG_FRAGMENT_RE.search(text)
    return match.group(0) if match else None


def has_drawable_elements(svg: Optional[str]) -> bool:
    return bool(svg) and DRAWABLE_TAG_RE.search(svg) is not None


def uses_theme_colors(svg: Optional[str]) -> bool:
    """True if the SVG references the host page's CSS color variables."""
    return bool(svg) and THEME_COLOR_MARKER in svg


def validate_svg_asset(text: Any, require_theme_colors: bool = False) -> Optional[str]:
    """Extracted SVG when it passes the checks, else None."""
    svg = extract_svg(text)
    if svg is None or not has_drawable_elements(svg):
        return None
    if require_theme_colors and not uses_theme_colors(svg):
        return None
    return svg


async def _attempt(step: str, generator: Generator, validate: Callable[[Any], bool], label: str):
    """Run one generator. Returns (ok, value); never raises."""
    try:
        result = generator()
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        logger.error(f"[Fallback] {label}: {step} generator failed: {type(e).__name__}: {e}")
        return False, None

    try:
        valid = bool(validate(result))
    except Exception as e:
        logger.error(f"[Fallback] {label}: validator raised on {step} result: {type(e).__name__}: {e}")
        valid = False
    if not valid:
        logger.warning(f"[Fallback] {label}: {step} result rejected by validation")
        return False, None
    return True, result


async def with_fallback(generator: Generator,
                        placeholder: T,
                        validate: Callable[[Any], bool],
                        secondary: Optional[Generator] = None,
                        label: str = "asset") -> T:
    """Run generator; on error or invalid output try secondary once, then placeholder.

    Both generator and secondary may be plain callables or coroutine functions.
    """
    ok, value = await _attempt("primary", generator, validate, label)
    if ok:
        return value

    if secondary is not None:
        ok, value = await _attempt("secondary", secondary, validate, label)
        if ok:
            logger.info(f"[Fallback] {label}: using secondary result")
            return value

    logger.warning(f"[Fallback] {label}: using placeholder")
    return placeholder


async def gather_with_fallback(generators: Sequence[Generator],
                               placeholder: T,
                               validate: Callable[[Any], bool],
                               label: str = "asset") -> List[T]:
    """Run each generator under with_fallback concurrently, results in input order."""
    return list(await asyncio.gather(*(
        with_fallback(gen, placeholder, validate, label=f"{label}[{i}]")
        for i, gen in enumerate(generators)
    )))


async def svg_with_fallback(generator: Generator,
                            description: str = "",
                            kind: str = "illustration",
                            secondary: Optional[Generator] = None,
                            require_theme_colors: bool = False) -> str:
    """Model SVG text -> validated SVG fragment or a keyword-matched placeholder.

    The generator returns raw model text; the <svg> fragment is extracted from
    it. A secondary generator (usually the diagram synthesizer) returns
    ready SVG and is held to the same checks.
    """
    def extract(gen: Generator) -> Generator:
        async def run():
            raw = gen()
            if inspect.isawaitable(raw):
                raw = await raw
            return validate_svg_asset(raw, require_theme_colors)
        return run

    return await with_fallback(
        extract(generator),
        placeholder_for(description, kind),
        lambda svg: svg is not None,
        secondary=extract(secondary) if secondary is not None else None,
        label=f"{kind} svg",
    )
