"""Diagram API endpoints

Deterministic diagram synthesis and the fallback helpers around it:
- Themed SVG concept diagrams (JSON or raw image/svg+xml)
- Keyword extraction for when no concept list is available
- Validation of model-produced SVG with placeholder substitution
"""
import logging
import traceback
from typing import List, Optional
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

from config import settings
from models.diagram import Concept
from services.asset_fallback import gather_with_fallback, svg_with_fallback, validate_svg_asset
from services.diagram_themes import THEMES
from services.keyword_extractor import concepts_from_text, extract_keywords
from services.placeholder_assets import placeholder_for
from services.svg_templates import plan_diagram, render_plan


router = APIRouter(prefix="/diagram", tags=["diagram"])


# =============================================================================
# Request/Response Models
# =============================================================================

class SynthesizeRequest(BaseModel):
    title: str = ""
    concepts: List[Concept] = Field(default_factory=list)
    theme: Optional[str] = Field(default=None, description="Theme id, any case; unknown ids render as Classic")


class SynthesizeResponse(BaseModel):
    svg: str
    layout: str
    theme: str
    width: int
    height: int
    concept_count: int


class ThemeInfo(BaseModel):
    id: str
    corner: str
    stroke: str
    palette: List[str]
    background: Optional[str] = None


class KeywordsRequest(BaseModel):
    text: str = ""
    max: Optional[int] = Field(default=None, ge=1, le=50)


class KeywordsResponse(BaseModel):
    keywords: List[str]


class FromTextRequest(BaseModel):
    title: str = ""
    text: str = ""
    theme: Optional[str] = None
    max_concepts: Optional[int] = Field(default=None, ge=1, le=50)


class ValidateRequest(BaseModel):
    content: str = ""
    description: str = ""
    kind: str = Field(default="illustration", description="illustration | diagram")
    require_theme_colors: bool = False


class ValidateResponse(BaseModel):
    valid: bool
    svg: str


class ValidateScenesRequest(BaseModel):
    scenes: List[str] = Field(default_factory=list, description="Raw model output, one per scene")
    description: str = ""
    kind: str = Field(default="illustration", description="illustration | diagram")
    require_theme_colors: bool = False


class ValidateScenesResponse(BaseModel):
    valid: List[bool]
    svgs: List[str]


def _build(title: str, concepts: List[Concept], theme: Optional[str]) -> SynthesizeResponse:
    capped = concepts[:settings.max_request_concepts]
    if len(concepts) > len(capped):
        logger.warning(f"[Diagram] Request had {len(concepts)} concepts, keeping {len(capped)}")
    plan = plan_diagram(title, capped, theme or settings.default_theme)
    return SynthesizeResponse(
        svg=render_plan(plan),
        layout=plan.kind.value,
        theme=plan.theme.id.value,
        width=plan.width,
        height=plan.height,
        concept_count=len(plan.concepts),
    )


# =============================================================================
# API Endpoints
# =============================================================================

@router.get("/themes", response_model=List[ThemeInfo])
async def list_themes():
    """List available themes with their shape style and palette."""
    return [
        ThemeInfo(
            id=theme_id.value,
            corner=theme.shape.corner.value,
            stroke=theme.shape.stroke.value,
            palette=list(theme.palette),
            background=theme.background,
        )
        for theme_id, theme in THEMES.items()
    ]


@router.post("/synthesize", response_model=SynthesizeResponse)
async def synthesize(request: SynthesizeRequest):
    """Build a themed SVG diagram from a title and concept list."""
    try:
        result = _build(request.title, request.concepts, request.theme)
        logger.info(f"[Diagram] Synthesized {result.layout} diagram, {result.concept_count} concepts, theme={result.theme}")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[Diagram] Synthesis failed: {type(e).__name__}: {str(e)}")
        logger.error(f"[Diagram] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Diagram synthesis failed: {str(e)}")


@router.post("/render")
async def render(request: SynthesizeRequest):
    """Same as /synthesize but returns the SVG document itself."""
    try:
        result = _build(request.title, request.concepts, request.theme)
        return Response(content=result.svg, media_type="image/svg+xml")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[Diagram] Render failed: {type(e).__name__}: {str(e)}")
        logger.error(f"[Diagram] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Diagram render failed: {str(e)}")


@router.post("/keywords", response_model=KeywordsResponse)
async def keywords(request: KeywordsRequest):
    """Most frequent content words of a text block."""
    return KeywordsResponse(keywords=extract_keywords(request.text, request.max or settings.keyword_max))


@router.post("/from-text", response_model=SynthesizeResponse)
async def from_text(request: FromTextRequest):
    """Keyword fallback concepts, then synthesis."""
    try:
        concepts = concepts_from_text(
            request.text,
            request.max_concepts or settings.keyword_max,
            filler=settings.keyword_filler_description,
        )
        result = _build(request.title, concepts, request.theme)
        logger.info(f"[Diagram] Keyword diagram: {result.concept_count} concepts from {len(request.text)} chars")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[Diagram] Keyword diagram failed: {type(e).__name__}: {str(e)}")
        logger.error(f"[Diagram] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Diagram synthesis failed: {str(e)}")


@router.post("/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest):
    """Extract and check model SVG output; substitute a placeholder if it fails."""
    svg = await svg_with_fallback(
        lambda: request.content,
        request.description,
        request.kind,
        require_theme_colors=request.require_theme_colors,
    )
    valid = validate_svg_asset(request.content, request.require_theme_colors) is not None
    return ValidateResponse(valid=valid, svg=svg)


@router.post("/validate-scenes", response_model=ValidateScenesResponse)
async def validate_scenes(request: ValidateScenesRequest):
    """Check every scene of an animation; failed scenes share one placeholder."""
    def scene(content: str):
        return lambda: validate_svg_asset(content, request.require_theme_colors)

    placeholder = placeholder_for(request.description, request.kind)
    svgs = await gather_with_fallback(
        [scene(content) for content in request.scenes],
        placeholder,
        lambda svg: svg is not None,
        label=f"{request.kind} scene",
    )
    valid = [validate_svg_asset(content, request.require_theme_colors) is not None
             for content in request.scenes]
    logger.info(f"[Fallback] Scenes checked: {sum(valid)}/{len(valid)} valid")
    return ValidateScenesResponse(valid=valid, svgs=svgs)
