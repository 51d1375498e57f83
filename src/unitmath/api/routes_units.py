"""FastAPI router exposing unit rendering and reconciliation helpers."""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from unitmath.errors import UnitMathError
from unitmath.registry import UnitRegistry
from unitmath.units.equivalence import get_common
from unitmath.units.render import UnitDisplayFormat, render, render_all


router = APIRouter(prefix="/v1/units", tags=["units"])

_DEFAULT_REGISTRY = UnitRegistry.default()


def _registry_with(definitions: List[str]) -> UnitRegistry:
    if not definitions:
        return _DEFAULT_REGISTRY
    registry = _DEFAULT_REGISTRY.copy()
    registry.load_lines(definitions)
    return registry


class UnitEntry(BaseModel):
    symbol: str
    definition: str
    flattened: str


class UnitsListResp(BaseModel):
    units: List[UnitEntry]


@router.get("", response_model=UnitsListResp)
def list_units() -> UnitsListResp:
    entries = [
        UnitEntry(
            symbol=symbol,
            definition=render(unit, UnitDisplayFormat.FIRST_CHILDREN),
            flattened=render(unit, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED),
        )
        for symbol, unit in sorted(_DEFAULT_REGISTRY.snapshot().items())
        if symbol
    ]
    return UnitsListResp(units=entries)


class RenderReq(BaseModel):
    expression: str
    formats: List[UnitDisplayFormat] = Field(default_factory=list)
    definitions: List[str] = Field(default_factory=list, description="Extra definition lines")


class RenderResp(BaseModel):
    expression: str
    rendered: Dict[str, str]


@router.post("/render", response_model=RenderResp)
def render_units(req: RenderReq) -> RenderResp:
    try:
        unit = _registry_with(req.definitions).evaluate(req.expression)
    except UnitMathError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc)})

    rendered = render_all(unit)
    if req.formats:
        rendered = {fmt.value: rendered[fmt.value] for fmt in req.formats}
    return RenderResp(expression=req.expression, rendered=rendered)


class CommonReq(BaseModel):
    lhs: str
    rhs: str
    definitions: List[str] = Field(default_factory=list)


class CommonResp(BaseModel):
    compatible: bool
    common: Optional[str] = None


@router.post("/common", response_model=CommonResp)
def common_unit(req: CommonReq) -> CommonResp:
    try:
        registry = _registry_with(req.definitions)
        lhs = registry.evaluate(req.lhs)
        rhs = registry.evaluate(req.rhs)
    except UnitMathError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc)})

    common = get_common(lhs, rhs)
    if common is None:
        return CommonResp(compatible=False)
    return CommonResp(
        compatible=True,
        common=render(common, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED),
    )


class DefinitionsReq(BaseModel):
    lines: List[str]


class DefinitionsResp(BaseModel):
    ok: bool
    units: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


@router.post("/definitions/validate", response_model=DefinitionsResp)
def validate_definitions(req: DefinitionsReq) -> DefinitionsResp:
    registry = _DEFAULT_REGISTRY.copy()
    try:
        registry.load_lines(req.lines)
    except UnitMathError as exc:
        return DefinitionsResp(ok=False, error=str(exc))

    units = {
        symbol: render(unit, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED)
        for symbol, unit in registry.snapshot().items()
        if symbol and symbol not in _DEFAULT_REGISTRY
    }
    return DefinitionsResp(ok=True, units=units)


__all__ = ["router"]
