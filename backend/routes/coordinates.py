"""
Coordinate engine endpoints for the drawing surface.

The canvas previews a rectangle with exactly the validator the room
routes enforce, and converts between canvas pixels and stored fractions.
"""

from fastapi import APIRouter, HTTPException
from schemas import (
    CoordinatesIn,
    PixelCoordinatesIn,
    DenormalizeRequest,
    PixelCoordinatesOut,
    ValidationOut,
)
from services.coordinate_engine import (
    NormalizedRectangle,
    PixelRectangle,
    denormalize,
    normalize,
    validate_room_coordinates,
)

router = APIRouter(prefix="/api/coordinates", tags=["coordinates"])


@router.post("/validate", response_model=ValidationOut)
async def validate_coordinates(req: CoordinatesIn):
    """Report every structural problem with a normalized rectangle."""
    result = validate_room_coordinates(NormalizedRectangle(**req.model_dump()))
    return result.to_dict()


@router.post("/normalize", response_model=CoordinatesIn)
async def normalize_coordinates(req: PixelCoordinatesIn):
    try:
        rect = normalize(PixelRectangle(**req.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return rect.to_dict()


@router.post("/denormalize", response_model=PixelCoordinatesOut)
async def denormalize_coordinates(req: DenormalizeRequest):
    try:
        rect = denormalize(
            NormalizedRectangle(**req.coordinates.model_dump()),
            req.image_width,
            req.image_height,
            round_pixels=req.round_pixels,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return rect.to_dict()
