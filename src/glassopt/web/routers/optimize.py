"""Cut list optimization endpoint."""

import logging

from fastapi import APIRouter

from glassopt.domain import PieceSpec
from glassopt.infrastructure import PackingResult, PackingService, SheetConfig
from glassopt.infrastructure.exporters import result_to_dict
from glassopt.web.schemas.requests import OptimizeRequest
from glassopt.web.schemas.responses import OptimizeResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/optimize", tags=["optimize"])


def run_optimization(request: OptimizeRequest) -> PackingResult:
    """Plan the sheets for an optimize or export request."""
    sheet = SheetConfig(width=request.sheet.width, height=request.sheet.height)
    specs = [
        PieceSpec(
            id=piece.id,
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            label=piece.label,
            color=piece.color,
        )
        for piece in request.pieces
    ]
    return PackingService(sheet).optimize(specs)


@router.post("", response_model=OptimizeResponseSchema)
async def optimize_cut_list(request: OptimizeRequest) -> OptimizeResponseSchema:
    """Optimize a cut list onto stock sheets.

    Args:
        request: Sheet dimensions and cut list.

    Returns:
        Packed sheets with placements and statistics, plus any pieces
        that could not be placed.
    """
    result = run_optimization(request)
    if result.rejected_count:
        logger.info("%d pieces rejected (%s)", result.rejected_count, result.status.value)
    return OptimizeResponseSchema.model_validate(result_to_dict(result))
