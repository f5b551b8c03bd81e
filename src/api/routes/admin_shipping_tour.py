from fastapi import APIRouter, Depends

from src.adapters.sqlite.repos import SQLiteOptionsStore
from src.api.deps import get_options_store, get_store_manager
from src.api.schemas import CloseTourResponse, ShippingTourResponse
from src.components.shipping_tour import run_close_tour, run_get_tour
from src.domain.entities import User

router = APIRouter()


@router.get("", response_model=ShippingTourResponse)
def get_shipping_tour(
    current_user: User = Depends(get_store_manager),
    options: SQLiteOptionsStore = Depends(get_options_store),
) -> ShippingTourResponse:
    """Tour configuration, if the default shipping zones tour should be shown."""
    result = run_get_tour(options=options)
    return ShippingTourResponse(
        show=result.show,
        config=result.config.to_dict() if result.config else None,
    )


@router.post("/close", response_model=CloseTourResponse)
def close_shipping_tour(
    current_user: User = Depends(get_store_manager),
    options: SQLiteOptionsStore = Depends(get_options_store),
) -> CloseTourResponse:
    """Mark the default shipping zones as reviewed."""
    result = run_close_tour(options=options)
    return CloseTourResponse(updated=result.updated)
