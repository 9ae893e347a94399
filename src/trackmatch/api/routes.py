"""API routes for carrier detection."""

from fastapi import APIRouter, HTTPException, Query

from trackmatch.carriers.base import BaseCarrier, TrackingMatch
from trackmatch.exceptions import UnknownCarrierError
from trackmatch.services.detection import ranker
from trackmatch.services.registry import get_registry

router = APIRouter()


def _match_to_dict(match: TrackingMatch, carrier: BaseCarrier) -> dict:
    return {
        "provider_key": match.provider_key,
        "name": carrier.display_name,
        "tracking_url": match.tracking_url,
        "ambiguity_score": match.ambiguity_score,
        "service": match.service,
    }


@router.get("/api/detect-carrier")
async def detect_carrier(
    tracking_number: str,
    shipping_from: str = Query(..., min_length=2, max_length=2),
    shipping_to: str = Query(..., min_length=2, max_length=2),
):
    """API endpoint to detect carriers from a tracking number and route."""
    registry = get_registry()
    ranked = ranker.rank(registry.match_all(tracking_number, shipping_from, shipping_to))
    matches = [_match_to_dict(m, registry.get_provider(m.provider_key)) for m in ranked]

    return {
        "tracking_number": tracking_number,
        "best": matches[0] if matches else None,
        "matches": matches,
    }


@router.get("/api/carriers")
async def list_carriers():
    """API endpoint to list available carriers."""
    return [
        {"id": c.get_key(), "name": c.display_name, "icon": c.icon_path}
        for c in get_registry()
    ]


@router.get("/api/carriers/{carrier_id}/tracking-url")
async def carrier_tracking_url(carrier_id: str, tracking_number: str):
    """API endpoint to build a carrier's tracking URL."""
    try:
        carrier = get_registry().get_provider(carrier_id)
    except UnknownCarrierError:
        raise HTTPException(status_code=404, detail="Carrier not found") from None

    return {
        "carrier_id": carrier_id,
        "tracking_url": carrier.get_tracking_url(tracking_number),
    }
