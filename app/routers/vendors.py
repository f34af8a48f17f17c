# =============================================================================
# app/routers/vendors.py - Vendor CRUD Endpoints
# =============================================================================
# Public reads, optionally filtered by market; owner-gated writes.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.dependencies import VendorServiceDep
from core.models.vendor import VendorCreate, VendorUpdate

router = APIRouter()

VendorId = Annotated[str, Path(description="Vendor id")]


@router.get("")
async def list_vendors(
    vendors: VendorServiceDep,
    market: Annotated[str | None, Query(description="Only vendors of this market id")] = None,
):
    """List vendors, newest first."""
    return {"vendors": vendors.list_for_market(market)}


@router.get("/{vendor_id}")
async def get_vendor(vendor_id: VendorId, vendors: VendorServiceDep):
    """Get one vendor."""
    return {"vendor": vendors.get(vendor_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_vendor(
    request: VendorCreate,
    vendors: VendorServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Register a vendor.

    The market_id is stored as given; it is not checked against existing
    markets.
    """
    return {"vendor": vendors.create(request, user)}


@router.put("/{vendor_id}")
async def update_vendor(
    vendor_id: VendorId,
    request: VendorUpdate,
    vendors: VendorServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Update a vendor. User must own the vendor."""
    return {"vendor": vendors.update(vendor_id, request.changes(), user)}


@router.delete("/{vendor_id}")
async def delete_vendor(
    vendor_id: VendorId,
    vendors: VendorServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete a vendor. User must own the vendor."""
    vendors.delete(vendor_id, user)
    return {"success": True, "message": "Vendor deleted successfully"}
