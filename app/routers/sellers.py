# app/routers/sellers.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.auth import CallerIdentity, require_seller
from app.core.errors import ValidationError
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.schemas.seller import SellerCardPayload, SellerCardResult, SellerRead
from app.schemas.user import MessageRead
from app.services.seller_service import SellerService

router = APIRouter(tags=["Sellers"])

service = SellerService(SellerRepository(), ProductRepository())


def _upsert(session: Session, identity: CallerIdentity, payload: SellerCardPayload):
    seller, created, updated = service.upsert_card(session, identity.uid, payload)
    result = SellerCardResult(
        message="Seller card created" if created else "Seller card updated",
        seller=SellerRead.model_validate(seller, from_attributes=True),
        products_updated=updated,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        content=result.model_dump(mode="json"),
    )


# -------- Caller's own card --------


@router.get("/seller/card", response_model=SellerRead)
def get_my_card(
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    return service.get_card(session, identity.uid)


@router.post("/seller/card", response_model=SellerCardResult)
def upsert_my_card(
    payload: SellerCardPayload,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    """
    Create or update the caller's seller card.

    Returns 201 on creation, 200 on update. On update every product of
    the seller gets the new title and genre.
    """
    return _upsert(session, identity, payload)


@router.post("/seller/card/image", response_model=SellerRead)
def upload_card_image(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    """Upload the card image; the stored path replaces `image`."""
    if not file.content_type:
        raise ValidationError("Missing content-type for uploaded file")

    return service.set_card_image(
        session, identity.uid, file.content_type, file.file.read()
    )


@router.delete("/seller/card", response_model=MessageRead)
def delete_my_card(
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    """Delete the caller's card together with all of their products."""
    removed = service.delete_card(session, identity.uid)
    return MessageRead(message=f"Seller card deleted with {removed} product(s)")


# -------- Public storefronts --------


@router.get("/sellers", response_model=list[SellerRead])
def list_sellers(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    return service.list_sellers(session, skip=skip, limit=limit)


@router.post("/sellers", response_model=SellerCardResult)
def create_seller(
    payload: SellerCardPayload,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    """Same as POST /seller/card."""
    return _upsert(session, identity, payload)


@router.get("/sellers/{seller_id}", response_model=SellerRead)
def get_seller(
    seller_id: str,
    session: Session = Depends(get_session),
):
    return service.get_card(session, seller_id)
