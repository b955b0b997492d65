# app/routers/products.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session

from app.core.auth import CallerIdentity, require_auth, require_seller
from app.core.errors import ValidationError
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.schemas.user import MessageRead
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

service = ProductService(ProductRepository(), SellerRepository())


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_session),
    seller_id: str | None = None,
    genre: str | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """
    List products, optionally for one seller and/or genre.
    """
    return service.list_products(
        session, skip=skip, limit=limit, seller_id=seller_id, genre=genre
    )


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    return service.get_product(session, product_id)


# -------- Seller endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_seller),
):
    """
    List a new product under the caller's seller card.
    """
    return service.create_product(session, identity, payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Update a product (owner or admin).
    """
    return service.update_product(session, identity, product_id, payload)


@router.delete("/{product_id}", response_model=MessageRead)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    service.delete_product(session, identity, product_id)
    return MessageRead(message="Product deleted successfully")


@router.post("/{product_id}/image", response_model=ProductRead)
def upload_product_image(
    product_id: str,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Upload a product image (owner or admin). Accepts JPEG, PNG, WEBP.
    """
    if not file.content_type:
        raise ValidationError("Missing content-type for uploaded file")

    return service.set_image(
        session, identity, product_id, file.content_type, file.file.read()
    )
