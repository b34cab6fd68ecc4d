"""
Products API Endpoints

Product table with category names, product form support, product writes and
image upload.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, ValidationError

from shop_admin.notifications import NoticeCollector
from shop_admin.serving.api.dependencies import get_notifier, get_product_service
from shop_admin.serving.api.responses import ActionResponse
from shop_admin.services import ProductInput, ProductService
from shop_admin.storage import UploadedFile

router = APIRouter()


class ProductSummary(BaseModel):
    """Product table row"""
    id: str
    name: Optional[str]
    description: Optional[str]
    image: Optional[str]
    price: Optional[str]
    stock: Optional[str]
    rating: Optional[str]
    date: Optional[str]
    category_id: Optional[str]
    subcategory_id: Optional[str]
    category_name: str
    in_stock: bool
    tag_ids: List[str]

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    items: List[ProductSummary]
    total: int


class FormOptionsResponse(BaseModel):
    """Categories and tags offered by the product form"""
    categories: List[Dict[str, Any]]
    tags: List[Dict[str, Any]]


class ImageResponse(ActionResponse):
    image: str


# Submitted empty, these fields are written as the given value
CLEARABLE_FIELDS: Dict[str, Optional[str]] = {
    "description": "",
    "category_id": None,
    "subcategory_id": None,
}


async def product_form(
    request: Request,
    name: str = Form(...),
    description: Optional[str] = Form(None),
    price: str = Form(...),
    stock: str = Form(...),
    rating: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    subcategory_id: Optional[str] = Form(None),
    tag_ids: Optional[List[str]] = Form(None),
) -> ProductInput:
    """
    Product form fields posted as multipart form data.

    Fields the form leaves out stay unset, so an update keeps them. Empty
    description, category_id and subcategory_id fields clear the stored value.
    """
    fields = {
        "name": name,
        "description": description,
        "price": price,
        "stock": stock,
        "rating": rating,
        "date": date,
        "category_id": category_id,
        "subcategory_id": subcategory_id,
        "tag_ids": tag_ids,
    }
    values = {key: value for key, value in fields.items() if value is not None}
    form = await request.form()
    for key, cleared in CLEARABLE_FIELDS.items():
        if form.get(key) == "":
            values[key] = cleared
    try:
        return ProductInput(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


async def _read_upload(image: Optional[UploadFile]) -> Optional[UploadedFile]:
    if image is None or not image.filename:
        return None
    return UploadedFile(
        filename=image.filename,
        content_type=image.content_type or "",
        data=await image.read(),
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: str = "",
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    """List products; search matches name, description or category name."""
    rows = await service.list_rows(search)
    return ProductListResponse(
        items=[ProductSummary.model_validate(row) for row in rows],
        total=len(rows),
    )


@router.get("/form-options", response_model=FormOptionsResponse)
async def get_form_options(
    service: ProductService = Depends(get_product_service),
) -> FormOptionsResponse:
    options = await service.form_options()
    return FormOptionsResponse(categories=options.categories, tags=options.tags)


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    return await service.get(product_id)


@router.post("", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductInput = Depends(product_form),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    """Create a product; an image, when given, is uploaded before the write."""
    product_id = await service.create(body, image=await _read_upload(image))
    return ActionResponse(id=product_id, notices=notifier.notices)


@router.put("/{product_id}", response_model=ActionResponse)
async def update_product(
    product_id: str,
    body: ProductInput = Depends(product_form),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    await service.update(product_id, body, image=await _read_upload(image))
    return ActionResponse(id=product_id, notices=notifier.notices)


@router.post("/{product_id}/image", response_model=ImageResponse)
async def upload_product_image(
    product_id: str,
    image: UploadFile = File(...),
    service: ProductService = Depends(get_product_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ImageResponse:
    upload = UploadedFile(
        filename=image.filename or "upload",
        content_type=image.content_type or "",
        data=await image.read(),
    )
    url = await service.set_image(product_id, upload)
    return ImageResponse(id=product_id, image=url, notices=notifier.notices)


@router.delete("/{product_id}", response_model=ActionResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
    notifier: NoticeCollector = Depends(get_notifier),
) -> ActionResponse:
    await service.delete(product_id)
    return ActionResponse(id=product_id, notices=notifier.notices)
