import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from gift_api.core.pagination import Pageable, override_size, pageable_params
from gift_api.models.product_models import (
    OptionCreateIn,
    OptionUpdateIn,
    ProductCreateIn,
    ProductIdsIn,
    ProductPaging,
    ProductUpdateIn,
    ProductWithOptions,
)
from gift_api.services.product_service import ProductService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_service(request: Request) -> ProductService:
    """
    The service is handed to create_app() and kept on app.state.
    """
    return request.app.state.product_service


# -------------------------------------------------
# Products
# -------------------------------------------------

@router.get("/{product_id}", response_model=ProductWithOptions)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    product_out = service.get_product(product_id)
    return ProductWithOptions.from_out(product_out)


@router.get("", response_model=ProductPaging)
def get_products_by_page(
    category_id: int = Query(..., alias="categoryId"),
    size: Optional[int] = Query(None),
    pageable: Pageable = Depends(pageable_params),
    service: ProductService = Depends(get_product_service),
):
    # Explicit size overrides the default; checked before the service sees it
    pageable = override_size(pageable, size)

    logger.debug(
        "List products | category=%s page=%s size=%s sort=%s",
        category_id,
        pageable.page,
        pageable.size,
        pageable.sort,
    )

    page = service.get_products_by_page(pageable, category_id)
    return ProductPaging.from_page(page)


@router.post("", response_model=int, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreateIn,
    service: ProductService = Depends(get_product_service),
):
    created_id = service.create_product(payload.to_product_in_create())
    logger.info("Product %s created", created_id)
    return created_id


@router.put("/{product_id}", response_model=int)
def update_product(
    product_id: int,
    payload: ProductUpdateIn,
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(payload.to_product_in_update(), product_id)


@router.delete("/{product_id}", response_model=int)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    deleted_id = service.delete_product(product_id)
    logger.info("Product %s deleted", deleted_id)
    return deleted_id


@router.delete("")
def delete_products(
    payload: ProductIdsIn,
    service: ProductService = Depends(get_product_service),
):
    service.delete_products(payload.product_ids)
    return Response(status_code=status.HTTP_200_OK)


# -------------------------------------------------
# Options
# -------------------------------------------------

# Batch creation is not routed: it shares POST /{id}/options with add_option
# and the intended semantics are unresolved.
def add_options(
    payload: List[OptionCreateIn],
    product_id: int,
    service: ProductService,
) -> Response:
    option_ins = [o.to_option_in_create() for o in payload]
    service.add_options(option_ins, product_id)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{product_id}/options")
def add_option(
    product_id: int,
    payload: OptionCreateIn,
    service: ProductService = Depends(get_product_service),
):
    service.add_option(payload.to_option_in_create(), product_id)
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{product_id}/options/{option_id}")
def update_option(
    product_id: int,
    option_id: int,
    payload: OptionUpdateIn,
    service: ProductService = Depends(get_product_service),
):
    service.update_option(payload.to_option_in_update(option_id), product_id)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{product_id}/options", response_model=List[int])
def delete_options(
    product_id: int,
    option_ids: List[int] = Body(...),
    service: ProductService = Depends(get_product_service),
):
    service.delete_options(option_ids, product_id)
    return option_ids
