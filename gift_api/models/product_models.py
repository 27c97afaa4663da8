from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gift_api.core.pagination import Page
from gift_api.services.product_service import (
    OptionInCreate,
    OptionInUpdate,
    ProductInCreate,
    ProductInUpdate,
    ProductOut,
    ProductOutWithOptions,
)
from gift_api.utils.validators import require_name, require_unique


PRODUCT_NAME_MAX_LENGTH = 15
OPTION_NAME_MAX_LENGTH = 50
OPTION_QUANTITY_MAX = 99_999_999


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# -------------------------------------------------
# Option payloads
# -------------------------------------------------

class OptionCreateIn(_CamelModel):
    name: str
    quantity: int = Field(..., ge=1, le=OPTION_QUANTITY_MAX)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return require_name(v, OPTION_NAME_MAX_LENGTH, "option name")

    def to_option_in_create(self) -> OptionInCreate:
        return OptionInCreate(name=self.name, quantity=self.quantity)


class OptionUpdateIn(_CamelModel):
    name: str
    quantity: int = Field(..., ge=1, le=OPTION_QUANTITY_MAX)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return require_name(v, OPTION_NAME_MAX_LENGTH, "option name")

    def to_option_in_update(self, option_id: int) -> OptionInUpdate:
        return OptionInUpdate(id=option_id, name=self.name, quantity=self.quantity)


# -------------------------------------------------
# Product payloads
# -------------------------------------------------

class ProductUpdateIn(_CamelModel):
    name: str
    price: int = Field(..., ge=0)
    image_url: str = Field(..., alias="imageUrl", min_length=1, max_length=255)
    category_id: int = Field(..., alias="categoryId", ge=1)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return require_name(v, PRODUCT_NAME_MAX_LENGTH, "product name")

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("imageUrl must not be blank")
        return v.strip()

    def to_product_in_update(self) -> ProductInUpdate:
        return ProductInUpdate(
            name=self.name,
            price=self.price,
            image_url=self.image_url,
            category_id=self.category_id,
        )


class ProductCreateIn(ProductUpdateIn):
    options: List[OptionCreateIn] = Field(..., min_length=1)

    @field_validator("options")
    @classmethod
    def _check_option_names(cls, v: List[OptionCreateIn]) -> List[OptionCreateIn]:
        require_unique((o.name for o in v), "option names")
        return v

    def to_product_in_create(self) -> ProductInCreate:
        return ProductInCreate(
            name=self.name,
            price=self.price,
            image_url=self.image_url,
            category_id=self.category_id,
            options=[o.to_option_in_create() for o in self.options],
        )


class ProductIdsIn(_CamelModel):
    product_ids: List[int] = Field(..., alias="productIds", min_length=1)

    @field_validator("product_ids")
    @classmethod
    def _check_ids(cls, v: List[int]) -> List[int]:
        if any(i < 1 for i in v):
            raise ValueError("productIds must be positive")
        return v


# -------------------------------------------------
# Responses
# -------------------------------------------------

class OptionOutModel(_CamelModel):
    id: int
    name: str
    quantity: int


class ProductInfo(_CamelModel):
    id: int
    name: str
    price: int
    image_url: str = Field(..., alias="imageUrl")
    category_id: int = Field(..., alias="categoryId")

    @classmethod
    def from_out(cls, out: ProductOut) -> "ProductInfo":
        return cls(
            id=out.id,
            name=out.name,
            price=out.price,
            image_url=out.image_url,
            category_id=out.category_id,
        )


class ProductWithOptions(ProductInfo):
    options: List[OptionOutModel]

    @classmethod
    def from_out(cls, out: ProductOutWithOptions) -> "ProductWithOptions":
        return cls(
            id=out.id,
            name=out.name,
            price=out.price,
            image_url=out.image_url,
            category_id=out.category_id,
            options=[
                OptionOutModel(id=o.id, name=o.name, quantity=o.quantity)
                for o in out.options
            ],
        )


class ProductPaging(_CamelModel):
    products: List[ProductInfo]
    page: int
    size: int
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    has_next: bool = Field(..., alias="hasNext")

    @classmethod
    def from_page(cls, page: Page[ProductOut]) -> "ProductPaging":
        return cls(
            products=[ProductInfo.from_out(p) for p in page.content],
            page=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            has_next=page.has_next,
        )
