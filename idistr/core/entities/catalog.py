"""Catalog domain entities: stores, products and the sales rep."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

FALLBACK_IMAGE_URL = "https://dummyimage.com/120x120/eaeaea/000&text=No+Image"


def canonical_id(value: Any) -> str:
    """
    Normalize an opaque identifier to its canonical string form.

    The backend is loose about id types: ``12``, ``12.0`` and ``"12"`` all
    name the same record and become ``"12"``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class Store(BaseModel):
    """A retail outlet the rep sells to."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    address: str = ""
    bin_iin: str | None = None  # business/individual registration number
    phone: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        return canonical_id(v)

    @field_validator("bin_iin", "phone", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return str(v)


class Product(BaseModel):
    """A catalog product as served by the backend."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    title: str = ""
    sku: str = ""
    unit: str = ""
    category: str | None = None
    price: float = Field(default=0.0, ge=0)
    pack_size: int = Field(default=1, ge=1)
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "img"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        return canonical_id(v)

    @field_validator("sku", mode="before")
    @classmethod
    def sku_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def blank_price(cls, v: Any) -> Any:
        return 0.0 if v in (None, "") else v

    @field_validator("pack_size", mode="before")
    @classmethod
    def blank_pack_size(cls, v: Any) -> Any:
        return 1 if v in (None, "", 0) else v

    @field_validator("category", "image_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def image_or_fallback(self) -> str:
        return self.image_url or FALLBACK_IMAGE_URL


class Rep(BaseModel):
    """Sales rep record; extra backend columns are kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str | None:
        return None if v is None else canonical_id(v)
