"""Record model: the closed set of item variants held by an ItemStore."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .ordering import compare_products
from .record_types import RecordType


class ItemRecord(BaseModel):
    """Identity shared by every stored record.

    ``id`` is generated once and frozen; ``name`` stays mutable.
    Concrete variants add ``kind`` (their tag) and their own fields.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    # Identity
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    name: str = Field(default="")

    @classmethod
    def persisted_fields(cls) -> tuple[str, ...]:
        """Field names written by the codecs, in document order (tag excluded)."""
        return tuple(name for name in cls.model_fields if name != "kind")

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.name} (Id={self.id})"


class Product(ItemRecord):
    """A priced item. Sorts by price, then by name."""

    kind: Literal["Product"] = Field(default="Product", frozen=True)
    price: Decimal = Field(default=Decimal("0"), ge=0)

    def __str__(self) -> str:
        return super().__str__() + f" | Price: {self.price}"

    # -- Ordering --

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return compare_products(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return compare_products(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return compare_products(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return compare_products(self, other) >= 0


class Service(ItemRecord):
    """Billable hours. ``total`` is derived and never persisted."""

    kind: Literal["Service"] = Field(default="Service", frozen=True)
    hourly_rate: Decimal = Field(default=Decimal("0"))
    hours: int = Field(default=0)

    @property
    def total(self) -> Decimal:
        return self.hourly_rate * self.hours

    def __str__(self) -> str:
        return (
            super().__str__()
            + f" | HourlyRate: {self.hourly_rate}, Hours: {self.hours}, Total: {self.total}"
        )


# Tagged union over the closed variant set; ``kind`` selects the class.
Record = Annotated[Product | Service, Field(discriminator="kind")]

VARIANTS: dict[RecordType, type[ItemRecord]] = {
    RecordType.PRODUCT: Product,
    RecordType.SERVICE: Service,
}


def variant_for(record_type: RecordType | str) -> type[ItemRecord] | None:
    """Return the record class registered for a tag, or None if unknown."""
    try:
        return VARIANTS[RecordType(record_type)]
    except ValueError:
        return None
