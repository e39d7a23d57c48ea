# A line item is one distinct purchasable unit in the cart. Two additions are the
# same line item when the food item, the variant and the set of add-on ids match,
# in which case the quantity is increased instead of appending a new line.
#
# unit_price is tax-inclusive and already contains the variant and add-on prices.
from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class VariantDTO(BaseModel):
    variant_id: str = Field(validation_alias=AliasChoices("variant_id", "_id"))
    label: str = ""
    price: float = 0.0


class AddOnDTO(BaseModel):
    add_on_id: str = Field(validation_alias=AliasChoices("add_on_id", "_id"))
    name: str = ""
    price: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_shape(cls, data):
        # Older carts stored add-ons as {name, price?} without an id
        if isinstance(data, dict) and "add_on_id" not in data and "_id" not in data and data.get("name"):
            data = {**data, "_id": data["name"]}
        if isinstance(data, dict) and data.get("price") is None:
            data = {**data, "price": 0.0}
        return data


def _coerce_image(value):
    # Menu records carry a single image id, cart records a list of them
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return value


class LineItemRequestDTO(BaseModel):
    """A resolved menu selection, not yet bound to a cart."""
    food_item_id: str
    name: str = ""
    unit_price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    variant: VariantDTO | None = None
    add_ons: list[AddOnDTO] = Field(default_factory=list)
    image: list[str] = Field(default_factory=list)

    @field_validator("image", mode="before")
    @classmethod
    def normalize_image(cls, value):
        return _coerce_image(value)

    @field_validator("add_ons", mode="before")
    @classmethod
    def normalize_add_ons(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def check_variant_price(self):
        # With a variant, the unit price is the variant price plus the add-on prices
        if self.variant is not None:
            expected = self.variant.price + sum(a.price for a in self.add_ons)
            if round(abs(self.unit_price - expected), 2) >= 0.01:
                raise ValueError(
                    f"unit_price {self.unit_price} does not match variant and add-on prices {expected}"
                )
        return self

    def to_line_item(self, branch_id: str) -> "LineItemDTO":
        return LineItemDTO(
            food_item_id=self.food_item_id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=self.quantity,
            variant=self.variant,
            add_ons=list(self.add_ons),
            image=list(self.image),
            branch_id=branch_id,
        )

    @property
    def identity(self) -> tuple[str, str | None, frozenset[str]]:
        return line_item_identity(self.food_item_id, self.variant, self.add_ons)


class LineItemDTO(BaseModel):
    # Aliases accept the cart documents written by the mobile client
    # (id / price / branchId / addOns) next to our own snake_case shape.
    food_item_id: str = Field(validation_alias=AliasChoices("food_item_id", "id"))
    name: str = ""
    unit_price: float = Field(ge=0, validation_alias=AliasChoices("unit_price", "price"))
    quantity: int = Field(ge=1)
    variant: VariantDTO | None = None
    add_ons: list[AddOnDTO] = Field(default_factory=list, validation_alias=AliasChoices("add_ons", "addOns"))
    branch_id: str = Field(validation_alias=AliasChoices("branch_id", "branchId"))
    image: list[str] = Field(default_factory=list)

    @field_validator("image", mode="before")
    @classmethod
    def normalize_image(cls, value):
        return _coerce_image(value)

    @field_validator("add_ons", mode="before")
    @classmethod
    def normalize_add_ons(cls, value):
        return [] if value is None else value

    @property
    def identity(self) -> tuple[str, str | None, frozenset[str]]:
        return line_item_identity(self.food_item_id, self.variant, self.add_ons)

    @property
    def line_item_id(self) -> str:
        """Stable key of the identity triple, e.g. ``pizza-1:large:cheese,olives``."""
        food_item_id, variant_id, add_on_ids = self.identity
        return f"{food_item_id}:{variant_id or ''}:{','.join(sorted(add_on_ids))}"

    @property
    def item_price(self) -> float:
        return self.unit_price * self.quantity


def line_item_identity(food_item_id: str, variant: VariantDTO | None,
                       add_ons: list[AddOnDTO]) -> tuple[str, str | None, frozenset[str]]:
    variant_id = variant.variant_id if variant is not None else None
    return food_item_id, variant_id, frozenset(a.add_on_id for a in add_ons)
