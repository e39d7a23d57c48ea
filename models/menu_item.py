from pydantic import AliasChoices, BaseModel, Field, field_validator

from models.line_item import AddOnDTO, VariantDTO


class MenuItemDTO(BaseModel):
    """Food item as returned by the menu endpoint of a branch."""
    food_item_id: str = Field(validation_alias=AliasChoices("food_item_id", "_id", "id"))
    name: str
    price: float | None = None
    description: str = ""
    image: str | list[str] | None = None
    has_variants: bool = Field(default=False, validation_alias=AliasChoices("has_variants", "hasVariants"))
    variants: list[VariantDTO] = Field(default_factory=list)
    add_ons: list[AddOnDTO] = Field(default_factory=list, validation_alias=AliasChoices("add_ons", "addOns"))
    is_available: bool = Field(default=True, validation_alias=AliasChoices("is_available", "isAvailable"))

    @field_validator("variants", "add_ons", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return [] if value is None else value


class MenuSelectionDTO(BaseModel):
    """What the customer picked in the add-to-cart sheet."""
    variant_id: str | None = None
    add_on_ids: list[str] = Field(default_factory=list)
    quantity: int = 1
