# The cart is persisted as one whole document (replace-on-write). All line
# items of a non-empty cart belong to the same branch.
from pydantic import BaseModel, Field, model_validator

from models.line_item import LineItemDTO


class CartDTO(BaseModel):
    items: list[LineItemDTO] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_single_branch(self):
        branches = {item.branch_id for item in self.items}
        if len(branches) > 1:
            raise ValueError(f"cart mixes items from branches {sorted(branches)}")
        return self

    @property
    def branch_id(self) -> str | None:
        return self.items[0].branch_id if self.items else None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def find(self, line_item_id: str) -> LineItemDTO | None:
        for item in self.items:
            if item.line_item_id == line_item_id:
                return item
        return None
