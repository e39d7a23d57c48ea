from pydantic import BaseModel


class BranchDTO(BaseModel):
    branch_id: str
    address: str = ""
    restaurant_id: str | None = None
    restaurant_name: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "BranchDTO":
        restaurant = data.get("restaurant") or {}
        if not isinstance(restaurant, dict):
            # Unpopulated reference: only the restaurant id is known
            restaurant = {"_id": restaurant}
        return cls(
            branch_id=str(data["_id"]),
            address=data.get("address") or "",
            restaurant_id=restaurant.get("_id"),
            restaurant_name=restaurant.get("name"),
        )
