from pydantic import BaseModel


class AddressDTO(BaseModel):
    id: int | str
    name: str
    address: str
    type: str = ""
    latitude: float | None = None
    longitude: float | None = None
