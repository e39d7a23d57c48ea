import logging

from exceptions.validation import InvalidSelectionException
from models.line_item import LineItemRequestDTO
from models.menu_item import MenuItemDTO, MenuSelectionDTO


class MenuService:

    @staticmethod
    def build_line_item_request(menu_item: MenuItemDTO, selection: MenuSelectionDTO) -> LineItemRequestDTO:
        """
        Resolve an add-to-cart selection into a line item request.

        The unit price is the selected variant's price (the base price when
        the item has no variants or the variant is unknown) plus the prices
        of the selected add-ons. Add-on ids that are not on the menu item are
        ignored.

        Raises:
            InvalidSelectionException: If the item is unavailable or the quantity is below 1
        """
        if not menu_item.is_available:
            raise InvalidSelectionException(menu_item.food_item_id, "item is not available")
        if selection.quantity < 1:
            raise InvalidSelectionException(menu_item.food_item_id, f"quantity {selection.quantity} is below 1")

        variant = None
        base_price = menu_item.price or 0.0
        if menu_item.has_variants and selection.variant_id is not None:
            variant = next((v for v in menu_item.variants if v.variant_id == selection.variant_id), None)
            if variant is None:
                logging.warning(
                    f"Variant {selection.variant_id} not found on food item {menu_item.food_item_id}, "
                    f"using base price"
                )
            else:
                base_price = variant.price

        selected_ids = set(selection.add_on_ids)
        add_ons = [a for a in menu_item.add_ons if a.add_on_id in selected_ids]

        return LineItemRequestDTO(
            food_item_id=menu_item.food_item_id,
            name=menu_item.name,
            unit_price=base_price + sum(a.price for a in add_ons),
            quantity=selection.quantity,
            variant=variant,
            add_ons=add_ons,
            image=menu_item.image
        )

    @staticmethod
    def calculate_selection_total(menu_item: MenuItemDTO, selection: MenuSelectionDTO) -> float:
        """Price shown on the add-to-cart button: unit price × quantity."""
        request = MenuService.build_line_item_request(menu_item, selection)
        return request.unit_price * request.quantity
