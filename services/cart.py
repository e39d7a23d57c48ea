import asyncio
import logging
from typing import Awaitable, Callable

from redis.asyncio import Redis

from exceptions.cart import BranchConflictException
from models.cart import CartDTO
from models.line_item import LineItemRequestDTO
from repositories.cart import CartRepository

# Asks the customer whether the cart of another restaurant may be discarded
ConfirmDiscard = Callable[[], Awaitable[bool]]


class CartService:
    """
    Cart of one customer.

    Every mutation works on the last known cart snapshot, persists the whole
    resulting cart and only then returns it. Mutations are serialized per
    instance, so two quick taps are applied in the order they were issued
    instead of overwriting each other.

    When persisting fails, PersistenceException propagates and the in-memory
    snapshot keeps the new state. Call get_cart() to see what is durable.
    """

    def __init__(self, redis: Redis, customer_id: str | None = None):
        self.redis = redis
        self.key = CartRepository.storage_key(customer_id)
        self._lock = asyncio.Lock()
        self._cart: CartDTO | None = None

    async def get_cart(self) -> CartDTO:
        """Re-read the persisted cart and make it the current snapshot."""
        cart = await CartRepository.load(self.key, self.redis)
        self._cart = cart
        return cart

    async def _current(self) -> CartDTO:
        if self._cart is None:
            return await self.get_cart()
        return self._cart

    async def _persist(self, cart: CartDTO) -> CartDTO:
        self._cart = cart
        await CartRepository.save(cart, self.key, self.redis)
        return cart

    async def add_or_merge(self, request: LineItemRequestDTO, branch_id: str,
                           confirm_discard: ConfirmDiscard | None = None) -> CartDTO:
        """
        Add a selection to the cart.

        An identical selection (same food item, variant and add-on set)
        increases the quantity of the existing line item, anything else is
        appended.

        A cart holds items of a single branch. Adding an item of another
        branch needs the customer's confirmation to discard the current cart:
        confirmed, the cart is replaced by the new item; declined, the cart
        stays as it is and the item is not added.

        Args:
            request: Resolved selection (see MenuService.build_line_item_request)
            branch_id: Branch the item is ordered from
            confirm_discard: Coroutine asking the customer; required to resolve a branch conflict

        Returns:
            The resulting cart

        Raises:
            BranchConflictException: On a branch conflict without confirm_discard
            PersistenceException: If the cart cannot be saved
        """
        async with self._lock:
            cart = await self._current()

            if not cart.is_empty and cart.branch_id != branch_id:
                if confirm_discard is None:
                    raise BranchConflictException(cart.branch_id, branch_id)
                if not await confirm_discard():
                    logging.info(f"Kept cart of branch {cart.branch_id}, dropped item {request.food_item_id}")
                    return cart
                logging.info(f"Discarded cart of branch {cart.branch_id} for branch {branch_id}")
                return await self._persist(CartDTO(items=[request.to_line_item(branch_id)]))

            items = list(cart.items)
            for index, item in enumerate(items):
                if item.identity == request.identity:
                    items[index] = item.model_copy(update={"quantity": item.quantity + request.quantity})
                    break
            else:
                items.append(request.to_line_item(branch_id))

            return await self._persist(CartDTO(items=items))

    async def increment(self, line_item_id: str) -> CartDTO:
        async with self._lock:
            cart = await self._current()
            if cart.find(line_item_id) is None:
                return cart

            items = [
                item.model_copy(update={"quantity": item.quantity + 1})
                if item.line_item_id == line_item_id else item
                for item in cart.items
            ]
            return await self._persist(CartDTO(items=items))

    async def decrement(self, line_item_id: str) -> CartDTO:
        """Decrease the quantity by one; a line item at quantity 1 is removed. Unknown ids are ignored."""
        async with self._lock:
            cart = await self._current()
            current = cart.find(line_item_id)
            if current is None:
                return cart

            if current.quantity > 1:
                items = [
                    item.model_copy(update={"quantity": item.quantity - 1})
                    if item.line_item_id == line_item_id else item
                    for item in cart.items
                ]
            else:
                items = [item for item in cart.items if item.line_item_id != line_item_id]
            return await self._persist(CartDTO(items=items))

    async def remove(self, line_item_id: str) -> CartDTO:
        async with self._lock:
            cart = await self._current()
            if cart.find(line_item_id) is None:
                return cart
            return await self._persist(
                CartDTO(items=[item for item in cart.items if item.line_item_id != line_item_id])
            )

    async def clear(self) -> CartDTO:
        async with self._lock:
            self._cart = CartDTO()
            await CartRepository.clear(self.key, self.redis)
            logging.info(f"Cart '{self.key}' cleared")
            return self._cart

    async def reconcile_branch(self, branch_id: str, confirm_discard: ConfirmDiscard) -> CartDTO:
        """
        Called when the customer opens a branch.

        If the stored cart belongs to another branch the customer is asked
        whether to start over; the cart is cleared only when confirmed.
        """
        async with self._lock:
            cart = await self.get_cart()
            if cart.is_empty or cart.branch_id == branch_id:
                return cart
            if not await confirm_discard():
                return cart

            self._cart = CartDTO()
            await CartRepository.clear(self.key, self.redis)
            logging.info(f"Cart of branch {cart.branch_id} cleared after switching to branch {branch_id}")
            return self._cart
