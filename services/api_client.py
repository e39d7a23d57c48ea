import asyncio
import json
import logging
from typing import Any

import aiohttp

import config
from exceptions.network import NetworkException
from models.branch import BranchDTO
from models.order_payload import OrderPayloadDTO
from models.payment import PaymentInitDTO, PaymentResultDTO


class FoodOrderingApiClient:
    """
    Thin client for the ordering backend.

    Calls are never retried. Transport errors, timeouts and non-2xx answers
    raise NetworkException; the caller decides what to tell the customer.

    Usage:
        async with FoodOrderingApiClient() as api:
            branch = await api.get_branch("64f0...")
    """

    def __init__(self, base_url: str | None = None,
                 session: aiohttp.ClientSession | None = None,
                 timeout_seconds: int | None = None):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds or config.API_TIMEOUT_SECONDS)

    async def __aenter__(self) -> "FoodOrderingApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # Session cookies are kept, the backend authenticates by cookie
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def _request(self, method: str, path: str, *,
                       params: dict | None = None,
                       body: dict | None = None,
                       raise_for_status: bool = True) -> tuple[int, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(method, url, params=params, json=body) as response:
                status = response.status
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logging.error(f"{method} {path} failed: {e.__class__.__name__}: {e}")
            raise NetworkException(method, path, str(e) or e.__class__.__name__) from e

        if raise_for_status and not 200 <= status < 300:
            logging.error(f"{method} {path} returned HTTP {status}")
            raise NetworkException(method, path, "unexpected response status", status=status)
        return status, data

    async def get_branch(self, branch_id: str) -> BranchDTO | None:
        """Branch with its restaurant name, used for the cart header."""
        _, data = await self._request(
            "GET", "/branches",
            params={"condition": json.dumps({"_id": branch_id})}
        )
        branches = (data or {}).get("branches") or []
        if not branches:
            logging.warning(f"Branch {branch_id} not found")
            return None
        return BranchDTO.from_api(branches[0])

    async def create_order(self, payload: OrderPayloadDTO) -> PaymentInitDTO | None:
        """
        Create the order remotely.

        Returns:
            The payment reference to open the payment sheet with, or None
            when the backend did not issue one
        """
        _, data = await self._request("POST", "/order/create", body=payload.to_request_body())
        init = (data or {}).get("paymentInitData") or {}
        if not init.get("razorpayOrderId"):
            logging.warning(f"Order for branch {payload.branch_id} created without payment reference")
            return None

        logging.info(f"Order for branch {payload.branch_id} created, payment order {init['razorpayOrderId']}")
        return PaymentInitDTO(
            payment_order_id=init["razorpayOrderId"],
            amount=init.get("amount", 0),
            currency=init.get("currency") or config.CURRENCY.value
        )

    async def verify_payment(self, result: PaymentResultDTO) -> bool:
        """True only when the backend answers HTTP 200."""
        status, _ = await self._request(
            "POST", "/payment/verify",
            body={
                "razorpayPaymentId": result.payment_id,
                "razorpayOrderId": result.order_id,
                "razorpaySignature": result.signature,
            },
            raise_for_status=False
        )
        if status != 200:
            logging.warning(f"Payment {result.payment_id} verification answered HTTP {status}")
        return status == 200

    async def get_customer_orders(self, customer_id: str) -> list[dict]:
        _, data = await self._request(
            "GET", "/order",
            params={"condition": json.dumps({"customer": customer_id})}
        )
        if isinstance(data, list):
            return data
        return (data or {}).get("orders") or []
