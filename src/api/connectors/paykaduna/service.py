"""Operações da API PayKaduna IBS (bills, taxpayers, pagamentos).

Toda chamada passa por assinatura → execução → retry no
PayKadunaHttpClient. Este módulo só monta os descritores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .signing import OutboundRequest

if TYPE_CHECKING:
    from .http_client import PayKadunaHttpClient


ES_BILLS_PATH = "/api/ESBills"


class PayKadunaService:
    """Cliente de alto nível do PayKaduna.

    Args:
        client: Executor assinado com retry
        engine_code: PK_ENGINE_CODE injetado na criação de bills
    """

    def __init__(self, client: PayKadunaHttpClient, engine_code: str = "") -> None:
        self._client = client
        self._engine_code = engine_code

    async def _get(self, endpoint: str, **query: str) -> Any:
        return await self._client.request(
            OutboundRequest("GET", f"{ES_BILLS_PATH}/{endpoint}", query=query)
        )

    async def _post(self, endpoint: str, body: Any) -> Any:
        return await self._client.request(
            OutboundRequest("POST", f"{ES_BILLS_PATH}/{endpoint}", body=body)
        )

    def _with_engine_code(self, body: dict[str, Any]) -> dict[str, Any]:
        return {**body, "engineCode": body.get("engineCode") or self._engine_code}

    # Bills

    async def create_es_bill(self, body: dict[str, Any]) -> Any:
        """POST /api/ESBills/CreateESBill"""
        return await self._post("CreateESBill", self._with_engine_code(body))

    async def create_bulk_es_bill(self, body: dict[str, Any]) -> Any:
        """POST /api/ESBills/CreateBulkESBill"""
        return await self._post("CreateBulkESBill", self._with_engine_code(body))

    async def get_bill(self, bill_reference: str) -> Any:
        """GET /api/ESBills/GetBill?billreference=..."""
        return await self._get("GetBill", billreference=bill_reference)

    async def get_invoice_url(self, bill_reference: str) -> Any:
        """GET /api/ESBills/GetInvoiceUrl?billreference=..."""
        return await self._get("GetInvoiceUrl", billreference=bill_reference)

    async def attach_additional_data_to_bill(self, body: dict[str, Any]) -> Any:
        return await self._post("AttachAdditionalDataToBill", body)

    async def bulk_attach_additional_data_to_bill(self, body: dict[str, Any]) -> Any:
        return await self._post("BulkAttachAdditionalDataToBill", body)

    # Taxpayers

    async def register_taxpayer(self, body: dict[str, Any]) -> Any:
        return await self._post("RegisterTaxPayer", body)

    async def search_taxpayer(self, criteria: str) -> Any:
        return await self._get("SearchTaxPayer", criteria=criteria)

    # Pagamentos

    async def create_es_transaction(self, body: dict[str, Any]) -> dict[str, Any]:
        """Inicializa transação; a estrutura da resposta varia, então é encapsulada."""
        data = await self._post("CreateESTransaction", body)
        checkout_url = data.get("checkoutUrl") if isinstance(data, dict) else None
        return {
            "checkoutUrl": checkout_url or "",
            "rawResponse": data,
        }

    async def update_payment_redirect_url(self, redirect_url: str) -> Any:
        return await self._post("UpdatePaymentRedirectUrl", {"redirectUrl": redirect_url})
