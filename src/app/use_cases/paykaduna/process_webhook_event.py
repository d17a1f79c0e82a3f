"""Use case de processamento de eventos de webhook PayKaduna.

Fluxo (após autenticação e validação na borda):
1. Sem billReference: nada a espelhar
2. Busca o bill atualizado no provedor (falha não é fatal)
3. Aplica o evento ao espelho local (falha é logada, nunca propaga)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.http_client import PayKadunaClientProtocol
    from app.services.bill_mirror import BillMirrorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WebhookProcessingResult:
    """Resultado do processamento de um evento."""

    bill_reference: str | None
    fetched_from_api: bool
    mirrored: bool


class ProcessWebhookEventUseCase:
    """Aplica eventos de webhook ao espelho de bills."""

    def __init__(
        self,
        *,
        client: PayKadunaClientProtocol,
        bill_mirror: BillMirrorService,
    ) -> None:
        self._client = client
        self._bill_mirror = bill_mirror

    async def execute(self, event: str, data: dict[str, Any]) -> WebhookProcessingResult:
        reference = data.get("billReference")
        if not isinstance(reference, str) or not reference:
            logger.debug("webhook_without_bill_reference", extra={"event": event})
            return WebhookProcessingResult(None, fetched_from_api=False, mirrored=False)

        api_bill_data: Any = None
        try:
            api_bill_data = await self._client.get_bill(reference)
        except Exception as exc:
            logger.warning(
                "webhook_bill_fetch_failed",
                extra={
                    "bill_reference": reference,
                    "error_type": type(exc).__name__,
                },
            )

        try:
            record = await self._bill_mirror.update_from_webhook(
                reference,
                data,
                api_bill_data=api_bill_data,
                event_type=event,
            )
        except Exception as exc:
            logger.error(
                "webhook_bill_mirror_failed",
                extra={
                    "bill_reference": reference,
                    "error_type": type(exc).__name__,
                },
            )
            record = None

        return WebhookProcessingResult(
            bill_reference=reference,
            fetched_from_api=api_bill_data is not None,
            mirrored=record is not None,
        )
