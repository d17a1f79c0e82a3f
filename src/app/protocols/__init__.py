"""Protocolos e contratos do core da aplicação."""

from .bill_store import BillStoreProtocol
from .http_client import PayKadunaClientProtocol

__all__ = [
    "BillStoreProtocol",
    "PayKadunaClientProtocol",
]
