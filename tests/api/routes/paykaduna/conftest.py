"""Fixtures das rotas PayKaduna: app com dependências substituídas."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import create_api_router
from api.routes.errors import register_exception_handlers
from app.bootstrap.dependencies import get_bill_mirror, get_paykaduna_service
from app.infra.stores import MemoryBillStore
from app.services.bill_mirror import BillMirrorService
from tests.fakes.paykaduna import FakePayKadunaService


@pytest.fixture
def fake_service() -> FakePayKadunaService:
    return FakePayKadunaService()


@pytest.fixture
def bill_store() -> MemoryBillStore:
    return MemoryBillStore()


@pytest.fixture
def client(fake_service: FakePayKadunaService, bill_store: MemoryBillStore) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_api_router())

    mirror = BillMirrorService(bill_store)
    app.dependency_overrides[get_paykaduna_service] = lambda: fake_service
    app.dependency_overrides[get_bill_mirror] = lambda: mirror
    return TestClient(app, raise_server_exceptions=False)
