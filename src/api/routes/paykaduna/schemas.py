"""Schemas de request das rotas PayKaduna.

Os nomes dos campos seguem o contrato do provedor (camelCase), pois o
body validado é repassado e assinado na ordem de definição dos campos.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Body a enviar ao provedor (sem campos opcionais ausentes)."""
        return self.model_dump(exclude_none=True)


class EsBillDetail(_RequestModel):
    amount: int | float = Field(..., gt=0)
    mdasId: int = Field(..., gt=0, description="Revenue Head ID.")
    narration: str = Field(..., min_length=1)
    recommendedRate: int | float | None = Field(default=None, gt=0)


class BillPayer(_RequestModel):
    identifier: str = Field(..., min_length=1, description="Taxpayer ID ou TPUI.")
    firstName: str = Field(..., min_length=1)
    middleName: str | None = None
    lastName: str = Field(..., min_length=1)
    telephone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    esBillDetailsDto: list[EsBillDetail] = Field(..., min_length=1)


class CreateBillRequest(BillPayer):
    engineCode: str | None = Field(default=None, description="Injetado das settings se ausente.")


class BulkBillRequest(_RequestModel):
    engineCode: str | None = None
    esBillDtos: list[BillPayer] = Field(..., min_length=1)


class AttachDataItem(_RequestModel):
    billReference: str = Field(..., min_length=1)
    additionalData: dict[str, Any] = Field(..., min_length=1)


class BulkAttachDataRequest(_RequestModel):
    bills: list[AttachDataItem] = Field(..., min_length=1)


class RegisterTaxpayerRequest(_RequestModel):
    """Registro de taxpayer; Corporate exige rcNumber e industryId."""

    identifier: str = Field(..., min_length=1)
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    middleName: str | None = None
    tin: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phoneNumber: str = Field(..., min_length=1)
    genderId: Literal[1, 2, 3] = Field(..., description="1=Female, 2=Male, 3=NotSpecified.")
    addressLine1: str = Field(..., min_length=1)
    userType: Literal["Individual", "Corporate"]
    password: str = Field(..., min_length=6)
    confirmPassword: str = Field(..., min_length=6)
    rcNumber: str | None = None
    industryId: int | None = None
    officeName: str | None = None
    officeEmail: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    officePhoneNumber: str | None = None
    officeAddressLine1: str | None = None
    officeStateId: int | None = None
    officeLgaId: int | None = None
    taxStationId: int | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> RegisterTaxpayerRequest:
        if self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        if self.userType == "Corporate":
            if not self.rcNumber:
                raise ValueError("RC Number is required for Corporate users")
            if not self.industryId or self.industryId <= 0:
                raise ValueError("Industry ID is required for Corporate users")
        return self


class InitPaymentRequest(_RequestModel):
    tpui: str = Field(..., min_length=1)
    billReference: str = Field(..., min_length=1)
