from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_serializer, field_validator

from .common import ApiInput, ApiModel, blank_to_none, format_utc

SALARIO_MIN = Decimal("0.01")
SALARIO_MAX = Decimal("9999999999.99")
EMAIL_MAX = 150


def _salario_field(default=...):
    return Field(default, ge=SALARIO_MIN, le=SALARIO_MAX, max_digits=12, decimal_places=2)


def _check_email_len(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v) > EMAIL_MAX:
        raise ValueError(f"email deve ter no máximo {EMAIL_MAX} caracteres")
    return v


# -------- Create --------
class FuncionarioCreate(ApiInput):
    nome: str = Field(..., min_length=3, max_length=150)
    cargo: str = Field(..., min_length=1, max_length=100)
    cpf: Optional[str] = Field(None, max_length=11)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    data_admissao: date
    departamento_id: int
    salario: Decimal = _salario_field()
    endereco: Optional[str] = Field(None, max_length=500)
    nivel_senioridade: int = Field(1, ge=1, le=5)
    ativo: bool = True

    @field_validator("cpf", "email", "telefone", "endereco", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email_len(cls, v):
        return _check_email_len(v)


# -------- Update (PUT: full replace; cpf and admission date are fixed at creation) --------
class FuncionarioUpdate(ApiInput):
    nome: str = Field(..., min_length=3, max_length=150)
    cargo: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    departamento_id: int
    salario: Decimal = _salario_field()
    endereco: Optional[str] = Field(None, max_length=500)
    nivel_senioridade: int = Field(..., ge=1, le=5)
    ativo: bool

    @field_validator("email", "telefone", "endereco", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email_len(cls, v):
        return _check_email_len(v)


# -------- Patch (all optional) --------
class FuncionarioPatch(ApiInput):
    nome: Optional[str] = Field(None, min_length=3, max_length=150)
    cargo: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    departamento_id: Optional[int] = None
    salario: Optional[Decimal] = _salario_field(None)
    endereco: Optional[str] = Field(None, max_length=500)
    nivel_senioridade: Optional[int] = Field(None, ge=1, le=5)
    ativo: Optional[bool] = None

    @field_validator("nome", "cargo", "email", "telefone", "endereco", mode="before")
    @classmethod
    def _ignore_blank(cls, v):
        # blank strings mean "leave as is"
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email_len(cls, v):
        return _check_email_len(v)


# -------- Read --------
class FuncionarioOut(ApiModel):
    id: int
    nome: str
    cargo: str
    cpf: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    data_admissao: date
    departamento_id: int
    departamento_nome: Optional[str] = None
    salario: Decimal
    endereco: Optional[str] = None
    nivel_senioridade: int
    ativo: bool
    data_criacao: datetime
    data_atualizacao: Optional[datetime] = None

    @field_serializer("salario", when_used="json")
    def _salario_number(self, v: Decimal, _info):
        return float(v)

    @field_serializer("data_criacao", "data_atualizacao", when_used="json")
    def _format_datetime(self, dt: Optional[datetime], _info):
        return format_utc(dt)
