from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from .common import ApiInput, ApiModel, blank_to_none, format_utc


# -------- Departamento --------
class DepartamentoCreate(ApiInput):
    nome: str = Field(..., min_length=3, max_length=100)
    descricao: Optional[str] = Field(None, max_length=500)
    lider: str = Field(..., min_length=1, max_length=150)
    ativo: bool = True


class DepartamentoUpdate(ApiInput):
    # PUT: every editable field is replaced
    nome: str = Field(..., min_length=3, max_length=100)
    descricao: Optional[str] = Field(None, max_length=500)
    lider: str = Field(..., min_length=1, max_length=150)
    ativo: bool = False  # omitted means inactive


# -------- Update payloads (partial allowed) --------
class DepartamentoPatch(ApiInput):
    nome: Optional[str] = Field(None, min_length=3, max_length=100)
    descricao: Optional[str] = Field(None, max_length=500)
    lider: Optional[str] = Field(None, max_length=150)
    ativo: Optional[bool] = None

    @field_validator("nome", "descricao", "lider", mode="before")
    @classmethod
    def _ignore_blank(cls, v):
        # blank strings mean "leave as is"
        return blank_to_none(v)


class DepartamentoOut(ApiModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    lider: str
    ativo: bool
    data_criacao: datetime
    data_atualizacao: Optional[datetime] = None

    @field_serializer("data_criacao", "data_atualizacao", when_used="json")
    def _format_datetime(self, dt: Optional[datetime], _info):
        return format_utc(dt)
