from __future__ import annotations
import enum
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from sqlalchemy import String, Integer, Boolean, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

if TYPE_CHECKING:
    from .departamento import Departamento


class NivelSenioridade(enum.IntEnum):
    JUNIOR = 1
    PLENO = 2
    SENIOR = 3
    ESPECIALISTA = 4
    ARQUITETO = 5

    @property
    def label(self) -> str:
        return _NIVEL_LABELS[self]


_NIVEL_LABELS = {
    NivelSenioridade.JUNIOR: "Júnior",
    NivelSenioridade.PLENO: "Pleno",
    NivelSenioridade.SENIOR: "Sênior",
    NivelSenioridade.ESPECIALISTA: "Especialista",
    NivelSenioridade.ARQUITETO: "Arquiteto",
}


class Funcionario(Base):
    __tablename__ = "funcionarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    cargo: Mapped[str] = mapped_column(String(100), nullable=False)
    cpf: Mapped[str | None] = mapped_column(String(11), unique=True)
    email: Mapped[str | None] = mapped_column(String(150), index=True)
    telefone: Mapped[str | None] = mapped_column(String(20))
    data_admissao: Mapped[date] = mapped_column(Date, nullable=False)
    departamento_id: Mapped[int] = mapped_column(
        ForeignKey("departamentos.id", ondelete="NO ACTION", onupdate="NO ACTION"),
        nullable=False,
        index=True,
    )
    salario: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    endereco: Mapped[str | None] = mapped_column(String(500))
    nivel_senioridade: Mapped[int] = mapped_column(
        Integer, default=int(NivelSenioridade.JUNIOR), nullable=False
    )
    ativo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    data_criacao: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    data_atualizacao: Mapped[datetime | None] = mapped_column(DateTime)

    departamento: Mapped["Departamento"] = relationship("Departamento", back_populates="funcionarios")

    def __repr__(self) -> str:
        return f"<Funcionario id={self.id} nome={self.nome!r} departamento_id={self.departamento_id}>"
