from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

if TYPE_CHECKING:
    from .funcionario import Funcionario


class Departamento(Base):
    __tablename__ = "departamentos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    descricao: Mapped[str | None] = mapped_column(String(500))
    lider: Mapped[str] = mapped_column(String(150), nullable=False)
    ativo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    data_criacao: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    data_atualizacao: Mapped[datetime | None] = mapped_column(DateTime)

    # back-reference only: deleting a department never touches its employees
    funcionarios: Mapped[list["Funcionario"]] = relationship(
        "Funcionario",
        back_populates="departamento",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Departamento id={self.id} nome={self.nome!r}>"
