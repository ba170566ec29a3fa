from __future__ import annotations
from typing import Optional, Sequence
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from models import Funcionario
from .base import CRUDRepository


class FuncionarioRepository(CRUDRepository[Funcionario]):
    """Every read attaches the owning Departamento in the same query."""

    def __init__(self, db: Session):
        super().__init__(Funcionario, db)

    def _select(self):
        return select(Funcionario).options(joinedload(Funcionario.departamento))

    def get_by_cpf(self, cpf: str) -> Optional[Funcionario]:
        return self.db.scalar(self._select().where(Funcionario.cpf == cpf))

    def get_by_departamento(self, departamento_id: int) -> Sequence[Funcionario]:
        stmt = self._select().where(Funcionario.departamento_id == departamento_id).order_by(Funcionario.id)
        return self.db.scalars(stmt).all()

    def get_by_nivel_senioridade(self, nivel: int) -> Sequence[Funcionario]:
        stmt = self._select().where(Funcionario.nivel_senioridade == nivel).order_by(Funcionario.id)
        return self.db.scalars(stmt).all()

    def get_ativos(self) -> Sequence[Funcionario]:
        stmt = self._select().where(Funcionario.ativo.is_(True)).order_by(Funcionario.id)
        return self.db.scalars(stmt).all()
