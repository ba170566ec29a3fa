from __future__ import annotations
from typing import Optional, Sequence
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from models import Departamento, Funcionario
from .base import CRUDRepository


class DepartamentoRepository(CRUDRepository[Departamento]):
    def __init__(self, db: Session):
        super().__init__(Departamento, db)

    def get_by_nome(self, nome: str) -> Optional[Departamento]:
        # exact, case-sensitive match
        return self.db.scalar(select(Departamento).where(Departamento.nome == nome))

    def get_by_nome_excluding(self, nome: str, dept_id: int) -> Optional[Departamento]:
        return self.db.scalar(
            select(Departamento).where(Departamento.nome == nome, Departamento.id != dept_id)
        )

    def get_ativos(self) -> Sequence[Departamento]:
        stmt = select(Departamento).where(Departamento.ativo.is_(True)).order_by(Departamento.id)
        return self.db.scalars(stmt).all()

    def count_funcionarios(self, dept_id: int) -> int:
        return self.db.scalar(
            select(func.count()).select_from(Funcionario).where(Funcionario.departamento_id == dept_id)
        ) or 0
