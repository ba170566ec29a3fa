"""
Tests for the data-access layer (crud/).
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from crud import DepartamentoRepository, FuncionarioRepository
from models import Departamento, Funcionario


def _dept(nome, ativo=True):
    return Departamento(nome=nome, lider="Lider", ativo=ativo)


def _func(dept_id, nome="Fulano", cpf=None, nivel=1, ativo=True):
    return Funcionario(
        nome=nome, cargo="Analista", cpf=cpf, data_admissao=date(2023, 1, 2),
        departamento_id=dept_id, salario=Decimal("1000.00"), nivel_senioridade=nivel, ativo=ativo,
    )


class TestGenericRepository:
    def test_get_missing_returns_none(self, db):
        assert DepartamentoRepository(db).get(999) is None

    def test_delete_missing_returns_false(self, db):
        assert DepartamentoRepository(db).delete(999) is False

    def test_create_count_and_delete(self, db):
        repo = DepartamentoRepository(db)
        d = repo.create(_dept("Financeiro"))
        repo.commit()
        assert d.id is not None
        assert repo.count() == 1

        assert repo.delete(d.id) is True
        repo.commit()
        assert repo.count() == 0

    def test_get_paged_slices_in_id_order(self, db):
        repo = DepartamentoRepository(db)
        for i in range(7):
            repo.create(_dept(f"Depto {i}"))
        repo.commit()

        page1 = repo.get_paged(1, 3)
        page3 = repo.get_paged(3, 3)
        assert [d.nome for d in page1] == ["Depto 0", "Depto 1", "Depto 2"]
        assert [d.nome for d in page3] == ["Depto 6"]
        assert repo.get_paged(4, 3) == []


class TestDepartamentoRepository:
    def test_get_by_nome_is_case_sensitive(self, db, departamento):
        repo = DepartamentoRepository(db)
        assert repo.get_by_nome("Engenharia").id == departamento.id
        assert repo.get_by_nome("engenharia") is None

    def test_get_by_nome_excluding(self, db, departamento):
        repo = DepartamentoRepository(db)
        assert repo.get_by_nome_excluding("Engenharia", departamento.id) is None
        assert repo.get_by_nome_excluding("Engenharia", departamento.id + 1) is not None

    def test_get_ativos(self, db):
        repo = DepartamentoRepository(db)
        repo.create(_dept("Ativo"))
        repo.create(_dept("Inativo", ativo=False))
        repo.commit()
        assert [d.nome for d in repo.get_ativos()] == ["Ativo"]

    def test_count_funcionarios(self, db, funcionario):
        assert DepartamentoRepository(db).count_funcionarios(funcionario.departamento_id) == 1

    def test_unique_name_enforced_by_storage(self, db, departamento):
        repo = DepartamentoRepository(db)
        with pytest.raises(IntegrityError):
            repo.create(_dept("Engenharia"))
        repo.rollback()


class TestFuncionarioRepository:
    def test_reads_attach_departamento(self, db, funcionario):
        db.expunge_all()
        f = FuncionarioRepository(db).get(funcionario.id)
        assert "departamento" in f.__dict__
        assert f.departamento.nome == "Engenharia"

    def test_get_by_cpf(self, db, funcionario):
        repo = FuncionarioRepository(db)
        assert repo.get_by_cpf("12345678901").id == funcionario.id
        assert repo.get_by_cpf("00000000000") is None

    def test_filters(self, db, departamento):
        repo = FuncionarioRepository(db)
        repo.create(_func(departamento.id, "A", nivel=1))
        repo.create(_func(departamento.id, "B", nivel=3, ativo=False))
        repo.create(_func(departamento.id, "C", nivel=3))
        repo.commit()

        assert [f.nome for f in repo.get_by_departamento(departamento.id)] == ["A", "B", "C"]
        assert [f.nome for f in repo.get_by_nivel_senioridade(3)] == ["B", "C"]
        assert [f.nome for f in repo.get_ativos()] == ["A", "C"]

    def test_department_delete_blocked_by_foreign_key(self, db, funcionario):
        repo = DepartamentoRepository(db)
        with pytest.raises(IntegrityError):
            repo.delete(funcionario.departamento_id)
        repo.rollback()
