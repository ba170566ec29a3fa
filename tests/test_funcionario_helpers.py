"""
Tests for the Funcionario business rules (utils/funcionario_helpers.py).
"""
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from crud import FuncionarioRepository
from models import Departamento
from schemas.funcionario import FuncionarioCreate, FuncionarioUpdate, FuncionarioPatch
from utils import funcionario_helpers as h
from utils.errors import ConflictError, NotFoundError, ValidationError


def _create_payload(departamento_id, **overrides):
    data = dict(
        nome="Maria Silva",
        cargo="Analista",
        cpf="11122233344",
        email="maria@example.com",
        data_admissao=date(2022, 5, 10),
        departamento_id=departamento_id,
        salario=Decimal("7500.50"),
    )
    data.update(overrides)
    return FuncionarioCreate(**data)


@pytest.fixture
def outro_departamento(db):
    d = Departamento(nome="Marketing", lider="Bob")
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


class TestCreate:
    def test_create_embeds_department_name(self, db, departamento):
        out = h.create_funcionario(db, _create_payload(departamento.id))
        assert out.departamento_nome == "Engenharia"
        assert out.nivel_senioridade == 1
        assert out.ativo is True
        assert out.data_criacao is not None

    def test_unknown_department_fails_before_write(self, db, departamento):
        with pytest.raises(ConflictError, match="Departamento"):
            h.create_funcionario(db, _create_payload(departamento.id + 100))
        assert FuncionarioRepository(db).count() == 0

    def test_duplicate_cpf_conflicts(self, db, funcionario):
        with pytest.raises(ConflictError, match="CPF"):
            h.create_funcionario(db, _create_payload(funcionario.departamento_id, cpf="12345678901"))
        assert FuncionarioRepository(db).count() == 1

    def test_missing_cpf_is_not_checked(self, db, departamento):
        h.create_funcionario(db, _create_payload(departamento.id, cpf=None))
        h.create_funcionario(db, _create_payload(departamento.id, cpf=""))
        assert FuncionarioRepository(db).count() == 2

    def test_department_removed_before_insert_conflicts_on_department(self, db, departamento):
        ghost = Departamento(id=999, nome="Fantasma", lider="Ninguém")
        # department vanishes between the existence check and the insert
        with patch.object(h, "_require_departamento", return_value=ghost):
            with pytest.raises(ConflictError, match="Departamento não encontrado"):
                h.create_funcionario(db, _create_payload(999))
        assert FuncionarioRepository(db).count() == 0

    def test_storage_cpf_rejection_keeps_cpf_message(self, db, funcionario):
        # a concurrent writer took the CPF after the pre-check
        with patch.object(FuncionarioRepository, "get_by_cpf", return_value=None):
            with pytest.raises(ConflictError, match="CPF"):
                h.create_funcionario(db, _create_payload(funcionario.departamento_id, cpf="12345678901"))
        assert FuncionarioRepository(db).count() == 1


class TestUpdate:
    def _update(self, departamento_id, **overrides):
        data = dict(
            nome="Carl Jones Jr", cargo="Lead", email=None, telefone=None,
            departamento_id=departamento_id, salario=Decimal("9000.00"), endereco=None,
            nivel_senioridade=4, ativo=False,
        )
        data.update(overrides)
        return FuncionarioUpdate(**data)

    def test_full_replace(self, db, funcionario, outro_departamento):
        out = h.update_funcionario(db, funcionario.id, self._update(outro_departamento.id))
        assert out.nome == "Carl Jones Jr"
        assert out.email is None
        assert out.endereco is None
        assert out.departamento_id == outro_departamento.id
        assert out.departamento_nome == "Marketing"
        assert out.cpf == "12345678901"
        assert out.data_admissao == date(2024, 3, 1)
        assert out.data_atualizacao is not None

    def test_missing_is_not_found(self, db, departamento):
        with pytest.raises(NotFoundError):
            h.update_funcionario(db, 99, self._update(departamento.id))

    def test_department_revalidated(self, db, funcionario):
        with pytest.raises(ConflictError, match="Departamento"):
            h.update_funcionario(db, funcionario.id, self._update(999))

    def test_department_removed_before_update_conflicts_on_department(self, db, funcionario):
        ghost = Departamento(id=999, nome="Fantasma", lider="Ninguém")
        with patch.object(h, "_require_departamento", return_value=ghost):
            with pytest.raises(ConflictError, match="Departamento não encontrado"):
                h.update_funcionario(db, funcionario.id, self._update(999))
        assert h.get_funcionario(db, funcionario.id).departamento_nome == "Engenharia"


class TestPatch:
    def test_absent_fields_untouched(self, db, funcionario):
        before = h.get_funcionario(db, funcionario.id)
        out = h.patch_funcionario(db, funcionario.id, FuncionarioPatch(salario=Decimal("6000.00")))

        assert out.salario == Decimal("6000.00")
        assert out.data_atualizacao is not None
        assert out.data_atualizacao != before.data_atualizacao
        unchanged = before.model_dump(exclude={"salario", "data_atualizacao"})
        assert out.model_dump(exclude={"salario", "data_atualizacao"}) == unchanged

    def test_blank_strings_ignored_and_falsy_values_applied(self, db, funcionario):
        out = h.patch_funcionario(
            db, funcionario.id, FuncionarioPatch(nome="", telefone="   ", ativo=False, nivel_senioridade=5)
        )
        assert out.nome == "Carl Jones"
        assert out.telefone == "11999990000"
        assert out.ativo is False
        assert out.nivel_senioridade == 5

    def test_department_change_is_validated(self, db, funcionario, outro_departamento):
        with pytest.raises(ConflictError, match="Departamento"):
            h.patch_funcionario(db, funcionario.id, FuncionarioPatch(departamento_id=999))

        out = h.patch_funcionario(db, funcionario.id, FuncionarioPatch(departamento_id=outro_departamento.id))
        assert out.departamento_nome == "Marketing"

    def test_missing_is_not_found(self, db):
        with pytest.raises(NotFoundError):
            h.patch_funcionario(db, 5, FuncionarioPatch(cargo="X"))


class TestDelete:
    def test_delete(self, db, funcionario):
        h.delete_funcionario(db, funcionario.id)
        assert FuncionarioRepository(db).count() == 0

    def test_delete_missing(self, db):
        with pytest.raises(NotFoundError):
            h.delete_funcionario(db, 123)


class TestReads:
    def test_page_embeds_department_name(self, db, departamento):
        for i in range(5):
            h.create_funcionario(db, _create_payload(departamento.id, nome=f"Pessoa {i}", cpf=f"0000000000{i}"))
        data, total, pages = h.get_funcionarios_page(db, 2, 2)
        assert [f.nome for f in data] == ["Pessoa 2", "Pessoa 3"]
        assert (total, pages) == (5, 3)
        assert all(f.departamento_nome == "Engenharia" for f in data)

    def test_page_validation(self, db):
        with pytest.raises(ValidationError):
            h.get_funcionarios_page(db, 0, 10)

    def test_lookups(self, db, funcionario):
        assert h.get_funcionario_by_cpf(db, "12345678901").id == funcionario.id
        assert [f.id for f in h.list_funcionarios_by_departamento(db, funcionario.departamento_id)] == [funcionario.id]
        assert [f.id for f in h.list_funcionarios_by_nivel(db, 2)] == [funcionario.id]
        assert h.list_funcionarios_by_nivel(db, 1) == []
        assert [f.id for f in h.list_funcionarios_ativos(db)] == [funcionario.id]

    def test_lookup_errors(self, db):
        with pytest.raises(NotFoundError):
            h.get_funcionario_by_cpf(db, "99999999999")
        with pytest.raises(ValidationError):
            h.list_funcionarios_by_nivel(db, 6)
        with pytest.raises(NotFoundError):
            h.list_funcionarios_by_departamento(db, 404)
