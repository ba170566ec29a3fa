"""
Shared fixtures: in-memory SQLite schema per test, app wired to it via get_db.
"""
import os
from datetime import date
from decimal import Decimal

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["DB_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base, get_db, make_engine
from main import app
from models import Departamento, Funcionario


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def departamento(db):
    d = Departamento(nome="Engenharia", descricao="Time de produto", lider="Alice")
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


@pytest.fixture
def funcionario(db, departamento):
    f = Funcionario(
        nome="Carl Jones",
        cargo="Engenheiro",
        cpf="12345678901",
        email="carl@example.com",
        telefone="11999990000",
        data_admissao=date(2024, 3, 1),
        departamento_id=departamento.id,
        salario=Decimal("5000.00"),
        endereco="Rua A, 100",
        nivel_senioridade=2,
    )
    db.add(f)
    db.commit()
    db.refresh(f)
    return f


@pytest.fixture
def departamento_payload():
    return {"nome": "Engineering", "descricao": "Produto e plataforma", "lider": "Alice"}


@pytest.fixture
def funcionario_payload():
    def _make(departamento_id: int, **overrides):
        body = {
            "nome": "Carl Jones",
            "cargo": "Engineer",
            "cpf": "98765432100",
            "email": "carl.jones@example.com",
            "telefone": "11988887777",
            "dataAdmissao": "2024-01-15",
            "departamentoId": departamento_id,
            "salario": 5000.00,
            "endereco": "Av. Paulista, 1000",
            "nivelSenioridade": 3,
        }
        body.update(overrides)
        return body

    return _make
