from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from crud import DepartamentoRepository
from models import Departamento
from schemas.departamento import DepartamentoCreate, DepartamentoUpdate, DepartamentoPatch, DepartamentoOut
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.pagination import validate_page, total_pages
from utils.transactions import commit_or_conflict

logger = logging.getLogger(__name__)

NOT_FOUND = "Departamento não encontrado"


def _now_utc() -> datetime:
    return datetime.utcnow()


def _duplicate_msg(nome: str) -> str:
    return f"Já existe um departamento com o nome '{nome}'"


def _check_id(dept_id: int) -> None:
    if dept_id <= 0:
        raise ValidationError("ID deve ser maior que zero")


def _get_or_404(repo: DepartamentoRepository, dept_id: int) -> Departamento:
    _check_id(dept_id)
    d = repo.get(dept_id)
    if not d:
        raise NotFoundError(NOT_FOUND)
    return d


def _ensure_unique_name(repo: DepartamentoRepository, nome: str, dept_id: int | None = None) -> None:
    if dept_id is None:
        clash = repo.get_by_nome(nome)
    else:
        clash = repo.get_by_nome_excluding(nome, dept_id)
    if clash:
        logger.warning("Nome de departamento duplicado: %s", nome)
        raise ConflictError(_duplicate_msg(nome))


def to_departamento_out(d: Departamento) -> DepartamentoOut:
    return DepartamentoOut(
        id=d.id,
        nome=d.nome,
        descricao=d.descricao,
        lider=d.lider,
        ativo=d.ativo,
        data_criacao=d.data_criacao,
        data_atualizacao=d.data_atualizacao,
    )


# -----------------------------
# Reads
# -----------------------------
def get_departamento(db: Session, dept_id: int) -> DepartamentoOut:
    logger.info("Buscando departamento ID %s", dept_id)
    return to_departamento_out(_get_or_404(DepartamentoRepository(db), dept_id))


def list_departamentos(db: Session) -> List[DepartamentoOut]:
    logger.info("Listando todos os departamentos")
    return [to_departamento_out(d) for d in DepartamentoRepository(db).get_all()]


def list_departamentos_ativos(db: Session) -> List[DepartamentoOut]:
    logger.info("Listando departamentos ativos")
    return [to_departamento_out(d) for d in DepartamentoRepository(db).get_ativos()]


def get_departamento_by_nome(db: Session, nome: str) -> DepartamentoOut:
    logger.info("Buscando departamento por nome: %s", nome)
    if not nome or not nome.strip():
        raise ValidationError("Nome não pode ser vazio")
    d = DepartamentoRepository(db).get_by_nome(nome)
    if not d:
        raise NotFoundError(NOT_FOUND)
    return to_departamento_out(d)


def get_departamentos_page(
    db: Session, page_number: int, page_size: int
) -> Tuple[List[DepartamentoOut], int, int]:
    logger.info("Listando departamentos com paginação - Página %s, Tamanho %s", page_number, page_size)
    validate_page(page_number, page_size)
    repo = DepartamentoRepository(db)
    rows = repo.get_paged(page_number, page_size)
    total = repo.count()
    return [to_departamento_out(d) for d in rows], total, total_pages(total, page_size)


# -----------------------------
# Writes
# -----------------------------
def create_departamento(db: Session, payload: DepartamentoCreate) -> DepartamentoOut:
    logger.info("Criando novo departamento: %s", payload.nome)
    repo = DepartamentoRepository(db)
    _ensure_unique_name(repo, payload.nome)

    d = Departamento(
        nome=payload.nome,
        descricao=payload.descricao,
        lider=payload.lider,
        ativo=True,  # a new department always starts active
        data_criacao=_now_utc(),
    )
    with commit_or_conflict(repo, _duplicate_msg(payload.nome)):
        repo.create(d)
    return to_departamento_out(d)


def update_departamento(db: Session, dept_id: int, payload: DepartamentoUpdate) -> DepartamentoOut:
    logger.info("Atualizando departamento ID %s", dept_id)
    repo = DepartamentoRepository(db)
    d = _get_or_404(repo, dept_id)

    if payload.nome != d.nome:
        _ensure_unique_name(repo, payload.nome, dept_id)

    d.nome = payload.nome
    d.descricao = payload.descricao
    d.lider = payload.lider
    d.ativo = payload.ativo
    d.data_atualizacao = _now_utc()
    with commit_or_conflict(repo, _duplicate_msg(payload.nome)):
        repo.update(d)
    return to_departamento_out(d)


def patch_departamento(db: Session, dept_id: int, payload: DepartamentoPatch) -> DepartamentoOut:
    logger.info("Atualizando parcialmente departamento ID %s (PATCH)", dept_id)
    repo = DepartamentoRepository(db)
    d = _get_or_404(repo, dept_id)

    changes = payload.model_dump(exclude_none=True)
    if "nome" in changes and changes["nome"] != d.nome:
        _ensure_unique_name(repo, changes["nome"], dept_id)

    for k, v in changes.items():
        setattr(d, k, v)
    d.data_atualizacao = _now_utc()
    with commit_or_conflict(repo, _duplicate_msg(changes.get("nome", d.nome))):
        repo.update(d)
    return to_departamento_out(d)


def delete_departamento(db: Session, dept_id: int) -> None:
    logger.info("Deletando departamento ID %s", dept_id)
    repo = DepartamentoRepository(db)
    _get_or_404(repo, dept_id)

    # Block delete if employees still point here
    n = repo.count_funcionarios(dept_id)
    if n > 0:
        logger.warning("Departamento %s possui %s funcionários; exclusão bloqueada", dept_id, n)
        raise ConflictError(
            f"Não é possível deletar o departamento. Existem {n} funcionários associados."
        )

    with commit_or_conflict(repo, "Não é possível deletar o departamento. Existem funcionários associados."):
        repo.delete(dept_id)
