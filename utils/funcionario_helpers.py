from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from crud import DepartamentoRepository, FuncionarioRepository
from models import Departamento, Funcionario, NivelSenioridade
from schemas.funcionario import FuncionarioCreate, FuncionarioUpdate, FuncionarioPatch, FuncionarioOut
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.pagination import validate_page, total_pages
from utils.transactions import commit_or_conflict

logger = logging.getLogger(__name__)

NOT_FOUND = "Funcionário não encontrado"
DEPT_NOT_FOUND = "Departamento não encontrado"
CPF_DUPLICATE = "CPF já existe no sistema"


def _now_utc() -> datetime:
    return datetime.utcnow()


def _check_id(func_id: int) -> None:
    if func_id <= 0:
        raise ValidationError("ID deve ser maior que zero")


def _get_or_404(repo: FuncionarioRepository, func_id: int) -> Funcionario:
    _check_id(func_id)
    f = repo.get(func_id)
    if not f:
        raise NotFoundError(NOT_FOUND)
    return f


def _find_departamento(db: Session, departamento_id: int) -> Optional[Departamento]:
    return DepartamentoRepository(db).get(departamento_id) if departamento_id > 0 else None


def _require_departamento(db: Session, departamento_id: int) -> Departamento:
    # unknown department in a write body is a 400, not a 404
    dept = _find_departamento(db, departamento_id)
    if not dept:
        logger.warning("Departamento %s inexistente", departamento_id)
        raise ConflictError(DEPT_NOT_FOUND)
    return dept


def _integrity_message(db: Session, departamento_id: int):
    """Pick the message for a storage rejection by re-checking the department after rollback."""
    def resolve() -> str:
        return CPF_DUPLICATE if _find_departamento(db, departamento_id) else DEPT_NOT_FOUND
    return resolve


def to_funcionario_out(f: Funcionario, departamento_nome: Optional[str] = None) -> FuncionarioOut:
    if departamento_nome is None and f.departamento is not None:
        departamento_nome = f.departamento.nome
    return FuncionarioOut(
        id=f.id,
        nome=f.nome,
        cargo=f.cargo,
        cpf=f.cpf,
        email=f.email,
        telefone=f.telefone,
        data_admissao=f.data_admissao,
        departamento_id=f.departamento_id,
        departamento_nome=departamento_nome,
        salario=f.salario,
        endereco=f.endereco,
        nivel_senioridade=f.nivel_senioridade,
        ativo=f.ativo,
        data_criacao=f.data_criacao,
        data_atualizacao=f.data_atualizacao,
    )


# -----------------------------
# Reads (department name always embedded)
# -----------------------------
def get_funcionario(db: Session, func_id: int) -> FuncionarioOut:
    logger.info("Buscando funcionário ID %s", func_id)
    return to_funcionario_out(_get_or_404(FuncionarioRepository(db), func_id))


def list_funcionarios(db: Session) -> List[FuncionarioOut]:
    logger.info("Listando todos os funcionários")
    return [to_funcionario_out(f) for f in FuncionarioRepository(db).get_all()]


def list_funcionarios_ativos(db: Session) -> List[FuncionarioOut]:
    logger.info("Listando funcionários ativos")
    return [to_funcionario_out(f) for f in FuncionarioRepository(db).get_ativos()]


def get_funcionario_by_cpf(db: Session, cpf: str) -> FuncionarioOut:
    logger.info("Buscando funcionário por CPF")
    if not cpf or not cpf.strip():
        raise ValidationError("CPF não pode ser vazio")
    f = FuncionarioRepository(db).get_by_cpf(cpf.strip())
    if not f:
        raise NotFoundError(NOT_FOUND)
    return to_funcionario_out(f)


def list_funcionarios_by_departamento(db: Session, departamento_id: int) -> List[FuncionarioOut]:
    logger.info("Listando funcionários do departamento %s", departamento_id)
    dept = _find_departamento(db, departamento_id)
    if not dept:
        raise NotFoundError(DEPT_NOT_FOUND)
    rows = FuncionarioRepository(db).get_by_departamento(departamento_id)
    return [to_funcionario_out(f, dept.nome) for f in rows]


def list_funcionarios_by_nivel(db: Session, nivel: int) -> List[FuncionarioOut]:
    logger.info("Listando funcionários com nível de senioridade %s", nivel)
    try:
        nivel = NivelSenioridade(nivel)
    except ValueError:
        raise ValidationError("Nível de senioridade deve ser entre 1 e 5") from None
    return [to_funcionario_out(f) for f in FuncionarioRepository(db).get_by_nivel_senioridade(int(nivel))]


def get_funcionarios_page(
    db: Session, page_number: int, page_size: int
) -> Tuple[List[FuncionarioOut], int, int]:
    logger.info("Listando funcionários com paginação - Página %s, Tamanho %s", page_number, page_size)
    validate_page(page_number, page_size)
    repo = FuncionarioRepository(db)
    rows = repo.get_paged(page_number, page_size)
    total = repo.count()
    return [to_funcionario_out(f) for f in rows], total, total_pages(total, page_size)


# -----------------------------
# Writes
# -----------------------------
def create_funcionario(db: Session, payload: FuncionarioCreate) -> FuncionarioOut:
    logger.info("Criando novo funcionário: %s", payload.nome)
    dept = _require_departamento(db, payload.departamento_id)

    repo = FuncionarioRepository(db)
    if payload.cpf and repo.get_by_cpf(payload.cpf):
        logger.warning("CPF duplicado ao criar funcionário %s", payload.nome)
        raise ConflictError(CPF_DUPLICATE)

    f = Funcionario(
        nome=payload.nome,
        cargo=payload.cargo,
        cpf=payload.cpf,
        email=payload.email,
        telefone=payload.telefone,
        data_admissao=payload.data_admissao,
        departamento_id=payload.departamento_id,
        salario=payload.salario,
        endereco=payload.endereco,
        nivel_senioridade=payload.nivel_senioridade,
        ativo=payload.ativo,
        data_criacao=_now_utc(),
    )
    with commit_or_conflict(repo, _integrity_message(db, payload.departamento_id)):
        repo.create(f)
    return to_funcionario_out(f, dept.nome)


def update_funcionario(db: Session, func_id: int, payload: FuncionarioUpdate) -> FuncionarioOut:
    logger.info("Atualizando funcionário ID %s", func_id)
    repo = FuncionarioRepository(db)
    f = _get_or_404(repo, func_id)
    dept = _require_departamento(db, payload.departamento_id)

    f.nome = payload.nome
    f.cargo = payload.cargo
    f.email = payload.email
    f.telefone = payload.telefone
    f.departamento_id = payload.departamento_id
    f.salario = payload.salario
    f.endereco = payload.endereco
    f.nivel_senioridade = payload.nivel_senioridade
    f.ativo = payload.ativo
    f.data_atualizacao = _now_utc()
    with commit_or_conflict(repo, _integrity_message(db, payload.departamento_id)):
        repo.update(f)
    return to_funcionario_out(f, dept.nome)


def patch_funcionario(db: Session, func_id: int, payload: FuncionarioPatch) -> FuncionarioOut:
    logger.info("Atualizando parcialmente funcionário ID %s (PATCH)", func_id)
    repo = FuncionarioRepository(db)
    f = _get_or_404(repo, func_id)

    changes = payload.model_dump(exclude_none=True)
    dept_nome = None
    if "departamento_id" in changes:
        # same referential rule as the full update
        dept_nome = _require_departamento(db, changes["departamento_id"]).nome

    departamento_id = changes.get("departamento_id", f.departamento_id)
    for k, v in changes.items():
        setattr(f, k, v)
    f.data_atualizacao = _now_utc()
    with commit_or_conflict(repo, _integrity_message(db, departamento_id)):
        repo.update(f)
    return to_funcionario_out(f, dept_nome)


def delete_funcionario(db: Session, func_id: int) -> None:
    logger.info("Deletando funcionário ID %s", func_id)
    repo = FuncionarioRepository(db)
    _check_id(func_id)
    if not repo.delete(func_id):
        raise NotFoundError(NOT_FOUND)
    repo.commit()
