from __future__ import annotations

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from config import settings
from db import get_db
from schemas.common import PagedOut
from schemas.funcionario import FuncionarioCreate, FuncionarioUpdate, FuncionarioPatch, FuncionarioOut
from utils.funcionario_helpers import (
    get_funcionario, list_funcionarios, list_funcionarios_ativos, get_funcionario_by_cpf,
    list_funcionarios_by_departamento, list_funcionarios_by_nivel, get_funcionarios_page,
    create_funcionario, update_funcionario, patch_funcionario, delete_funcionario,
)
from utils.pagination import clamp_page_size
from .location import created_location

router_v1 = APIRouter(prefix="/api/v1/funcionario", tags=["Funcionário v1"])
router_v2 = APIRouter(prefix="/api/v2/funcionario", tags=["Funcionário v2"])


# -----------------------------
# v2-only lookups (declared before /{func_id})
# -----------------------------
@router_v2.get("/ativos", response_model=List[FuncionarioOut])
def list_active_employees(db: Session = Depends(get_db)):
    return list_funcionarios_ativos(db)


@router_v2.get("/cpf/{cpf}", response_model=FuncionarioOut)
def get_employee_by_cpf(cpf: str, db: Session = Depends(get_db)):
    return get_funcionario_by_cpf(db, cpf)


@router_v2.get("/departamento/{departamento_id}", response_model=List[FuncionarioOut])
def list_employees_by_department(departamento_id: int, db: Session = Depends(get_db)):
    return list_funcionarios_by_departamento(db, departamento_id)


@router_v2.get("/senioridade/{nivel}", response_model=List[FuncionarioOut])
def list_employees_by_seniority(nivel: int, db: Session = Depends(get_db)):
    return list_funcionarios_by_nivel(db, nivel)


# -----------------------------
# Lists
# -----------------------------
@router_v1.get("", response_model=List[FuncionarioOut])
def list_employees(db: Session = Depends(get_db)):
    return list_funcionarios(db)


@router_v2.get("", response_model=PagedOut[FuncionarioOut])
def list_employees_paged(
        page_number: int = Query(1, alias="pageNumber"),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
        ativo: Optional[bool] = None,
        db: Session = Depends(get_db),
):
    page_size = clamp_page_size(page_size)
    data, total, pages = get_funcionarios_page(db, page_number, page_size)
    # filter applies to the fetched page only; totals stay unfiltered
    if ativo is not None:
        data = [f for f in data if f.ativo == ativo]
    return PagedOut[FuncionarioOut](
        data=data, page_number=page_number, page_size=page_size, total_count=total, total_pages=pages,
    )


# -----------------------------
# By ID / CREATE / UPDATE / DELETE (both versions)
# -----------------------------
@router_v1.get("/{func_id}", response_model=FuncionarioOut)
@router_v2.get("/{func_id}", response_model=FuncionarioOut)
def get_employee(func_id: int, db: Session = Depends(get_db)):
    return get_funcionario(db, func_id)


@router_v1.post("", response_model=FuncionarioOut, status_code=status.HTTP_201_CREATED)
@router_v2.post("", response_model=FuncionarioOut, status_code=status.HTTP_201_CREATED)
def create_employee(payload: FuncionarioCreate, request: Request, response: Response,
                    db: Session = Depends(get_db)):
    f = create_funcionario(db, payload)
    response.headers["Location"] = created_location(request, f.id)
    return f


@router_v1.put("/{func_id}", response_model=FuncionarioOut)
@router_v2.put("/{func_id}", response_model=FuncionarioOut)
def update_employee(func_id: int, payload: FuncionarioUpdate, db: Session = Depends(get_db)):
    return update_funcionario(db, func_id, payload)


@router_v2.patch("/{func_id}", response_model=FuncionarioOut)
def patch_employee(func_id: int, payload: FuncionarioPatch, db: Session = Depends(get_db)):
    return patch_funcionario(db, func_id, payload)


@router_v1.delete("/{func_id}", status_code=status.HTTP_204_NO_CONTENT)
@router_v2.delete("/{func_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(func_id: int, db: Session = Depends(get_db)):
    delete_funcionario(db, func_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
