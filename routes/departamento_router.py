from __future__ import annotations

from typing import List
from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from config import settings
from db import get_db
from schemas.common import PagedOut
from schemas.departamento import DepartamentoCreate, DepartamentoUpdate, DepartamentoPatch, DepartamentoOut
from utils.departamento_helpers import (
    get_departamento, list_departamentos, list_departamentos_ativos, get_departamento_by_nome,
    get_departamentos_page, create_departamento, update_departamento, patch_departamento,
    delete_departamento,
)
from utils.pagination import clamp_page_size
from .location import created_location

router_v1 = APIRouter(prefix="/api/v1/departamento", tags=["Departamento v1"])
router_v2 = APIRouter(prefix="/api/v2/departamento", tags=["Departamento v2"])


# -----------------------------
# v2-only lookups (declared before /{dept_id})
# -----------------------------
@router_v2.get("/ativos", response_model=List[DepartamentoOut])
def list_active_departments(db: Session = Depends(get_db)):
    return list_departamentos_ativos(db)


@router_v2.get("/nome/{nome}", response_model=DepartamentoOut)
def get_department_by_name(nome: str, db: Session = Depends(get_db)):
    return get_departamento_by_nome(db, nome)


# -----------------------------
# Lists
# -----------------------------
@router_v1.get("", response_model=List[DepartamentoOut])
def list_departments(db: Session = Depends(get_db)):
    return list_departamentos(db)


@router_v2.get("", response_model=PagedOut[DepartamentoOut])
def list_departments_paged(
        page_number: int = Query(1, alias="pageNumber"),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
        db: Session = Depends(get_db),
):
    page_size = clamp_page_size(page_size)
    data, total, pages = get_departamentos_page(db, page_number, page_size)
    return PagedOut[DepartamentoOut](
        data=data, page_number=page_number, page_size=page_size, total_count=total, total_pages=pages,
    )


# -----------------------------
# By ID / CREATE / UPDATE / DELETE (both versions)
# -----------------------------
@router_v1.get("/{dept_id}", response_model=DepartamentoOut)
@router_v2.get("/{dept_id}", response_model=DepartamentoOut)
def get_department(dept_id: int, db: Session = Depends(get_db)):
    return get_departamento(db, dept_id)


@router_v1.post("", response_model=DepartamentoOut, status_code=status.HTTP_201_CREATED)
@router_v2.post("", response_model=DepartamentoOut, status_code=status.HTTP_201_CREATED)
def create_department(payload: DepartamentoCreate, request: Request, response: Response,
                      db: Session = Depends(get_db)):
    d = create_departamento(db, payload)
    response.headers["Location"] = created_location(request, d.id)
    return d


@router_v1.put("/{dept_id}", response_model=DepartamentoOut)
@router_v2.put("/{dept_id}", response_model=DepartamentoOut)
def update_department(dept_id: int, payload: DepartamentoUpdate, db: Session = Depends(get_db)):
    return update_departamento(db, dept_id, payload)


@router_v2.patch("/{dept_id}", response_model=DepartamentoOut)
def patch_department(dept_id: int, payload: DepartamentoPatch, db: Session = Depends(get_db)):
    return patch_departamento(db, dept_id, payload)


@router_v1.delete("/{dept_id}", status_code=status.HTTP_204_NO_CONTENT)
@router_v2.delete("/{dept_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(dept_id: int, db: Session = Depends(get_db)):
    delete_departamento(db, dept_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
