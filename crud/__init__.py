from .base import CRUDRepository
from .departamento import DepartamentoRepository
from .funcionario import FuncionarioRepository

__all__ = ["CRUDRepository", "DepartamentoRepository", "FuncionarioRepository"]
