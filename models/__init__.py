from .base import Base
from .departamento import Departamento
from .funcionario import Funcionario, NivelSenioridade

__all__ = ["Base", "Departamento", "Funcionario", "NivelSenioridade"]
