# app/schemas/__init__.py
from .cliente_schemas import (
    ClienteCreate,
    ClienteDetalhe,
    ClienteResult,
    ClienteResumo,
    ClienteUpdate,
    ErroValidacao,
    Logradouro,
    LogradouroIn,
    Violacao,
)
