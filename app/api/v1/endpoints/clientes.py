# app/api/v1/endpoints/clientes.py
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError

from app import schemas
from app.api import deps
from app.core.logging import logger
from app.services.cliente_service import ClienteService

router = APIRouter()

_logradouros_adapter = TypeAdapter(List[schemas.LogradouroIn])


def _ler_logradouros(logradouros: Optional[str]) -> List[schemas.LogradouroIn]:
    """O formulário envia os logradouros como um array JSON num único campo."""
    if not logradouros:
        return []
    try:
        return _logradouros_adapter.validate_json(logradouros)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def _ler_logotipo(logotipo: Optional[UploadFile]) -> Optional[bytes]:
    # Arquivo enviado vazio chega como b"" e é recusado pelo validador.
    if logotipo is None:
        return None
    return logotipo.file.read()


@router.get("/", response_model=List[schemas.ClienteResumo])
def read_clientes(
    skip: int = 0,
    limit: int = 100,
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Any:
    """
    Recupera a lista de clientes, sem os dados do logotipo.
    """
    return service.listar(skip=skip, limit=limit)


@router.get("/{cliente_id}", response_model=schemas.ClienteDetalhe)
def read_cliente_by_id(
    cliente_id: int,
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Any:
    """
    Recupera um cliente pelo seu ID, com logotipo (base64) e logradouros.
    """
    return service.obter(cliente_id)


@router.get(
    "/{cliente_id}/logotipo",
    response_class=Response,
    responses={200: {"content": {"application/octet-stream": {}}}},
)
def read_cliente_logotipo(
    cliente_id: int,
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Response:
    cliente = service.obter(cliente_id)
    if cliente.logotipo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não possui logotipo")
    return Response(content=cliente.logotipo, media_type="application/octet-stream")


@router.post(
    "/",
    response_model=schemas.ClienteResult,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": schemas.ErroValidacao}},
)
def create_cliente(
    *,
    nome: str = Form(""),
    email: str = Form(""),
    telefone: Optional[str] = Form(None),
    logradouros: Optional[str] = Form(None),
    logotipo: Optional[UploadFile] = File(None),
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Any:
    """
    Cria um novo cliente a partir de multipart/form-data, com upload opcional de logotipo.
    """
    cliente_in = schemas.ClienteCreate(
        nome=nome,
        email=email,
        telefone=telefone,
        logotipo=_ler_logotipo(logotipo),
        logradouros=_ler_logradouros(logradouros),
    )
    resultado = service.criar(cliente_in)
    logger.info(f"POST /clientes -> cliente {resultado.id}")
    return resultado


@router.put(
    "/{cliente_id}",
    response_model=schemas.ClienteDetalhe,
    responses={400: {"model": schemas.ErroValidacao}},
)
def update_cliente(
    *,
    cliente_id: int,
    nome: str = Form(""),
    email: str = Form(""),
    telefone: Optional[str] = Form(None),
    logradouros: Optional[str] = Form(None),
    logotipo: Optional[UploadFile] = File(None),
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Any:
    """
    Atualiza um cliente. Os logradouros enviados substituem todos os anteriores;
    sem arquivo de logotipo, o atual é mantido.
    """
    cliente_in = schemas.ClienteUpdate(
        nome=nome,
        email=email,
        telefone=telefone,
        logotipo=_ler_logotipo(logotipo),
        logradouros=_ler_logradouros(logradouros),
    )
    return service.atualizar(cliente_id, cliente_in)


@router.delete("/{cliente_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cliente(
    *,
    cliente_id: int,
    service: ClienteService = Depends(deps.get_cliente_service),
) -> Response:
    """
    Deleta um cliente e, em cascata, todos os seus logradouros.
    """
    service.remover(cliente_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
