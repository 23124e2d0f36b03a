# app/schemas/cliente_schemas.py
import base64
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer


class LogradouroBase(BaseModel):
    endereco: str = Field(..., min_length=1, max_length=200, example="Rua das Flores, 123")
    complemento: Optional[str] = Field(None, max_length=100, example="Sala 4")
    bairro: str = Field(..., min_length=1, max_length=50, example="Centro")
    cidade: str = Field(..., min_length=1, max_length=50, example="São Paulo")
    estado: str = Field(..., min_length=2, max_length=2, example="SP")
    cep: str = Field(..., min_length=1, max_length=10, example="01001-000")


class LogradouroIn(LogradouroBase):
    # Aceito para compatibilidade com o formulário de edição, mas nunca persistido:
    # a atualização substitui todos os logradouros e gera novos ids.
    id: Optional[int] = None


class Logradouro(LogradouroBase):
    id: int
    cliente_id: int

    class Config:
        from_attributes = True


class ClienteBase(BaseModel):
    # Sem restrições aqui: as regras de domínio ficam no validador de cliente,
    # que devolve todas as violações de uma vez.
    nome: str = Field("", example="Acme Ltda")
    email: str = Field("", example="contato@acme.com")
    telefone: Optional[str] = Field(None, example="(11) 99999-8888")


class ClienteCreate(ClienteBase):
    logotipo: Optional[bytes] = None
    logradouros: List[LogradouroIn] = []


class ClienteUpdate(ClienteCreate):
    pass


class ClienteResumo(BaseModel):
    """Listagem: nunca carrega o logotipo."""

    id: int
    nome: str
    email: str
    telefone: Optional[str] = None

    class Config:
        from_attributes = True


class ClienteDetalhe(ClienteResumo):
    logotipo: Optional[bytes] = None
    logradouros: List[Logradouro] = []

    @field_serializer("logotipo", when_used="json")
    def serializar_logotipo(self, logotipo: Optional[bytes]) -> Optional[str]:
        if logotipo is None:
            return None
        return base64.b64encode(logotipo).decode("ascii")


class ClienteResult(BaseModel):
    id: int
    nome: str


class Violacao(BaseModel):
    campo: str
    mensagem: str


class ErroValidacao(BaseModel):
    detail: str
    erros: List[Violacao]
