from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import ClienteError, StoreError, ValidationFailed
from app.core.logging import logger
from app.api.v1.router import api_router_v1
from app.database import engine
from app.db import base_class  # Import Base para criação de tabelas
from app import models  # noqa: F401  registra Cliente e Logradouro no metadata

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API de gestão de clientes - cadastro com logotipo e logradouros",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    contact={
        "name": "Suporte Técnico",
        "email": settings.SUPPORT_EMAIL,
    },
    license_info={
        "name": "MIT",
    },
)

# Configuração de CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Opcional: Criar tabelas automaticamente (em desenvolvimento)
# Em produção, use migrações com Alembic
if settings.ENVIRONMENT == "development":
    @app.on_event("startup")
    def create_tables():
        base_class.Base.metadata.create_all(bind=engine)
        logger.info("Tabelas criadas com sucesso (apenas em desenvolvimento)")


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.mensagem,
            "erros": [v.model_dump() for v in exc.violacoes],
        },
    )


@app.exception_handler(ClienteError)
async def cliente_error_handler(request: Request, exc: ClienteError):
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path}: {exc.mensagem}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.mensagem})


# Inclui todas as rotas da API V1
app.include_router(api_router_v1, prefix=settings.API_V1_STR)

@app.get("/", tags=["Root"])
async def read_root():
    return {
        "message": f"Bem-vindo à API {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}",
        "docs": "/docs",
        "status": "operacional",
        "environment": settings.ENVIRONMENT
    }

@app.get("/health", tags=["Health Check"])
async def health_check():
    """Endpoint para verificação de saúde da API"""
    return {
        "status": "healthy",
        "database": "connected" if settings.DATABASE_URL else "disconnected",
        "environment": settings.ENVIRONMENT
    }
