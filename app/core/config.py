from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Configurações básicas do projeto
    PROJECT_NAME: str = "API Gestão de Clientes"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Configurações de banco de dados
    DATABASE_URL: str = "sqlite:///./clientes.db"

    # Configurações opcionais (com valores padrão)
    ENVIRONMENT: str = "development"
    SUPPORT_EMAIL: str = "support@example.com"
    LOG_LEVEL: str = "INFO"

    # Configurações de CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignora variáveis extras não declaradas


settings = Settings()
