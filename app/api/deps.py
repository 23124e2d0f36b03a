# app/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.cliente_service import ClienteService


def get_cliente_service(db: Session = Depends(get_db)) -> ClienteService:
    return ClienteService(db)
