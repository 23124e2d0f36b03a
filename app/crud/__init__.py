# app/crud/__init__.py
from .crud_cliente import cliente
