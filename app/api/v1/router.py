from fastapi import APIRouter

from app.api.v1.endpoints import clientes

api_router_v1 = APIRouter()

api_router_v1.include_router(clientes.router, prefix="/clientes", tags=["Clientes"])

@api_router_v1.get("/", tags=["Root V1"])
async def read_root_v1():
    return {"message": "API V1 Operacional"}
