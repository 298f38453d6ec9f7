# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from fastapi import APIRouter
from Core    import Request

api_v1_router         = APIRouter(prefix="/api/v1")
api_v1_global_message = {
    "with" : "SenkronIzle - birlikte izleme senkron sunucusu"
}

@api_v1_router.get("")
async def get_api_v1_router(request: Request):
    return api_v1_global_message


# ! ----------------------------------------» Routers
from . import (
    health,
    rooms
)
