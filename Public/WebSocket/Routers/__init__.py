# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from fastapi import APIRouter

wss_router = APIRouter(prefix="/api")

from . import sync_room
