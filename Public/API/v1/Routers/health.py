# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from Core import Request, JSONResponse
from .    import api_v1_router

@api_v1_router.get("/health")
async def health_check(request: Request):
    """API sağlık kontrolü"""
    directory = request.app.state.room_directory

    return JSONResponse({
        "success"      : True,
        "status"       : "healthy",
        "active_rooms" : len(directory.rooms),
        "watchers"     : sum(len(room.watchers) for room in directory.rooms.values()),
    })
