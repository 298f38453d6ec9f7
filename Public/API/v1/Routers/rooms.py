# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from Core                    import Request, JSONResponse, HTTPException
from Public.WebSocket.Models import RoomSnapshot
from .                       import api_v1_router

@api_v1_router.get("/rooms")
async def list_rooms(request: Request):
    """Tanımlı odalar ve çalışıp çalışmadıkları"""
    directory = request.app.state.room_directory

    return JSONResponse({
        "success" : True,
        "rooms"   : [
            {"name": name, "url": config.url, "active": name in directory.rooms}
                for name, config in sorted(directory.definitions.items())
        ]
    })

@api_v1_router.get("/rooms/{room_name}")
async def get_room(request: Request, room_name: str):
    """Odanın anlık görünümü - çalışmayan oda başlatılmaz, sadece tanımı döner"""
    directory = request.app.state.room_directory

    room = await directory.get_room(room_name)
    if room is not None:
        snapshot = await room.snapshot()
    elif room_name in directory.definitions:
        config   = directory.definitions[room_name]
        snapshot = RoomSnapshot(name=room_name, url=config.url, subtitles=config.subs)
    else:
        raise HTTPException(status_code=404, detail="Oda bulunamadı")

    return JSONResponse({
        "success"  : True,
        "active"   : room is not None,
        "snapshot" : snapshot.model_dump(mode="json", by_alias=True)
    })
