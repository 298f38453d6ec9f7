# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI               import konsol
from fastapi           import WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from .                 import wss_router
from ..Libs            import SyncConnection, ProtocolError, SlowConsumer

async def reddet_oda_yok(websocket: WebSocket):
    """Upgrade'den önce 404 - sunucu desteklemiyorsa 4404 koduyla kapat"""
    if "websocket.http.response" in websocket.scope.get("extensions", {}):
        await websocket.send_denial_response(
            JSONResponse(status_code=404, content={"success": False, "message": "Oda bulunamadı"})
        )
    else:
        await websocket.close(code=4404)

@wss_router.websocket("/{room_name}/{name}/")
async def sync_room_websocket(websocket: WebSocket, room_name: str, name: str):
    room = await websocket.app.state.room_directory.find_room(room_name)
    if room is None:
        await reddet_oda_yok(websocket)
        return

    await websocket.accept()
    connection = SyncConnection(websocket, room, name)

    try:
        await connection.run()
    except WebSocketDisconnect:
        pass
    except (ProtocolError, SlowConsumer) as hata:
        konsol.log(f"[yellow]{connection.etiket} bağlantısı kapatıldı:[/] {hata}")
        await connection.close(hata.close_code)
    except Exception as hata:
        konsol.log(f"[red]WebSocket Error:[/] {connection.etiket} » {type(hata).__name__}: {hata}")
        await connection.close(1011)
