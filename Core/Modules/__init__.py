# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI                   import konsol
from fastapi               import FastAPI
from contextlib            import asynccontextmanager
from Settings              import ROOM_DIR, ROOM_QUEUE_SIZE, WATCHER_QUEUE_SIZE
from Public.WebSocket.Libs import RoomDirectory

@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan events - startup ve shutdown"""

    # Oda dizini uygulamaya ait, global değil
    directory = RoomDirectory(queue_size=ROOM_QUEUE_SIZE, watcher_queue_size=WATCHER_QUEUE_SIZE)
    adet      = directory.load_definitions(ROOM_DIR)
    app.state.room_directory = directory

    konsol.log(f"[green]{adet} oda tanımı yüklendi.[/]")

    yield

    await directory.close()
    konsol.log("[yellow]Tüm odalar durduruldu.[/]")
