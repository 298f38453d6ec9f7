# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI                  import konsol
from Settings             import DEBUG
from fastapi              import WebSocket
from starlette.websockets import WebSocketState
from pydantic             import ValidationError
from ..Models             import IdMessage, OutboundMessage, client_message_adapter
from .SyncRoom            import SyncRoom
from .hatalar             import ProtocolError, SlowConsumer
import asyncio

MAX_PAYLOAD = 512 * 1024  # 512 KB

def parse_frame(frame: dict, watcher_id: int):
    """Gelen çerçeveyi istemci mesajına çevir ve id'yi bağlantının id'si ile değiştir"""
    text = frame.get("text")
    if text is None:
        raise ProtocolError("Sadece metin çerçeveleri kabul edilir", close_code=1003)

    if len(text.encode("utf-8")) > MAX_PAYLOAD:
        raise ProtocolError(f"Mesaj boyutu çok büyük (> {MAX_PAYLOAD} bayt)", close_code=1009)

    try:
        message = client_message_adapter.validate_json(text)
    except ValidationError as hata:
        raise ProtocolError(f"Geçersiz mesaj ({hata.error_count()} hata): {text[:120]}") from hata

    return message.model_copy(update={"id": watcher_id})


class SyncConnection:
    """Bir izleyicinin WebSocket bağlantısı

    İki bağımsız task çalışır: okuyucu istemciden gelenleri odaya iletir,
    yazıcı izleyicinin giden kuyruğunu istemciye boşaltır. Biri bitince
    diğeri iptal edilir; izleyici her durumda tam bir kez odadan çıkarılır.
    """

    def __init__(self, websocket: WebSocket, room: SyncRoom, name: str):
        self.websocket  = websocket
        self.room       = room
        self.name       = name
        self.watcher_id = None
        self.queue      = None

    @property
    def etiket(self) -> str:
        return f"{self.room.name}/{self.name} ({self.watcher_id})"

    async def send_json(self, message: OutboundMessage):
        """Mesajı JSON metin çerçevesi olarak gönder"""
        await self.websocket.send_text(message.to_wire())

    async def close(self, code: int = 1000):
        """Soket hâlâ açıksa kapat"""
        if self.websocket.client_state == WebSocketState.CONNECTED and self.websocket.application_state == WebSocketState.CONNECTED:
            await self.websocket.close(code=code)

    async def reader(self):
        """İstemci -> oda"""
        while True:
            frame = await self.websocket.receive()
            if frame["type"] == "websocket.disconnect":
                return

            message = parse_frame(frame, self.watcher_id)
            if DEBUG:
                konsol.log(f"[grey50]{self.etiket} » {message!r}[/]")

            await self.room.send(message)

    async def writer(self):
        """Oda -> istemci"""
        while True:
            message = await self.queue.get()
            if message is None:
                raise SlowConsumer(f"{self.etiket} giden kuyruğu doldu")

            if DEBUG:
                konsol.log(f"[grey50]{self.etiket} « {message!r}[/]")

            await self.send_json(message)

    async def run(self):
        """Odaya katıl, `Id` gönder, okuyucu/yazıcı bitene kadar çalış"""
        self.queue, self.watcher_id = await self.room.add_watcher(self.name)

        try:
            await self.send_json(IdMessage(id=self.watcher_id))

            reader = asyncio.create_task(self.reader(), name=f"reader:{self.etiket}")
            writer = asyncio.create_task(self.writer(), name=f"writer:{self.etiket}")
            try:
                done, _ = await asyncio.wait({reader, writer}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                for task in (reader, writer):
                    task.cancel()
                # Bu task iptal edilmiş olabilir; wait CancelledError'ı yeniden fırlatmaz
                await asyncio.wait({reader, writer})

            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    raise task.exception()
        finally:
            if DEBUG:
                konsol.log(f"[grey50]İzleyici çıkarılıyor: {self.etiket}[/]")
            await self.room.remove_watcher(self.watcher_id)
