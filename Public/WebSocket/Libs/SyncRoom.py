# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI             import konsol
from Settings        import DEBUG
from typing          import Sequence
from ..Models        import (
    RoomConfig, RoomSnapshot, Watcher, PlaybackState,
    Join, Leave, Play, Pause, Seek, Status, Metadata,
    RoomEvent, OutboundMessage
)
from .name_decorator import decorate_name, VARSAYILAN_EMOJILER
from time            import perf_counter
import asyncio, random

# ============== Kuyruk kapasiteleri ==============
ROOM_QUEUE_SIZE    = 64   # Odaya gelen olaylar (dolunca gönderen bekler)
WATCHER_QUEUE_SIZE = 64   # İzleyici başına giden mesajlar (dolunca izleyici düşürülür)

class SyncRoom:
    """Tek bir izleme odası: izleyici kaydı ve sıralı olay işleyici

    Odaya gelen tüm olaylar tek bir kuyruktan, tek bir task tarafından sırayla
    işlenir; bu yüzden her izleyici yayınları aynı sırada görür.
    İzleyici listesi ve id sayacı `_lock` ile korunur.
    """

    def __init__(
        self,
        name               : str,
        config             : RoomConfig,
        queue_size         : int            = ROOM_QUEUE_SIZE,
        watcher_queue_size : int            = WATCHER_QUEUE_SIZE,
        emojis             : Sequence[str]  = VARSAYILAN_EMOJILER,
        rng                : random.Random | None = None,
    ):
        self.name      = name
        self.url       = config.url
        self.subtitles = list(config.subs)
        self.watchers: list[Watcher] = []

        self._next_id            = 1
        self._lock               = asyncio.Lock()
        self._inbox              = asyncio.Queue(maxsize=queue_size)
        self._watcher_queue_size = watcher_queue_size
        self._emojis             = emojis
        self._rng                = rng or random.Random()
        self._task: asyncio.Task | None = None

    def __repr__(self) -> str:
        return f"<SyncRoom {self.name!r} watchers={len(self.watchers)}>"

    # ============== Yaşam döngüsü ==============

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Oda task'ını başlat (zaten çalışıyorsa bir şey yapmaz)"""
        if self.running:
            return

        self._task = asyncio.create_task(self._run(), name=f"sync-room:{self.name}")

    async def stop(self) -> None:
        """Oda task'ını durdur - sadece süreç kapanırken"""
        if not self.running:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def wait_idle(self) -> None:
        """Kuyruktaki tüm olaylar işlenene kadar bekle"""
        await self._inbox.join()

    # ============== İzleyici kaydı ==============

    async def add_watcher(self, name: str) -> tuple[asyncio.Queue, int]:
        """İzleyiciyi kaydet, (giden kuyruk, id) döndür

        `Id` mesajını istemciye ilk olarak göndermek transport katmanının işi.
        """
        async with self._lock:
            watcher_id     = self._next_id
            self._next_id += 1

            watcher = Watcher(
                id    = watcher_id,
                name  = decorate_name(name, self._emojis, self._rng),
                queue = asyncio.Queue(maxsize=self._watcher_queue_size),
            )
            self.watchers.append(watcher)

        # Kilit dışında: dolu kuyrukta beklerken oda task'ı kilidi alabilmeli
        await self._inbox.put(Join(name=watcher.name))

        return watcher.queue, watcher_id

    async def remove_watcher(self, watcher_id: int) -> bool:
        """İzleyiciyi çıkar; zaten yoksa sessizce False döner"""
        async with self._lock:
            watcher = self._pop_locked(watcher_id)

        if watcher is None:
            return False

        await self._inbox.put(Leave(id=watcher_id))
        return True

    async def update_status(self, watcher_id: int, position: float, buffered: float, state: PlaybackState) -> bool:
        """İzleyicinin bildirdiği oynatıcı durumunu yaz"""
        async with self._lock:
            watcher = self._find_locked(watcher_id)
            if watcher is None:
                # Çıkış ile durum mesajı yarışı - normal
                if DEBUG:
                    konsol.log(f"[grey50]{self.name}: bilinmeyen izleyici için durum atlandı ({watcher_id})[/]")
                return False

            watcher.position   = position
            watcher.buffered   = buffered
            watcher.state      = state
            watcher.updated_at = perf_counter()
            return True

    async def snapshot(self) -> RoomSnapshot:
        """Odanın anlık görünümü"""
        async with self._lock:
            return self._snapshot_locked()

    async def send(self, event: RoomEvent) -> None:
        """Olayı oda kuyruğuna ekle (kuyruk doluysa bekler)"""
        if isinstance(event, (Play, Pause, Seek, Status)) and event.id is None:
            raise ValueError(f"{event.type} olayı izleyici id'si olmadan gönderilemez")

        await self._inbox.put(event)

    def _find_locked(self, watcher_id: int) -> Watcher | None:
        return next((w for w in self.watchers if w.id == watcher_id), None)

    def _pop_locked(self, watcher_id: int) -> Watcher | None:
        for index, watcher in enumerate(self.watchers):
            if watcher.id == watcher_id:
                return self.watchers.pop(index)

        return None

    def _snapshot_locked(self) -> RoomSnapshot:
        return RoomSnapshot(
            name      = self.name,
            url       = self.url,
            subtitles = self.subtitles,
            watchers  = [watcher.info() for watcher in self.watchers],
        )

    # ============== Yayın ==============

    def _fan_out_locked(self, message: OutboundMessage) -> list[int]:
        """Mesajı her izleyicinin kuyruğuna bırak, kuyruğu dolu olanların id'lerini döndür"""
        failed = []
        for watcher in self.watchers:
            try:
                watcher.queue.put_nowait(message)
            except asyncio.QueueFull:
                failed.append(watcher.id)

        return failed

    def _evict_locked(self, watcher_ids: list[int]) -> int:
        """Yetişemeyen izleyicileri düşür ve bağlantılarına kapanma sinyali ver"""
        evicted = 0
        for watcher_id in watcher_ids:
            watcher = self._pop_locked(watcher_id)
            if watcher is None:
                continue

            # Kuyruğu boşalt, `None` bağlantının yazıcı task'ını kapatır
            while not watcher.queue.empty():
                watcher.queue.get_nowait()
            watcher.queue.put_nowait(None)

            evicted += 1
            konsol.log(f"[yellow]{self.name}: {watcher.name} ({watcher_id}) yetişemedi, odadan düşürüldü[/]")

        return evicted

    def _broadcast_locked(self, message: OutboundMessage) -> None:
        failed = self._fan_out_locked(message)

        # Düşürülen izleyiciler sonrası kalanlara güncel üyelik yayınlanır
        while failed and self._evict_locked(failed):
            failed = self._fan_out_locked(Metadata(snapshot=self._snapshot_locked()))

    async def broadcast(self, message: OutboundMessage) -> None:
        """Mesajı tüm izleyicilere gönder; dolu kuyruklar yayını durdurmaz"""
        async with self._lock:
            self._broadcast_locked(message)

    async def broadcast_metadata(self) -> None:
        """Güncel snapshot'ı aynı kilit altında hesapla ve yayınla"""
        async with self._lock:
            self._broadcast_locked(Metadata(snapshot=self._snapshot_locked()))

    # ============== Olay döngüsü ==============

    async def _handle(self, event: RoomEvent) -> None:
        if isinstance(event, (Join, Leave)):
            await self.broadcast_metadata()

        elif isinstance(event, (Play, Pause, Seek)):
            # İstek olduğu gibi geri yayınlanır, oda kendi kontrol mesajı üretmez
            await self.broadcast(event)

        elif isinstance(event, Status):
            await self.update_status(event.id, event.position, event.buffered, event.playback_state)
            await self.broadcast_metadata()

    async def _run(self) -> None:
        konsol.log(f"[green]Oda başlatıldı:[/] {self.name} [grey50]({self.url})[/]")

        while True:
            event = await self._inbox.get()
            try:
                if DEBUG:
                    konsol.log(f"[grey50]{self.name} « {event!r}[/]")
                await self._handle(event)
            except Exception as hata:
                konsol.log(f"[red]{self.name} olay hatası:[/] {type(hata).__name__} » {hata}")
            finally:
                self._inbox.task_done()
