# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI       import konsol
from pathlib   import Path
from yaml      import load, FullLoader, YAMLError
from pydantic  import ValidationError
from ..Models  import RoomConfig
from .SyncRoom import SyncRoom, ROOM_QUEUE_SIZE, WATCHER_QUEUE_SIZE
import asyncio, glob, tomllib

def oku_tanim(yol: Path) -> dict:
    """Oda tanım dosyasını oku: .toml (eski oda dizinleri) veya YAML"""
    if yol.suffix == ".toml":
        with open(yol, "rb") as toml_dosyasi:
            return tomllib.load(toml_dosyasi)

    with open(yol, "r", encoding="utf-8") as yaml_dosyasi:
        return load(yaml_dosyasi, Loader=FullLoader) or {}

class RoomDirectory:
    """Oda adı -> çalışan SyncRoom eşlemesi

    Tanımlı bir oda ilk istendiğinde oluşturulup başlatılır. Uygulamanın
    lifespan'ında oluşturulur ve `app.state.room_directory` üzerinde tutulur.
    """

    def __init__(self, queue_size: int = ROOM_QUEUE_SIZE, watcher_queue_size: int = WATCHER_QUEUE_SIZE):
        self.definitions: dict[str, RoomConfig] = {}
        self.rooms: dict[str, SyncRoom]         = {}
        self.queue_size         = queue_size
        self.watcher_queue_size = watcher_queue_size
        self._lock = asyncio.Lock()

    def define(self, name: str, config: RoomConfig) -> None:
        """Oda tanımı ekle/değiştir (çalışan odayı etkilemez)"""
        self.definitions[name] = config

    def load_definitions(self, pattern: str) -> int:
        """Glob ile eşleşen YAML veya TOML dosyalarından oda tanımlarını yükle

        Dosya adı (uzantısız) oda adıdır. Mevcut tanımlar silinir.
        Birden fazla desen `;` ile ayrılabilir (ör. `Odalar/*.yml;Odalar/*.toml`).
        """
        self.definitions.clear()
        konsol.log(f"[cyan]Oda tanımları yükleniyor:[/] {pattern}")

        dosyalar = sorted({dosya for desen in pattern.split(";") if desen for dosya in glob.glob(desen)})
        for dosya in dosyalar:
            yol = Path(dosya)
            try:
                config = RoomConfig.model_validate(oku_tanim(yol))
            except (YAMLError, tomllib.TOMLDecodeError, ValidationError) as hata:
                konsol.log(f"[red]Geçersiz oda tanımı:[/] {yol.name} » {type(hata).__name__}")
                continue

            self.definitions[yol.stem] = config
            konsol.log(f"  [green]›[/] {yol.stem} [grey50]{config.url}[/]")

        return len(self.definitions)

    async def get_room(self, name: str) -> SyncRoom | None:
        """Çalışan odayı getir, yoksa başlatmadan None döndür"""
        async with self._lock:
            return self.rooms.get(name)

    async def find_room(self, name: str) -> SyncRoom | None:
        """Odayı getir; tanımlıysa ve henüz yoksa oluşturup başlat"""
        async with self._lock:
            room = self.rooms.get(name)
            if room is not None:
                return room

            config = self.definitions.get(name)
            if config is None:
                return None

            room = SyncRoom(name, config, queue_size=self.queue_size, watcher_queue_size=self.watcher_queue_size)
            room.start()
            self.rooms[name] = room
            return room

    async def add_room(self, room: SyncRoom) -> None:
        """Önceden oluşturulmuş odayı kaydet ve başlat"""
        async with self._lock:
            room.start()
            self.rooms[room.name] = room

    async def close(self) -> None:
        """Tüm oda task'larını durdur"""
        async with self._lock:
            rooms = list(self.rooms.values())
            self.rooms.clear()

        for room in rooms:
            await room.stop()
