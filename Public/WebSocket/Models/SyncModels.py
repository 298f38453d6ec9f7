# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from __future__                import annotations
from dataclasses               import dataclass, field
from enum                      import Enum
from typing                    import Annotated, Literal, Union
from pydantic                  import BaseModel, ConfigDict, Field, AliasChoices, TypeAdapter, StrictInt, StrictStr
from pydantic.alias_generators import to_camel
from time                      import perf_counter
import asyncio

class PlaybackState(str, Enum):
    """İzleyicinin bildirdiği oynatıcı durumu"""
    PLAYING = "playing"
    PAUSED  = "paused"

class _Mesaj(BaseModel):
    """Tüm wire mesajları: lowerCamelCase alanlar, değişmez örnekler"""
    # NaN/Infinity JSON'a null olarak geri yazılır, baştan reddedilir
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, allow_inf_nan=False)

    def to_wire(self) -> str:
        return self.model_dump_json(by_alias=True)

# ! ----------------------------------------» Oda tanımı / Snapshot

class Subtitle(_Mesaj):
    lang : str
    url  : str

class RoomConfig(_Mesaj):
    """Odalar/*.yml içinden okunan oda tanımı"""
    url  : str
    subs : list[Subtitle] = Field(default_factory=list)

class WatcherInfo(_Mesaj):
    id             : int
    display_name   : str
    buffered       : float
    position       : float
    playback_state : PlaybackState

class RoomSnapshot(_Mesaj):
    name      : str
    url       : str
    subtitles : list[Subtitle]    = Field(default_factory=list)
    watchers  : list[WatcherInfo] = Field(default_factory=list)

# ! ----------------------------------------» Kontrol mesajları (iki yönde aynı şekil)

class _Kontrol(_Mesaj):
    # İstemcinin gönderdiği id güvenilmez, transport katmanı üzerine yazar
    id         : int | None = None
    # Opak, olduğu gibi geri yayınlanır: bool/float dönüşümü yok
    request_id : StrictInt | StrictStr
    time       : float

class Play(_Kontrol):
    type : Literal["play"] = "play"

class Pause(_Kontrol):
    type : Literal["pause"] = "pause"

class Seek(_Kontrol):
    type : Literal["seek"] = "seek"

class Status(_Mesaj):
    type           : Literal["status"] = "status"
    id             : int | None = None
    position       : float
    buffered       : float
    # Eski istemciler `state` gönderir
    playback_state : PlaybackState = Field(
        validation_alias    = AliasChoices("playbackState", "playback_state", "state"),
        serialization_alias = "playbackState",
    )

# ! ----------------------------------------» Oda içi olaylar (wire'dan kabul edilmez)

class Join(_Mesaj):
    type : Literal["join"] = "join"
    name : str

class Leave(_Mesaj):
    type : Literal["leave"] = "leave"
    id   : int

# ! ----------------------------------------» Odadan istemciye

class IdMessage(_Mesaj):
    type : Literal["id"] = "id"
    id   : int

class Metadata(_Mesaj):
    type     : Literal["metadata"] = "metadata"
    snapshot : RoomSnapshot

ClientMessage   = Annotated[Union[Play, Pause, Seek, Status], Field(discriminator="type")]
RoomEvent       = Union[Join, Leave, Play, Pause, Seek, Status]
OutboundMessage = Union[IdMessage, Metadata, Play, Pause, Seek]

client_message_adapter = TypeAdapter(ClientMessage)

# ! ----------------------------------------» Oda durumu

@dataclass
class Watcher:
    """Odaya bağlı tek bir izleyici"""
    id         : int
    name       : str
    queue      : asyncio.Queue
    position   : float         = 0.0
    buffered   : float         = 0.0
    state      : PlaybackState = PlaybackState.PAUSED
    updated_at : float         = field(default_factory=perf_counter)

    def info(self) -> WatcherInfo:
        return WatcherInfo(
            id             = self.id,
            display_name   = self.name,
            buffered       = self.buffered,
            position       = self.position,
            playback_state = self.state,
        )
