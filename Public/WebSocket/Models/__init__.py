# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from .SyncModels import (
    PlaybackState,
    Subtitle,
    RoomConfig,
    WatcherInfo,
    RoomSnapshot,
    Play,
    Pause,
    Seek,
    Status,
    Join,
    Leave,
    IdMessage,
    Metadata,
    ClientMessage,
    RoomEvent,
    OutboundMessage,
    client_message_adapter,
    Watcher,
)
