# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from .hatalar        import SyncError, ProtocolError, SlowConsumer
from .name_decorator import decorate_name, VARSAYILAN_EMOJILER
from .SyncRoom       import SyncRoom, ROOM_QUEUE_SIZE, WATCHER_QUEUE_SIZE
from .RoomDirectory  import RoomDirectory
from .connection     import SyncConnection, parse_frame
