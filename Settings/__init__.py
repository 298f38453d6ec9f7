# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from pathlib import Path
from yaml    import load, FullLoader
from dotenv  import load_dotenv
import os

KOK_DIZIN = Path(__file__).resolve().parent.parent

# .env yükleme
load_dotenv(dotenv_path=KOK_DIZIN / ".env")

# AYAR.yml yükleme
with open(KOK_DIZIN / "AYAR.yml", "r", encoding="utf-8") as yaml_dosyasi:
    AYAR = load(yaml_dosyasi, Loader=FullLoader)

# Genel ayarlar
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

PROJE = AYAR["PROJE"]
HOST  = os.getenv("HOST", AYAR["APP"]["HOST"])
PORT  = int(os.getenv("PORT", AYAR["APP"]["PORT"]))

# Oda tanımları (glob, `;` ile birden fazla) - göreli yollar proje köküne göre çözülür
ROOM_DIR = ";".join(
    desen if os.path.isabs(desen) else str(KOK_DIZIN / desen)
        for desen in os.getenv("ROOM_DIR", AYAR["ODA"]["DIZIN"]).split(";") if desen
)

# Kuyruk kapasiteleri (backpressure sınırları)
ROOM_QUEUE_SIZE    = int(os.getenv("ROOM_QUEUE_SIZE",    AYAR["ODA"]["KUYRUK_BOYUTU"]))
WATCHER_QUEUE_SIZE = int(os.getenv("WATCHER_QUEUE_SIZE", AYAR["ODA"]["IZLEYICI_KUYRUK_BOYUTU"]))
