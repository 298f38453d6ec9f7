# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI  import konsol
from Core import kekik_FastAPI, Request, JSONResponse
from time import time
import asyncio

@kekik_FastAPI.middleware("http")
async def istekten_once_sonra(request: Request, call_next):
    baslangic_zamani = time()

    fw_for    = request.headers.get("X-Forwarded-For")
    client_ip = fw_for.split(",")[0].strip() if fw_for else (request.client.host if request.client else "-")

    try:
        response = await asyncio.wait_for(call_next(request), timeout=30)
        kod      = response.status_code
    except asyncio.TimeoutError:
        kod      = 504
        response = JSONResponse(status_code=504, content={"ups": "Zaman Aşımı.."})
        konsol.log(f"[red]⏱️ Timeout:[/] {request.url.path}")
    except asyncio.CancelledError:
        konsol.log(f"[yellow]🚫 İstemci bağlantıyı kapattı:[/] {request.url.path}")
        raise
    except Exception as exc:
        kod      = 500
        response = JSONResponse(status_code=500, content={"ups": "Sunucu Hatası.."})
        konsol.log(f"[red]❌ Beklenmeyen hata:[/] {request.url.path} - {exc}")

    sure = round(time() - baslangic_zamani, 3)
    renk = "green" if kod < 400 else "yellow" if kod < 500 else "red"

    konsol.log(
        f"[bold bright_blue]{request.method}[/] {request.url.path}"
        f" [{renk}]{kod}[/] [grey50]{sure}sn[/] [bold red]{client_ip}[/]"
    )

    return response
