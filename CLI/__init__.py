# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from rich.console   import Console
from rich.traceback import install
import sys

install(show_locals=False)

konsol = Console(log_path=False, highlight=False)

def cikis_yap(temizle: bool = True):
    """Programdan temiz çıkış"""
    if temizle:
        konsol.clear()

    konsol.print("\n[bold red]Çıkış yapılıyor...[/]", width=70, justify="center")
    sys.exit(0)

def hata_yakala(hata: BaseException):
    """Yakalanmamış hataları tek formatta basar ve çıkar"""
    if isinstance(hata, KeyboardInterrupt):
        cikis_yap(False)

    konsol.print(f"\n[bold red]{type(hata).__name__}[/] [red]» {hata}[/]", width=70, justify="center")
    konsol.print_exception(show_locals=False)
    sys.exit(1)
