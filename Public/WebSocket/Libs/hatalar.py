# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

class SyncError(Exception):
    """Senkron oda alt sisteminin temel hatası"""

class ProtocolError(SyncError):
    """İstemci çerçevesi şemaya uymuyor - sadece o bağlantı için ölümcül"""

    def __init__(self, message: str, close_code: int = 1007):
        super().__init__(message)
        self.close_code = close_code

class SlowConsumer(SyncError):
    """İzleyicinin giden kuyruğu dolu - izleyici odadan düşürüldü"""

    close_code = 1008
