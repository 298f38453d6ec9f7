# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from typing import Sequence
import random

# Aynı isimli izleyicileri gözle ayırt etmek için; protokolde anlamı yok
VARSAYILAN_EMOJILER: tuple[str, ...] = (
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼", "🐨", "🐯",
    "🦁", "🐮", "🐷", "🐸", "🐵", "🐔", "🐧", "🐦", "🦆", "🦉",
    "🐺", "🐗", "🐴", "🦄", "🐝", "🐛", "🦋", "🐌", "🐞", "🐢",
    "🐍", "🦎", "🐙", "🦑", "🦀", "🐡", "🐠", "🐟", "🐬", "🐳",
    "🦈", "🐊", "🦓", "🦒", "🦔", "🌵", "🌻", "🍄", "🍉", "🍒",
    "🍕", "🍩", "🎬", "🎧", "🎲", "🚀", "⭐", "🌙", "🔥", "🌈",
)

def decorate_name(name: str, pool: Sequence[str], rng: random.Random) -> str:
    """İsmin başına havuzdan rastgele bir emoji ekler.

    Saf fonksiyon: havuz ve rastgelelik kaynağı dışarıdan verilir,
    testlerde sabit seed'li bir `random.Random` kullanılabilir.
    """
    if not pool:
        return name

    return f"{rng.choice(pool)} {name}"
