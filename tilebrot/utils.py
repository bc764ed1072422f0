# tilebrot/utils.py
import re

_HEX = re.compile(r"^#?([0-9a-f]{6})$")


def parse_color(s) -> tuple:
    """
    Parse '#f6f6f7', 'f6f6f7', '246,246,247' or [246, 246, 247] into an RGB tuple.
    """
    if isinstance(s, (list, tuple)):
        parts = list(s)
    else:
        s = str(s).strip().lower().replace(" ", "")
        m = _HEX.match(s)
        if m:
            h = m.group(1)
            return tuple(int(h[k:k + 2], 16) for k in (0, 2, 4))
        parts = s.split(",")

    if len(parts) != 3:
        raise ValueError(f"Cannot parse color: {s!r}")
    try:
        rgb = tuple(int(p) for p in parts)
    except (TypeError, ValueError):
        raise ValueError(f"Cannot parse color: {s!r}") from None
    if any(c != clamp(c, 0, 255) for c in rgb):
        raise ValueError(f"Color channels must be in 0..255: {s!r}")
    return rgb


def clamp(v, vmin, vmax):
    return max(vmin, min(v, vmax))
