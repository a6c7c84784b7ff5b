from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont


@dataclass(frozen=True, slots=True)
class CardEntry:
    rank: int
    name: str
    likes: int


def _try_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Tries common system fonts, falls back to the PIL default.
    """
    candidates = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "C:\\Windows\\Fonts\\segoeui.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
    ]
    for path in candidates:
        try:
            return ImageFont.truetype(path, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def _fit(s: str, limit: int = 28) -> str:
    return s if len(s) <= limit else s[: limit - 1] + "…"


def render_hall_of_fame_card(
    *,
    category_name: str,
    month_year: str,
    entries: list[CardEntry],
) -> bytes:
    """
    Returns PNG bytes: a header with the category and month, then one row per
    entry (rank, author, likes). Height grows with the number of rows.
    """
    W = 1200
    pad = 48
    header_h = 170
    row_h = 64
    body_h = 72 + max(len(entries), 1) * row_h + 24
    H = pad + header_h + 26 + body_h + pad + 40

    img = Image.new("RGB", (W, H), (248, 249, 251))
    draw = ImageDraw.Draw(img)

    font_title = _try_font(52)
    font_sub = _try_font(28)
    font_row = _try_font(30)
    font_small = _try_font(22)

    dark = (15, 23, 42)
    muted = (107, 114, 128)
    faint = (156, 163, 175)

    draw.rounded_rectangle(
        (pad, pad, W - pad, pad + header_h),
        radius=28,
        fill=(255, 255, 255),
        outline=(235, 236, 240),
        width=2,
    )
    draw.text((pad + 32, pad + 28), "Hall of Fame", font=font_title, fill=dark)
    draw.text(
        (pad + 32, pad + 100),
        f"{_fit(category_name, 48)} · {month_year}",
        font=font_sub,
        fill=(55, 65, 81),
    )

    body_top = pad + header_h + 26
    draw.rounded_rectangle(
        (pad, body_top, W - pad, body_top + body_h),
        radius=28,
        fill=(255, 255, 255),
        outline=(235, 236, 240),
        width=2,
    )

    draw.text((pad + 36, body_top + 28), "Rank", font=font_small, fill=muted)
    draw.text((pad + 190, body_top + 28), "Author", font=font_small, fill=muted)
    draw.text((W - pad - 220, body_top + 28), "Likes", font=font_small, fill=muted)

    row_y = body_top + 72
    if not entries:
        draw.text((pad + 40, row_y + 14), "No photos this month", font=font_row, fill=faint)

    for i, e in enumerate(entries):
        y1 = row_y + i * row_h
        if i % 2 == 0:
            draw.rounded_rectangle(
                (pad + 20, y1, W - pad - 20, y1 + row_h - 8),
                radius=18,
                fill=(249, 250, 251),
            )
        draw.text((pad + 40, y1 + 14), f"#{e.rank}", font=font_row, fill=dark)
        draw.text((pad + 190, y1 + 14), _fit(e.name), font=font_row, fill=dark)
        draw.text((W - pad - 220, y1 + 14), str(e.likes), font=font_row, fill=dark)

    draw.text(
        (pad + 36, H - pad - 24),
        "Generated automatically · photobot",
        font=font_small,
        fill=faint,
    )

    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()
