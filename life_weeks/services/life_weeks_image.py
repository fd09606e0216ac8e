"""
Life Weeks Share Image Service

Renders the shareable "My Life in Weeks" card: a header, the week grid
with its legend, a panel of stat cards and a footer.
Inspired by Tim Urban's "Your Life in Weeks" from Wait But Why.
"""

import io
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from ..domain.errors import ImageExportFailure
from ..utils.formatting import format_millions, format_number, format_fixed
from ..utils.logging import ExportLogContext
from .life_stats import WEEKS_PER_YEAR, StatisticsRecord
from .week_grid import WeekState, iter_rows

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
Font = Union[FreeTypeFont, ImageFont.ImageFont]

# Canvas sizes before scaling
WIDE_SIZE = (1200, 800)
COMPACT_SIZE = (800, 1000)
RENDER_SCALE = 2
# The share card shows at most this many years of rows
MAX_GRID_ROWS = 90

FONT_PATHS = [
    "/System/Library/Fonts/Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]


def _hex(value: str) -> Color:
    value = value.lstrip("#")
    return tuple(int(value[i : i + 2], 16) for i in (0, 2, 4))


@dataclass(frozen=True)
class Palette:
    background: Color
    panel: Color
    border: Color
    text: Color
    muted: Color
    past: Color
    current: Color
    future: Color


LIGHT_PALETTE = Palette(
    background=_hex("#ffffff"),
    panel=_hex("#ffffff"),
    border=_hex("#e5e7eb"),
    text=_hex("#1f2937"),
    muted=_hex("#6b7280"),
    past=_hex("#4f46e5"),
    current=_hex("#fbbf24"),
    future=_hex("#e5e7eb"),
)

DARK_PALETTE = Palette(
    background=_hex("#1f2937"),
    panel=_hex("#111827"),
    border=_hex("#374151"),
    text=_hex("#ffffff"),
    muted=_hex("#d1d5db"),
    past=_hex("#6366f1"),
    current=_hex("#fbbf24"),
    future=_hex("#4b5563"),
)

FOOTER_TEXT = "My Life in Weeks - every square is one week"


def get_palette(dark_mode: bool) -> Palette:
    return DARK_PALETTE if dark_mode else LIGHT_PALETTE


def build_stat_cards(stats: StatisticsRecord) -> List[Tuple[str, str]]:
    """The 16 (title, value) cards shown beside the grid."""
    return [
        ("Days Lived", format_number(stats.days_lived)),
        ("Heartbeats", format_millions(stats.heartbeats)),
        ("Breaths", format_millions(stats.breaths)),
        ("Blinks", format_millions(stats.blinks)),
        ("Earth Orbits", format_fixed(stats.earth_orbits, 2)),
        ("Full Moons", str(stats.full_moons_witnessed)),
        ("Seasons", str(stats.seasons_experienced)),
        ("Sleep Years", str(stats.sleep_years)),
        ("Words Spoken", format_millions(stats.words_spoken)),
        ("Steps Taken", format_millions(stats.steps_taken)),
        ("Meals Eaten", format_number(stats.meals_eaten)),
        ("Times Smiled", format_number(stats.times_smiled)),
        ("Books Possible", format_number(stats.books_could_read)),
        ("Degrees Possible", str(stats.degrees_equivalent)),
        ("Internet Hours", format_number(stats.internet_hours)),
        ("Weeks Left", format_number(stats.weeks_remaining)),
    ]


def build_subtitle(stats: StatisticsRecord) -> str:
    return (
        f"{format_fixed(stats.age_years, 1)} years old • "
        f"{stats.percentage_lived}% lived • "
        f"{format_number(stats.weeks_remaining)} weeks remaining"
    )


def share_filename(today: date) -> str:
    return f"my-life-in-weeks-{today.isoformat()}.png"


def grid_row_count(stats: StatisticsRecord) -> int:
    """Rows drawn on the share card; longer horizons are cut at MAX_GRID_ROWS."""
    return min(-(-stats.total_weeks // WEEKS_PER_YEAR), MAX_GRID_ROWS)


def _load_font(size: int) -> Font:
    for path in FONT_PATHS:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _draw_centered(
    draw: ImageDraw.ImageDraw,
    center_x: int,
    top: int,
    text: str,
    font: Font,
    fill: Color,
) -> int:
    """Draw text horizontally centered on center_x; returns its height."""
    left, upper, right, lower = draw.textbbox((0, 0), text, font=font)
    draw.text((center_x - (right - left) // 2, top), text, fill=fill, font=font)
    return lower - upper


def _draw_grid(
    draw: ImageDraw.ImageDraw,
    stats: StatisticsRecord,
    palette: Palette,
    box: Tuple[int, int, int, int],
) -> None:
    """Draw every week cell inside box (left, top, right, bottom)."""
    left, top, right, bottom = box
    rows = grid_row_count(stats)
    cell = max(1, min((right - left) // WEEKS_PER_YEAR, (bottom - top) // rows))
    gap = 1 if cell > 3 else 0

    grid_width = cell * WEEKS_PER_YEAR
    x_offset = left + ((right - left) - grid_width) // 2
    colors = {
        WeekState.PAST: palette.past,
        WeekState.CURRENT: palette.current,
        WeekState.FUTURE: palette.future,
    }

    for row, states in enumerate(iter_rows(stats)):
        if row >= rows:
            break
        y = top + row * cell
        for col, state in enumerate(states):
            x = x_offset + col * cell
            draw.rectangle(
                [x + gap, y + gap, x + cell - 1, y + cell - 1], fill=colors[state]
            )


def _draw_legend(
    draw: ImageDraw.ImageDraw,
    palette: Palette,
    center_x: int,
    top: int,
    font: Font,
    swatch: int,
) -> None:
    entries = [("Past", palette.past), ("Now", palette.current), ("Future", palette.future)]
    spacing = swatch * 8
    x = center_x - spacing * len(entries) // 2
    for label, color in entries:
        draw.rectangle([x, top, x + swatch, top + swatch], fill=color)
        draw.text((x + swatch + swatch // 2, top - swatch // 4), label, fill=palette.muted, font=font)
        x += spacing


def _draw_cards(
    draw: ImageDraw.ImageDraw,
    cards: List[Tuple[str, str]],
    palette: Palette,
    box: Tuple[int, int, int, int],
    value_font: Font,
    title_font: Font,
    columns: int = 4,
) -> None:
    left, top, right, bottom = box
    rows = -(-len(cards) // columns)
    pad = max(4, (right - left) // 100)
    card_w = (right - left - pad * (columns - 1)) // columns
    card_h = (bottom - top - pad * (rows - 1)) // rows

    for index, (title, value) in enumerate(cards):
        row, col = divmod(index, columns)
        x = left + col * (card_w + pad)
        y = top + row * (card_h + pad)
        draw.rounded_rectangle(
            [x, y, x + card_w, y + card_h],
            radius=pad,
            fill=palette.panel,
            outline=palette.border,
        )
        center_x = x + card_w // 2
        value_height = _draw_centered(
            draw, center_x, y + card_h // 4, value, value_font, palette.text
        )
        _draw_centered(
            draw,
            center_x,
            y + card_h // 4 + value_height + pad,
            title,
            title_font,
            palette.muted,
        )


def render_share_image(
    stats: StatisticsRecord, dark_mode: bool = False, compact: bool = False
) -> Image.Image:
    """Render the share card for a statistics record.

    Args:
        stats: Snapshot to render.
        dark_mode: Use the dark palette.
        compact: Narrow 800x1000 layout (grid above cards) instead of 1200x800.

    Returns:
        RGB image at RENDER_SCALE times the base layout size.
    """
    base_w, base_h = COMPACT_SIZE if compact else WIDE_SIZE
    width, height = base_w * RENDER_SCALE, base_h * RENDER_SCALE
    unit = RENDER_SCALE
    palette = get_palette(dark_mode)

    image = Image.new("RGB", (width, height), palette.background)
    draw = ImageDraw.Draw(image)

    title_font = _load_font((24 if compact else 28) * unit)
    subtitle_font = _load_font((12 if compact else 14) * unit)
    small_font = _load_font((8 if compact else 10) * unit)
    value_font = _load_font((11 if compact else 14) * unit)

    margin = (20 if compact else 30) * unit
    y = margin
    y += _draw_centered(draw, width // 2, y, "Life Visualizer", title_font, palette.text)
    y += 6 * unit
    y += _draw_centered(draw, width // 2, y, build_subtitle(stats), subtitle_font, palette.muted)
    y += 16 * unit

    footer_height = 30 * unit
    content_bottom = height - margin - footer_height
    legend_height = 20 * unit

    if compact:
        split = y + (content_bottom - y) * 11 // 20
        grid_box = (margin, y, width - margin, split - legend_height)
        legend_top = split - legend_height + 6 * unit
        cards_box = (margin, split + 10 * unit, width - margin, content_bottom)
    else:
        middle = width // 2
        grid_box = (margin, y, middle - margin // 2, content_bottom - legend_height)
        legend_top = content_bottom - legend_height + 6 * unit
        cards_box = (middle + margin // 2, y, width - margin, content_bottom)

    _draw_grid(draw, stats, palette, grid_box)
    _draw_legend(
        draw,
        palette,
        (grid_box[0] + grid_box[2]) // 2,
        legend_top,
        small_font,
        6 * unit,
    )
    _draw_cards(draw, build_stat_cards(stats), palette, cards_box, value_font, small_font)
    _draw_centered(
        draw, width // 2, height - margin - footer_height // 2, FOOTER_TEXT, small_font, palette.muted
    )

    return image


def share_image_bytes(
    stats: StatisticsRecord, dark_mode: bool = False, compact: bool = False
) -> bytes:
    """Render the share card and return it PNG-encoded."""
    with ExportLogContext(
        "render_share_image", dark_mode=dark_mode, compact=compact
    ):
        try:
            image = render_share_image(stats, dark_mode=dark_mode, compact=compact)
            buffer = io.BytesIO()
            image.save(buffer, "PNG")
        except (OSError, ValueError) as e:
            raise ImageExportFailure(f"Could not render share image: {e}") from e
    return buffer.getvalue()


def export_share_image(
    stats: StatisticsRecord,
    output_dir: Path,
    today: date,
    dark_mode: bool = False,
    compact: bool = False,
    filename: Optional[str] = None,
) -> Path:
    """
    Render the share card and save it as a PNG.

    Args:
        stats: Snapshot to render
        output_dir: Directory to write into (created if missing)
        today: Date stamped into the default filename
        dark_mode: Use the dark palette
        compact: Use the narrow layout
        filename: Override the default "my-life-in-weeks-YYYY-MM-DD.png"

    Returns:
        Path to the generated PNG image

    Raises:
        ImageExportFailure: If the image cannot be rendered or written
    """
    data = share_image_bytes(stats, dark_mode=dark_mode, compact=compact)

    output_path = Path(output_dir) / (filename or share_filename(today))
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        raise ImageExportFailure(f"Could not write {output_path}: {e}") from e

    logger.info(f"Generated life weeks share image: {output_path}")
    return output_path
