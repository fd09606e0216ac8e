#!/usr/bin/env python3
"""
Life Weeks command line.

Prints the statistics record, draws the week grid in the terminal,
exports the share image and serves the HTTP API.
"""

from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from .core.config import get_export_dir, get_settings
from .domain.errors import DomainError
from .services.life_facts import first_fact, get_facts
from .services.life_stats import StatisticsRecord, compute_statistics, parse_birthdate
from .services.life_weeks_image import export_share_image
from .services.week_grid import WeekState, describe, iter_rows
from .utils.formatting import format_fixed, format_number

app = typer.Typer(help="Your life in weeks")
console = Console()

CELL_STYLES = {
    WeekState.PAST: "[blue]■[/blue]",
    WeekState.CURRENT: "[bold yellow]■[/bold yellow]",
    WeekState.FUTURE: "[dim]□[/dim]",
}

NOW_OPTION = typer.Option(None, "--now", help="Reference moment (ISO), defaults to now")


def _compute(birthdate: str, now: Optional[str]) -> StatisticsRecord:
    try:
        return compute_statistics(birthdate, now or datetime.now())
    except DomainError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)


def stat_sections(stats: StatisticsRecord) -> List[Tuple[str, List[Tuple[str, str]]]]:
    """Grouped (label, value) rows, as shown on the stat cards."""
    n = format_number
    return [
        (
            "Time Perspective",
            [
                ("Weeks lived", f"{n(stats.weeks_lived)} / {n(stats.total_weeks)}"),
                ("Days lived", n(stats.days_lived)),
                ("Hours lived", n(stats.hours_lived)),
                ("Minutes lived", n(stats.minutes_lived)),
                ("Seconds lived", n(stats.seconds_lived)),
                ("Weeks remaining", n(stats.weeks_remaining)),
            ],
        ),
        (
            "Biological Experience",
            [
                ("Heartbeats", n(stats.heartbeats)),
                ("Breaths taken", n(stats.breaths)),
                ("Hours slept", f"{n(stats.hours_slept)} ({stats.sleep_years} years)"),
                ("Blinks", n(stats.blinks)),
            ],
        ),
        (
            "Earth's Rhythm",
            [
                ("Trips around the sun", format_fixed(stats.earth_orbits, 2)),
                ("Seasons experienced", str(stats.seasons_experienced)),
                ("Full moons witnessed", str(stats.full_moons_witnessed)),
                ("Distance traveled (Earth orbit)", f"{n(stats.earth_travel_distance_km)} km"),
                ("Solar system movement", f"{n(stats.solar_system_travel_km)} km"),
            ],
        ),
        (
            "Social & Cultural Experience",
            [
                ("Words spoken", n(stats.words_spoken)),
                ("Steps taken", n(stats.steps_taken)),
                ("Meals enjoyed", n(stats.meals_eaten)),
                ("Times smiled", n(stats.times_smiled)),
                ("Movies watched", n(stats.movies_watched)),
                ("Songs heard", n(stats.songs_heard)),
            ],
        ),
        (
            "Learning & Growth",
            [
                ("Books you could have read", n(stats.books_could_read)),
                ("Skill development hours", n(stats.skill_hours_available)),
                ("Languages you could master", str(stats.languages_could_learn)),
                ("University degrees equivalent", str(stats.degrees_equivalent)),
            ],
        ),
        (
            "Digital Life",
            [
                ("Internet hours", n(stats.internet_hours)),
                ("Phone checks", n(stats.phone_checks)),
                ("Emails sent", n(stats.emails_sent)),
                ("Photos you could take", n(stats.photos_could_take)),
            ],
        ),
        (
            "Health & Wellness",
            [
                ("Water consumed", f"{n(stats.water_consumed_liters)} liters"),
                ("Calories consumed", n(stats.calories_consumed)),
                ("Hair grown", f"{n(stats.hair_growth_mm)} mm"),
                ("Fingernail growth", f"{n(stats.fingernail_growth_mm)} mm"),
            ],
        ),
        (
            "Memories & Experiences",
            [
                ("Memories formed", n(stats.memories_formed)),
                ("Dreams had", n(stats.dreams_had)),
                ("Times laughed", n(stats.times_laughed)),
                ("Conversations had", n(stats.conversations_had)),
            ],
        ),
    ]


@app.command()
def stats(
    birthdate: str = typer.Argument(..., help="Birth date, YYYY-MM-DD"),
    now: Optional[str] = NOW_OPTION,
):
    """Print every statistic derived from a birthdate."""
    record = _compute(birthdate, now)

    console.print(
        f"\n[bold]{format_fixed(record.age_years, 1)} years old[/bold] • "
        f"{record.percentage_lived}% of a {record.max_age_years}-year lifespan lived"
    )
    for title, rows in stat_sections(record):
        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Statistic")
        table.add_column("Value", justify="right")
        for label, value in rows:
            table.add_row(label, value)
        console.print(table)

    console.print(f"\n💡 {first_fact(get_facts(record))}")


@app.command()
def grid(
    birthdate: str = typer.Argument(..., help="Birth date, YYYY-MM-DD"),
    now: Optional[str] = NOW_OPTION,
):
    """Draw the week grid, one row per year."""
    record = _compute(birthdate, now)

    for year, states in enumerate(iter_rows(record)):
        cells = "".join(CELL_STYLES[state] for state in states)
        console.print(f"{year:>3} {cells}", highlight=False)

    console.print(
        f"\n{CELL_STYLES[WeekState.PAST]} Past  "
        f"{CELL_STYLES[WeekState.CURRENT]} Present  "
        f"{CELL_STYLES[WeekState.FUTURE]} Future"
    )


@app.command()
def week(
    birthdate: str = typer.Argument(..., help="Birth date, YYYY-MM-DD"),
    index: int = typer.Argument(..., help="Zero-based week index"),
    now: Optional[str] = NOW_OPTION,
):
    """Describe a single week of the grid."""
    record = _compute(birthdate, now)
    try:
        description = describe(index, record)
    except DomainError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"Week {index + 1} ({description.state.value}): {description.label}")


@app.command()
def export(
    birthdate: str = typer.Argument(..., help="Birth date, YYYY-MM-DD"),
    dark: bool = typer.Option(False, "--dark", help="Use the dark theme"),
    compact: bool = typer.Option(False, "--compact", help="Narrow 800x1000 layout"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Where to write the PNG"),
    now: Optional[str] = NOW_OPTION,
):
    """Export the share image as a PNG."""
    record = _compute(birthdate, now)
    today = date.today() if now is None else parse_birthdate(now, name="now").date()

    try:
        path = export_share_image(
            record,
            output_dir or get_export_dir(),
            today,
            dark_mode=dark,
            compact=compact,
        )
    except DomainError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"✅ Saved {path}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
):
    """Serve the HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "life_weeks.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
