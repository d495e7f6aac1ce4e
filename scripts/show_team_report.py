#!/usr/bin/env python3
"""Show every analytics metric for one team at one event."""

from __future__ import annotations

import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.config import DEFAULT_CONFIG_DIR
from domain.report import build_team_report, most_recent_event
from repositories.match_source import JsonFileMatchSource
from show_event_opr import DEFAULT_DATA_DIR, select_config

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Print the full metric report for one team.",
)


@app.command()
def show_team_report(
    team: Annotated[int, typer.Argument(help="FTC team number.")],
    season: Annotated[str, typer.Option("--season", help="Season year, e.g. 2024.")],
    event_code: Annotated[
        str | None,
        typer.Option(
            "--event-code",
            help="Event to report on. Defaults to the team's most recently played event on disk.",
        ),
    ] = None,
    data_dir: Annotated[
        Path,
        typer.Option("--data-dir", help="Directory holding {season}/{event_code}.json dumps."),
    ] = DEFAULT_DATA_DIR,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of analytics TOML profiles."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option("--config-name", help="Profile name or file name to use."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Print ratings, outcome metrics and trends for TEAM."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if team <= 0:
        raise typer.BadParameter("team must be a positive team number", param_hint="team")

    config = select_config(config_dir, config_name)
    source = JsonFileMatchSource(data_dir)

    if event_code is None:
        batches = {code: source.fetch_matches(code, season) for code in source.event_codes(season)}
        played = {
            code: [match for match in matches if any(slot.team_number == team for slot in match.teams)]
            for code, matches in batches.items()
        }
        event_code = most_recent_event(played)
        if event_code is None:
            typer.echo(f"No played events found for team={team} season={season} in {data_dir}.")
            raise typer.Exit(code=1)
        matches = batches[event_code]
    else:
        matches = source.fetch_matches(event_code, season)

    report = build_team_report(matches, team, params=config.parameters)

    typer.echo(f"team={team} event={event_code} season={season} config={config.name}")
    for field in fields(report):
        value = getattr(report, field.name)
        if isinstance(value, float):
            typer.echo(f"  {field.name:<18} {value:10.2f}")
        else:
            typer.echo(f"  {field.name:<18} {value:>10}")


if __name__ == "__main__":
    app()
