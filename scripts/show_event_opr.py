#!/usr/bin/env python3
"""Show teams at one event ranked by power rating."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.categories import Category, resolve_category
from domain.common import MatchRecord
from domain.config import AnalyticsConfig, DEFAULT_CONFIG_DIR, load_analytics_configs
from domain.ratings.power_rating import (
    EventRatings,
    PowerRatingMap,
    calculate_category_opr,
    calculate_event_ratings,
)
from repositories.match_source import JsonFileMatchSource

DEFAULT_DATA_DIR = ROOT_DIR / "data" / "matches"
CCWM_KEY = "ccwm"
RANK_KEYS = (*(category.value for category in Category), CCWM_KEY)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Rank the teams of one event by least-squares power rating.",
)


def select_config(config_dir: Path, config_name: str | None) -> AnalyticsConfig:
    """Pick one analytics profile from a config directory (first by file name by default)."""
    configs = load_analytics_configs(config_dir)
    if config_name is None:
        return configs[0]
    for config in configs:
        if config.name == config_name or config.file_path.name == config_name:
            return config
    raise typer.BadParameter(
        f"No config named '{config_name}' found in {config_dir}",
        param_hint="--config-name",
    )


def rank_values(
    matches: Sequence[MatchRecord],
    ratings: EventRatings,
    rank_by: str,
    ridge: float,
) -> PowerRatingMap | dict[int, float]:
    """Per-team values to rank by: any scoring category's OPR, or CCWM."""
    if rank_by == CCWM_KEY:
        return {team: ratings.ccwm(team) for team in ratings.overall}
    return calculate_category_opr(matches, resolve_category(rank_by), ridge=ridge)


@app.command()
def show_event_opr(
    event_code: Annotated[str, typer.Argument(help="FTC event code, e.g. USCASDQ1.")],
    season: Annotated[str, typer.Option("--season", help="Season year, e.g. 2024.")],
    data_dir: Annotated[
        Path,
        typer.Option("--data-dir", help="Directory holding {season}/{event_code}.json dumps."),
    ] = DEFAULT_DATA_DIR,
    top_n: Annotated[int, typer.Option("--top-n", help="Number of teams to print.")] = 20,
    rank_by: Annotated[
        str,
        typer.Option(
            "--rank-by",
            help=f"Scoring category OPR or ccwm to rank by ({', '.join(RANK_KEYS)}).",
        ),
    ] = Category.OVERALL.value,
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
    """Print the event's teams with Overall/Auto/Teleop OPR, DPR and CCWM."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")
    rank_by = rank_by.lower()
    if rank_by not in RANK_KEYS:
        raise typer.BadParameter(
            f"Unsupported rank key '{rank_by}'. Choose one of: {', '.join(RANK_KEYS)}.",
            param_hint="--rank-by",
        )

    config = select_config(config_dir, config_name)
    matches = JsonFileMatchSource(data_dir).fetch_matches(event_code, season)
    ratings = calculate_event_ratings(matches, ridge=config.parameters.ridge)

    if not ratings.overall:
        typer.echo(f"No alliance data found for event={event_code} season={season}.")
        return

    values = rank_values(matches, ratings, rank_by, config.parameters.ridge)
    ranked = sorted(
        ratings.overall.teams,
        key=lambda team: values.get(team, 0.0),
        # Lower DPR is better defensively.
        reverse=rank_by != Category.DPR.value,
    )[:top_n]

    typer.echo(
        f"event={event_code} season={season} config={config.name} "
        f"matches={len(matches)} teams={len(ratings.overall)} rank_by={rank_by}"
    )
    for index, team in enumerate(ranked, start=1):
        typer.echo(
            f"{index:2d}. team={team:<6d} "
            f"{rank_by}={values.get(team, 0.0):7.2f} "
            f"opr={ratings.overall.get(team, 0.0):7.2f} "
            f"auto={ratings.auto.get(team, 0.0):7.2f} "
            f"teleop={ratings.teleop.get(team, 0.0):7.2f} "
            f"dpr={ratings.dpr.get(team, 0.0):7.2f} "
            f"ccwm={ratings.ccwm(team):7.2f}"
        )


if __name__ == "__main__":
    app()
