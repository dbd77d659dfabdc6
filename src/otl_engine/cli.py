"""CLI interface for the OTL workout personalization engine."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from otl_engine.assembler import assemble_workout_for_player, workout_focus_areas
from otl_engine.catalog import ExerciseCatalog
from otl_engine.config import Config
from otl_engine.contracts import parse_catalog, parse_player_profile, parse_workout_day
from otl_engine.logging import configure_logging
from otl_engine.models import PlayerProfile, WorkoutDay
from otl_engine.modifiers import format_modifier_summary
from otl_engine.output import dumps, to_jsonable, write_json
from otl_engine.presets import PRESETS, SAMPLE_CATALOG, TEMPLATES
from otl_engine.selector import alternatives_for_slot


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _read_json(path: Path) -> dict:
    with path.open() as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            _fail(f"{path} is not valid JSON: {e}")


def _load_profile(profile_name: str | None, profile_file: Path | None) -> PlayerProfile:
    if profile_name and profile_file:
        _fail("Specify either --profile or --profile-file, not both.")
    if not profile_name and not profile_file:
        _fail("Specify --profile or --profile-file.")
    if profile_file:
        try:
            return parse_player_profile(_read_json(profile_file))
        except ValidationError as e:
            _fail(f"Invalid profile in {profile_file}:\n{e}")
    return PRESETS[profile_name]


def _load_template(template_name: str | None, template_file: Path | None) -> WorkoutDay:
    if template_name and template_file:
        _fail("Specify either --template or --template-file, not both.")
    if not template_name and not template_file:
        _fail("Specify --template or --template-file.")
    if template_file:
        try:
            return parse_workout_day(_read_json(template_file))
        except ValidationError as e:
            _fail(f"Invalid template in {template_file}:\n{e}")
    return TEMPLATES[template_name]


def _load_catalog(catalog_file: Path | None) -> ExerciseCatalog:
    if catalog_file is None:
        return SAMPLE_CATALOG
    try:
        return parse_catalog(_read_json(catalog_file))
    except ValidationError as e:
        _fail(f"Invalid catalog in {catalog_file}:\n{e}")


def profile_options(f):
    f = click.option(
        "--profile-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Load a player profile from JSON file.",
    )(f)
    f = click.option(
        "--profile", "profile_name",
        type=click.Choice(list(PRESETS.keys())),
        help="Use a preset player profile.",
    )(f)
    return f


catalog_option = click.option(
    "--catalog-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load the exercise catalog from JSON file (default: built-in sample catalog).",
)


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """OTL paintball workout personalization engine."""
    try:
        config = Config.from_env()
    except RuntimeError as e:
        _fail(str(e))
    configure_logging(config)
    ctx.obj = config


@main.command()
@profile_options
@click.option(
    "--template", "template_name",
    type=click.Choice(list(TEMPLATES.keys())),
    help="Use a built-in template day.",
)
@click.option(
    "--template-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load a template day from JSON file.",
)
@catalog_option
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), help="Assemble as of this date.")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the workout to JSON file.")
@click.pass_obj
def assemble(
    config: Config,
    profile_name: str | None,
    profile_file: Path | None,
    template_name: str | None,
    template_file: Path | None,
    catalog_file: Path | None,
    today: datetime | None,
    output: Path | None,
):
    """Personalize a template day for one player."""
    profile = _load_profile(profile_name, profile_file)
    day = _load_template(template_name, template_file)
    catalog = _load_catalog(catalog_file)

    workout = assemble_workout_for_player(
        day,
        profile,
        catalog,
        today=today.date() if today else None,
        limits=config.session_limits,
    )

    payload = to_jsonable(workout)
    payload["focusAreas"] = workout_focus_areas(profile)
    payload["modifierSummary"] = format_modifier_summary(workout.modifiers)

    if output:
        write_json(payload, output)
        click.echo(
            f"Wrote {workout.day.name} ({workout.training_info.estimated_minutes} min) to {output}"
        )
    else:
        click.echo(dumps(payload))


@main.command()
@click.argument("slot")
@profile_options
@catalog_option
@click.option("--current", "current_id", type=str, help="Exercise id currently in the slot.")
@click.option("--limit", type=int, default=3, show_default=True, help="Number of alternatives.")
def alternatives(
    slot: str,
    profile_name: str | None,
    profile_file: Path | None,
    catalog_file: Path | None,
    current_id: str | None,
    limit: int,
):
    """List substitute exercises for a category slot."""
    profile = _load_profile(profile_name, profile_file)
    catalog = _load_catalog(catalog_file)

    recommendations = alternatives_for_slot(slot, profile, catalog, current_id, limit)
    if not recommendations:
        click.echo(f"No alternatives for {slot}.")
        return
    for rec in recommendations:
        click.echo(f"{rec.exercise_id} ({rec.exercise.name}): {rec.score:g}")
        for reason in rec.reasons:
            click.echo(f"  - {reason}")


@main.command("list-presets")
def list_presets():
    """List available preset profiles and template days."""
    click.echo("Profiles:")
    for name, profile in PRESETS.items():
        click.echo(f"  {name}:")
        click.echo(f"    Position: {profile.primary_position.value}")
        click.echo(f"    Side bias: {profile.field_side_bias.value}")
        click.echo(f"    Phase: {profile.current_phase.value}")
        click.echo(f"    Experience: {profile.years_experience:g} years")
    click.echo()
    click.echo("Templates:")
    for name, day in TEMPLATES.items():
        count = sum(len(section.exercises) for section in day.sections)
        click.echo(f"  {name}: {day.name} ({len(day.sections)} sections, {count} exercises)")
