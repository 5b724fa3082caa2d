"""CLI command for seeding mood reference data.

Usage:
    flask seed-moods                      # Insert the default mood vocabulary
    flask seed-moods -c hopeful -c bored  # Insert specific categories
"""

from __future__ import annotations

import click
from flask import Flask
from flask.cli import with_appcontext


@click.command("seed-moods")
@click.option("--category", "-c", "categories", multiple=True, help="Mood category to add (repeatable)")
@with_appcontext
def seed_moods_command(categories: tuple[str, ...]):
    """Insert missing mood categories; existing ones are left alone."""
    from moodjournal.domains.journal.services.mood_service import DEFAULT_MOODS, seed_moods

    created = seed_moods(categories or DEFAULT_MOODS)
    click.echo(f"Seeded {created} mood(s).")


def register_commands(app: Flask) -> None:
    app.cli.add_command(seed_moods_command)
