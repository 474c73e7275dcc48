# shelter_maps/cli.py
import click

from shelter_maps.lessons.service import seed_if_empty
from shelter_maps.volunteers.service import leaderboard


def register_cli(app):
    @app.cli.command("seed-lessons")
    def seed_lessons():
        """Insert the lesson catalog if it is empty."""
        count = seed_if_empty()
        if count:
            click.echo(f"OK: seeded {count} lessons")
        else:
            click.echo("OK: lesson catalog already seeded")

    @app.cli.command("leaderboard")
    @click.option("--limit", default=10, show_default=True, type=int)
    def show_leaderboard(limit):
        """Print the top volunteers by score."""
        rows = leaderboard(limit)
        if not rows:
            click.echo("No volunteers yet")
            return
        for row in rows:
            click.echo(
                f"{row.rank:>3}. {row.name:<24} {row.total_score:>6} pts "
                f"{row.completed_lessons} lessons {row.badges} badges"
            )
