import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from config.settings import settings

app = typer.Typer(
    name="spectra",
    help="Spectra moderation bot",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@app.command()
def run(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    """Run the bot."""
    if log_level:
        settings.log_level = log_level.upper()

    setup_logging(settings.log_level)

    from spectra.core.bot import SpectraBot

    bot = SpectraBot()
    bot.run()


@app.command()
def plugins(
    action: str = typer.Argument(help="Action: list"),
) -> None:
    """Inspect available plugins."""
    if action != "list":
        typer.echo(f"Unknown action: {action}")
        raise typer.Exit(code=1)

    typer.echo("📦 Available Plugins:")
    for directory in settings.plugin_directories:
        plugin_dir = Path(directory)
        if not plugin_dir.exists():
            continue
        for plugin_path in sorted(plugin_dir.iterdir()):
            if plugin_path.is_dir() and (plugin_path / "__init__.py").exists():
                enabled = "✅" if plugin_path.name in settings.enabled_plugins else "❌"
                typer.echo(f"  {enabled} {plugin_path.name}")


@app.command()
def db(
    action: str = typer.Argument(help="Action: create, reset"),
) -> None:
    """Database management commands."""

    async def run_db_command() -> None:
        from spectra.database import db_manager

        try:
            if action == "create":
                await db_manager.create_tables()
                typer.echo("✅ Database tables created")
            elif action == "reset":
                confirm = typer.confirm("⚠️  This will delete all data. Continue?")
                if confirm:
                    await db_manager.drop_tables()
                    await db_manager.create_tables()
                    typer.echo("✅ Database reset completed")
            else:
                typer.echo(f"Unknown action: {action}")
        finally:
            await db_manager.close()

    asyncio.run(run_db_command())


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
