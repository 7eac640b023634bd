"""Command-line interface for the SSML speech console."""

import typer
from pydantic import ValidationError
from rich.console import Console

from .config import AppSettings
from .errors import EnumerationError, NoVoicesAvailable
from .session import SpeechSession
from .speech.engine import create_backend
from .telemetry.logger import SessionLogger, get_logger, setup_logging
from .voices.catalog import VoiceCatalog


app = typer.Typer(
    name="ssml-speak",
    help="Pick an installed voice, type text and hear it spoken.",
    add_completion=False,
)

console = Console(highlight=False, soft_wrap=True)


def read_line(prompt: str) -> str:
    return console.input(prompt, markup=False)


@app.command()
def run(
    enable_logging: bool = typer.Option(
        False, "--logging", "-logging", help="Append session activity to the daily log file"
    ),
) -> None:
    """Run the interactive speech session."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        console.print(f"Invalid settings: {e}", style="red", markup=False)
        raise typer.Exit(1)

    setup_logging(settings.LOG_LEVEL)
    session_logger = SessionLogger.from_settings(settings, console, enabled=enable_logging)
    session_logger.start()
    try:
        backend = create_backend(settings)
        catalog = VoiceCatalog.load(backend)
        if not catalog:
            raise NoVoicesAvailable()

        session = SpeechSession(catalog, backend, session_logger, read_line)
        session.run()

    except (EnumerationError, NoVoicesAvailable) as e:
        session_logger.write(f"Error: {e}", also_to_console=True, style="red")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        session_logger.write("Shutting down...", also_to_console=True, style="yellow")
        raise typer.Exit(0)
    except Exception as e:
        get_logger().debug("Startup failure", exc_info=True)
        session_logger.write(f"Error: {e}", also_to_console=True, style="red")
        raise typer.Exit(1)
    finally:
        session_logger.close()


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
