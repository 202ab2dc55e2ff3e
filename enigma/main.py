import logging
import sys
from pathlib import Path
from typing import Optional

import tqdm
import typer

from enigma.config import parse_config, process_messages
from enigma.errors import EnigmaError

logger = logging.getLogger(__name__)

app = typer.Typer(help="Enigma simulator: encrypt and decrypt messages with a configurable rotor machine.")


def _read(path: Optional[Path]) -> str:
    """read a whole text file, or stdin when path is None"""
    name = "standard input" if path is None else path
    try:
        if path is None:
            return sys.stdin.read()
        return path.read_text(encoding="utf-8")
    except OSError:
        raise EnigmaError(f"could not open {name}") from None
    except UnicodeDecodeError:
        raise EnigmaError(f"could not read {name}, it is not UTF-8 text") from None


@app.command()
def run(
    config: Path = typer.Argument(..., help="Configuration file describing alphabet and rotors."),
    input_file: Optional[Path] = typer.Argument(None, help="File with settings and messages, default stdin."),
    output_file: Optional[Path] = typer.Argument(None, help="File for the converted messages, default stdout."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages."),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar over the input lines."),
):
    """Convert every message in INPUT_FILE with the machine described by CONFIG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        machine = parse_config(_read(config))
        lines = _read(input_file).splitlines()
        logger.debug("read %d input lines", len(lines))

        lines = tqdm.tqdm(lines, disable=not progress, unit="line", file=sys.stderr)
        output = "".join(f"{line}\n" for line in process_messages(machine, lines))
    except EnigmaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_file is None:
        typer.echo(output, nl=False)
    else:
        try:
            output_file.write_text(output, encoding="utf-8")
        except OSError:
            typer.echo(f"Error: could not open {output_file}", err=True)
            raise typer.Exit(code=1)


def main():
    app()


if __name__ == "__main__":
    main()
