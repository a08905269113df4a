"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .feed import feed_command, trending_command
from .init import init_command

app = typer.Typer(
    name="fypfeed",
    help="For You feed ranking engine",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("feed")(feed_command)
app.command("trending")(trending_command)


if __name__ == "__main__":
    app()
