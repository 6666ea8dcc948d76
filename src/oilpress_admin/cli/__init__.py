"""Main CLI application module."""

import typer

from .commands import check_config, compress, export_visitors, init_db, price, serve

# Create the main CLI application
app = typer.Typer(
    help="🛢️  Oilpress Admin CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db)
app.command(name="check-config")(check_config)
app.command(name="price")(price)
app.command(name="compress")(compress)
app.command(name="export-visitors")(export_visitors)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
