"""Operator commands: server, database, pricing, images and exports."""

from pathlib import Path

import typer
from rich.panel import Panel
from rich.table import Table

from src.oilpress_admin.core.pricing import PricingError, discount_percent, selling_price

from .utils import console, format_mb


def serve(
    host: str | None = typer.Option(None, help="Host to bind to (defaults to config)"),
    port: int | None = typer.Option(None, help="Port to bind to (defaults to config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Start the admin API server."""
    import uvicorn

    from src.oilpress_admin.runtime.config.config_template import validate_config_env_vars
    from src.oilpress_admin.runtime.context import get_config

    app_config = get_config().app
    if app_config.environment == "production":
        for name in validate_config_env_vars():
            console.print(f"[yellow]⚠️  {name} is not set[/yellow]")
    host = host or app_config.host
    port = port or app_config.port

    console.print(
        Panel.fit("[bold green]Starting Oilpress Admin API[/bold green]", border_style="green")
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    uvicorn.run(
        "src.oilpress_admin.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


def init_db() -> None:
    """🗄️  Create the document table in the configured database."""
    from src.oilpress_admin.core.services import DbSessionService

    service = DbSessionService()
    service.create_all()
    console.print("[green]✅ Database initialized[/green]")


def check_config() -> None:
    """🔍 List deployment variables that are still unset."""
    from src.oilpress_admin.runtime.config.config_template import (
        REQUIRED_FOR_DEPLOYMENT,
        validate_config_env_vars,
    )
    from src.oilpress_admin.runtime.context import get_config

    missing = validate_config_env_vars()
    table = Table(title=f"Deployment variables ({get_config().app.environment})")
    table.add_column("Variable", style="cyan")
    table.add_column("Purpose")
    table.add_column("Status")
    for name, description in REQUIRED_FOR_DEPLOYMENT.items():
        status = "[red]missing[/red]" if name in missing else "[green]set[/green]"
        table.add_row(name, description, status)
    console.print(table)

    if missing:
        console.print(f"[yellow]⚠️  {len(missing)} variable(s) not set[/yellow]")
        raise typer.Exit(1)
    console.print("[green]✅ All deployment variables are set[/green]")


def price(
    actual: float = typer.Argument(..., help="Actual price (MRP)"),
    discount: float = typer.Argument(..., help="Discount percent"),
) -> None:
    """💰 Show the selling price for a price and discount."""
    try:
        selling = selling_price(actual, discount)
    except PricingError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Pricing")
    table.add_column("Actual MRP", justify="right")
    table.add_column("Discount %", justify="right")
    table.add_column("Selling MRP", justify="right", style="green")
    table.add_column("Shown discount %", justify="right")
    table.add_row(
        f"{actual:g}", f"{discount:g}", f"{selling:g}", str(discount_percent(actual, selling))
    )
    console.print(table)


def compress(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image to compress"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the result"),
) -> None:
    """🗜️  Run the upload compression on a local image."""
    import mimetypes

    from src.oilpress_admin.core.services.media import MediaFile, compress_image

    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    original = MediaFile(filename=path.name, content_type=content_type, data=path.read_bytes())
    result = compress_image(original)

    if result is original:
        console.print(f"[yellow]Left unchanged ({format_mb(original.size)})[/yellow]")
        return

    target = output or path.with_name(result.filename)
    target.write_bytes(result.data)
    console.print(
        f"[green]✅ {format_mb(original.size)} → {format_mb(result.size)}[/green] written to {target}"
    )


def export_visitors(
    output: Path = typer.Option(..., "--output", "-o", help="File to write; .xlsx writes a workbook"),
) -> None:
    """📤 Export registered users joined with their orders as CSV or xlsx."""
    from src.oilpress_admin.core.exporting import join_visitors_with_orders, to_csv, to_xlsx
    from src.oilpress_admin.core.services import DbSessionService
    from src.oilpress_admin.entities import collections
    from src.oilpress_admin.entities.core._base import DocumentRepository, Entity

    service = DbSessionService()
    with service.session_scope() as session:
        rows = join_visitors_with_orders(
            DocumentRepository(session, collections.USERS, Entity).list_raw(),
            DocumentRepository(session, collections.ORDERS, Entity).list_raw(),
        )

    if not rows:
        console.print("[yellow]No data to export[/yellow]")
        raise typer.Exit(1)

    if output.suffix.lower() == ".xlsx":
        output.write_bytes(to_xlsx(rows, "UsersAndOrders"))
    else:
        output.write_text(to_csv(rows), encoding="utf-8")
    console.print(f"[green]✅ Exported {len(rows)} rows to {output}[/green]")
