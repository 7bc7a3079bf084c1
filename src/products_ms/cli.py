"""Command-line interface for running and poking the products microservice."""

import asyncio
import json

import typer
from rich.console import Console
from rich.panel import Panel

from src.products_ms.api.rpc.client import RedisRpcClient, RpcError
from src.products_ms.api.utils.app_startup import configure_logging
from src.products_ms.core.services import RedisService
from src.products_ms.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="products-ms",
    help="📦 Products microservice - serve the catalog over Redis RPC",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
def serve() -> None:
    """
    🚀 Start the products microservice.

    Connects to the database and Redis, subscribes to every product message
    pattern and serves until interrupted.
    """
    from src.products_ms.api.rpc.app import serve as serve_app

    configure_logging()
    config = get_config()
    console.print(
        Panel.fit(
            f"[bold green]Products microservice[/bold green] ({config.app.environment})",
            border_style="green",
        )
    )
    try:
        asyncio.run(serve_app(config))
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")


@app.command(name="init-db")
def init_db_command() -> None:
    """🗄️ Create the product table."""
    from src.products_ms.runtime.init_db import init_db

    configure_logging()
    init_db()
    console.print("[green]✅ Database tables created[/green]")


async def _call(cmd: str, data, timeout: float | None):
    redis_service = RedisService()
    try:
        client = RedisRpcClient(redis_service.get_client(), get_config().transport)
        return await client.send(cmd, data, timeout=timeout)
    finally:
        await redis_service.close()


@app.command()
def call(
    cmd: str = typer.Argument(..., help="Message pattern command, e.g. find_one_product"),
    payload: str = typer.Argument("{}", help="JSON payload"),
    timeout: float | None = typer.Option(None, help="Seconds to wait for the reply"),
) -> None:
    """📨 Send one request to a running service and print the reply."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON payload: {e}[/red]")
        raise typer.Exit(2) from e

    try:
        reply = asyncio.run(_call(cmd, data, timeout))
    except RpcError as e:
        console.print(f"[red]❌ {e.status}[/red] {e.message}")
        raise typer.Exit(1) from e

    console.print_json(json.dumps(reply))


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
