from __future__ import annotations

from typing import Any, Dict, Optional

import click

from shopsmart.client import ProductApi, ProductApiError
from shopsmart.core.config import get_settings
from shopsmart.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _format_price(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return str(value)


def _echo_product(product: Dict[str, Any]) -> None:
    line = f"#{product['id']}  {product['name']}  {_format_price(product['price'])}"
    if product.get("description"):
        line += f"  - {product['description']}"
    click.echo(line)


def _fail(message: str, exc: ProductApiError) -> None:
    # Detail stays in the debug log; the user gets the generic message.
    logger.debug("%s: %s (status=%s)", message, exc.message, exc.status_code)
    raise click.ClickException(message)


@click.group()
@click.option("--api-url", envvar="SHOPSMART_API_URL", default=None, help="Backend base URL.")
@click.option("--log-level", default="WARNING", show_default=True)
@click.pass_context
def cli(ctx: click.Context, api_url: Optional[str], log_level: str) -> None:
    """ShopSmart product catalog."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    if "api" not in ctx.obj:
        api = ProductApi(api_url or get_settings().api_url)
        ctx.obj["api"] = api
        ctx.call_on_close(api.close)


@cli.command()
@click.pass_obj
def health(obj: Dict[str, Any]) -> None:
    """Check that the backend is reachable."""
    try:
        data = obj["api"].health()
    except ProductApiError as e:
        _fail("Backend is not reachable", e)
    click.echo(f"{data['status']}: {data['message']}")


@cli.command("list")
@click.pass_obj
def list_products(obj: Dict[str, Any]) -> None:
    """List products, newest first."""
    try:
        products = obj["api"].get_all()
    except ProductApiError as e:
        _fail("Failed to load products", e)

    if not products:
        click.echo("No products yet.")
        return
    for product in products:
        _echo_product(product)


@cli.command()
@click.argument("product_id", type=int)
@click.pass_obj
def show(obj: Dict[str, Any], product_id: int) -> None:
    """Show one product."""
    try:
        product = obj["api"].get_by_id(product_id)
    except ProductApiError as e:
        _fail("Failed to load product", e)
    _echo_product(product)


@cli.command()
@click.option("--name", required=True)
@click.option("--price", required=True, type=click.FloatRange(min=0))
@click.option("--description", default=None)
@click.pass_obj
def add(obj: Dict[str, Any], name: str, price: float, description: Optional[str]) -> None:
    """Create a product."""
    payload: Dict[str, Any] = {"name": name, "price": price}
    if description is not None:
        payload["description"] = description
    try:
        product = obj["api"].create(payload)
    except ProductApiError as e:
        _fail("Failed to save product", e)
    click.echo("Created:")
    _echo_product(product)


@cli.command()
@click.argument("product_id", type=int)
@click.option("--name", default=None)
@click.option("--price", default=None, type=click.FloatRange(min=0))
@click.option("--description", default=None)
@click.option("--clear-description", is_flag=True, help="Set the description to null.")
@click.pass_obj
def edit(
    obj: Dict[str, Any],
    product_id: int,
    name: Optional[str],
    price: Optional[float],
    description: Optional[str],
    clear_description: bool,
) -> None:
    """Change only the given fields of a product."""
    if description is not None and clear_description:
        raise click.UsageError("--description and --clear-description are mutually exclusive")

    payload: Dict[str, Any] = {}
    if name is not None:
        payload["name"] = name
    if price is not None:
        payload["price"] = price
    if description is not None:
        payload["description"] = description
    if clear_description:
        payload["description"] = None
    if not payload:
        raise click.UsageError("Nothing to change")

    try:
        product = obj["api"].update(product_id, payload)
    except ProductApiError as e:
        _fail("Failed to save product", e)
    click.echo("Updated:")
    _echo_product(product)


@cli.command()
@click.argument("product_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(obj: Dict[str, Any], product_id: int, yes: bool) -> None:
    """Delete a product (asks first)."""
    if not yes:
        click.confirm(f"Are you sure you want to delete product #{product_id}?", abort=True)
    try:
        data = obj["api"].delete(product_id)
    except ProductApiError as e:
        _fail("Failed to delete product", e)
    click.echo(data["message"])


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=5000, show_default=True, type=int)
@click.option("--reload", is_flag=True)
def serve(host: str, port: int, reload: bool) -> None:
    """Run the REST backend with uvicorn."""
    import uvicorn

    uvicorn.run("shopsmart.main:create_app", factory=True, host=host, port=port, reload=reload)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
