# tests/test_cli.py

import pytest
from click.testing import CliRunner

from shopsmart.cli import cli
from shopsmart.client import ProductApi


@pytest.fixture()
def run(client):
    api = ProductApi(client=client)
    runner = CliRunner()

    def _run(*args, input=None):
        return runner.invoke(cli, list(args), obj={"api": api}, input=input)

    return _run


def test_list_empty(run):
    result = run("list")
    assert result.exit_code == 0, result.output
    assert "No products yet." in result.output


def test_add_then_list(run):
    result = run("add", "--name", "Widget", "--price", "9.99", "--description", "Nice")
    assert result.exit_code == 0, result.output
    assert "#1  Widget  $9.99  - Nice" in result.output

    result = run("list")
    assert "Widget" in result.output


def test_show_missing_product_fails_with_generic_message(run):
    result = run("show", "42")
    assert result.exit_code == 1
    assert "Failed to load product" in result.output


def test_edit_changes_only_given_fields(run, make_product):
    created = make_product(name="Widget", price=5, description="Nice")

    result = run("edit", str(created["id"]), "--price", "7")
    assert result.exit_code == 0, result.output
    assert "Widget  $7.00  - Nice" in result.output


def test_edit_clear_description(run, client, make_product):
    created = make_product(description="Nice")

    result = run("edit", str(created["id"]), "--clear-description")
    assert result.exit_code == 0, result.output
    assert client.get(f"/api/products/{created['id']}").json()["description"] is None


def test_edit_without_changes_is_usage_error(run):
    result = run("edit", "1")
    assert result.exit_code == 2
    assert "Nothing to change" in result.output


def test_edit_missing_product_fails(run):
    result = run("edit", "99", "--name", "Ghost")
    assert result.exit_code == 1
    assert "Failed to save product" in result.output


def test_delete_asks_for_confirmation(run, client, make_product):
    created = make_product()

    result = run("delete", str(created["id"]), input="n\n")
    assert result.exit_code == 1
    assert client.get(f"/api/products/{created['id']}").status_code == 200

    result = run("delete", str(created["id"]), input="y\n")
    assert result.exit_code == 0, result.output
    assert "Product deleted successfully" in result.output
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_delete_missing_product_fails(run):
    result = run("delete", "99", "--yes")
    assert result.exit_code == 1
    assert "Failed to delete product" in result.output


def test_health(run):
    result = run("health")
    assert result.exit_code == 0
    assert "ok: ShopSmart Backend is running" in result.output
