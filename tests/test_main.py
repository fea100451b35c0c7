"""Tests for application wiring: liveness route and error rendering."""

import inspect

import pytest
from anganwadi.api import dependencies
from anganwadi.core.errors import NotFoundError, UpstreamError, app_error_handler
from anganwadi.main import app
from starlette.requests import Request


def make_request():
    return Request({"type": "http", "method": "GET", "path": "/x", "headers": []})


def test_root_is_plain_text(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Modern Anganwadi Backend Running"


def test_routes_are_registered():
    assert app.url_path_for("root") == "/"
    assert app.url_path_for("admin_login") == "/admin-login"
    assert app.url_path_for("list_programs") == "/programs"
    assert app.url_path_for("add_program") == "/add-program"
    assert app.url_path_for("update_program", program_id="abc") == "/update-program/abc"
    assert app.url_path_for("delete_program", program_id="abc") == "/delete-program/abc"
    assert app.url_path_for("dashboard_stats") == "/dashboard-stats"


@pytest.mark.parametrize(
    "provider",
    [
        name
        for name, member in inspect.getmembers(dependencies, inspect.isfunction)
        if member.__module__ == dependencies.__name__
    ],
)
def test_dependency_providers_are_documented(provider):
    assert inspect.getdoc(getattr(dependencies, provider))


async def test_client_errors_keep_their_message():
    response = await app_error_handler(make_request(), NotFoundError("Program not found"))

    assert response.status_code == 404
    assert response.body == b'{"error":"Program not found"}'


async def test_server_errors_hide_their_message():
    response = await app_error_handler(
        make_request(), UpstreamError("cloudinary said: invalid signature abc123")
    )

    assert response.status_code == 500
    assert b"abc123" not in response.body
    assert response.body == b'{"error":"Something went wrong"}'
