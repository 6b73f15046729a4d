import socket

from fastapi.testclient import TestClient

from generate_openapi import generate_openapi


def test_read_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Recipe API is live"
    assert response.headers["x-host"] == f"server-{socket.gethostname()}"


def test_docs(client: TestClient):
    response = client.get("/docs")
    assert response.status_code == 200


def test_cors_headers(client: TestClient):
    headers = {"Origin": "http://example.com"}
    response = client.get("/", headers=headers)
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "x-host" in response.headers["access-control-expose-headers"]


def test_cors_preflight(client: TestClient):
    response = client.options(
        "/recipe",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "DELETE",
        },
    )
    assert response.status_code == 200
    assert "DELETE" in response.headers["access-control-allow-methods"]


def test_generate_openapi(tmp_path):
    output_file = tmp_path / "openapi.json"
    schema = generate_openapi(str(output_file))

    assert output_file.exists()
    assert "/recipe" in schema["paths"]
    assert "/recipe/{username}/{slug}" in schema["paths"]
    assert "/recipes/recent" in schema["paths"]
    assert "delete" in schema["paths"]["/recipe/{recipe_id}"]
