"""Tests for the FastAPI digest service."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from projdigest.service import create_app


def test_health_endpoint() -> None:
    client = TestClient(create_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_digest_endpoint_returns_text_and_selection(project) -> None:
    project.write(
        {
            "App.csproj": '<Project Sdk="Microsoft.NET.Sdk" />\n',
            "src/Program.cs": "public static class Program { public static void Main() { } }\n",
        }
    )
    client = TestClient(create_app())

    response = client.post("/digest", json={"path": str(project.path()), "tree": "none"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["discovered"] == 2
    assert payload["selected"] == ["App.csproj", "src/Program.cs"]
    assert "📁 Directory structure:" not in payload["text"]
    assert "public static void Main();" in payload["text"]


def test_digest_respects_max_files(project) -> None:
    project.write({"One.cs": "class One {}\n", "Two.cs": "class Two {}\n"})
    client = TestClient(create_app())

    response = client.post("/digest", json={"path": str(project.path()), "max_files": 1})

    assert response.status_code == 200
    assert response.json()["selected"] == ["One.cs"]


def test_missing_path_returns_404(tmp_path: Path) -> None:
    client = TestClient(create_app())

    response = client.post("/digest", json={"path": str(tmp_path / "absent")})

    assert response.status_code == 404
    assert "Project path not found" in response.json()["detail"]


def test_invalid_override_returns_400(project) -> None:
    client = TestClient(create_app())

    response = client.post(
        "/digest", json={"path": str(project.path()), "tree": "sideways"}
    )

    assert response.status_code == 400
