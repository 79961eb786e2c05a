"""Smoke tests for the CLI."""

import io
import json
from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from folio.cli import app
from folio.content.models import ContentDocument, ShopItem
from folio.content.store import ContentStore, storage_key


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for key in ("FOLIO_STORAGE_DIR", "FOLIO_AUTOSAVE_INTERVAL", "FOLIO_JPEG_QUALITY", "FOLIO_ENV"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("folio.config.CONFIG_SEARCH_PATHS", [tmp_path / "no-config"])
    monkeypatch.setenv("HOME", str(tmp_path))


class TestVersion:
    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "folio 0.1.0" in result.output


class TestResolve:
    def test_youtube(self, runner: CliRunner):
        result = runner.invoke(app, ["resolve", "https://youtu.be/dQw4w9WgXcQ"])
        assert result.exit_code == 0
        assert "youtube" in result.output
        assert "dQw4w9WgXcQ" in result.output

    def test_json(self, runner: CliRunner):
        raw = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
        result = runner.invoke(app, ["resolve", raw, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {
            "type": "spotify",
            "id": "https://open.spotify.com/embed/track/4uLU6hMCjMI75M1A2tKUQC",
            "rawUrl": raw,
        }

    def test_unknown_exits_nonzero(self, runner: CliRunner):
        result = runner.invoke(app, ["resolve", "garbage"])
        assert result.exit_code == 1
        assert "unknown" in result.output


class TestShow:
    def test_empty_store(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(app, ["show", "--store", str(tmp_path), "-a", "SP1"])
        assert result.exit_code == 0
        assert "No stored content" in result.output
        assert "placeholder" in result.output

    def test_stored_collection_is_live(self, runner: CliRunner, tmp_path: Path):
        ContentStore(tmp_path).save(
            storage_key("SP1"), ContentDocument(shop_items=[ShopItem(id=1, title="Tee")])
        )
        result = runner.invoke(app, ["show", "--store", str(tmp_path), "-a", "SP1"])
        assert result.exit_code == 0
        assert "live" in result.output
        assert "No stored content" not in result.output

    def test_development_prints_document(self, runner: CliRunner, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("FOLIO_ENV", "development")
        result = runner.invoke(app, ["show", "--store", str(tmp_path)])
        assert result.exit_code == 0
        assert "sectionVisibility" in result.output


class TestReset:
    def test_reset_deletes(self, runner: CliRunner, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.save(storage_key("SP1"), ContentDocument())

        result = runner.invoke(app, ["reset", "--store", str(tmp_path), "-a", "SP1", "--yes"])

        assert result.exit_code == 0
        assert not store.exists(storage_key("SP1"))

    def test_reset_aborts_without_confirmation(self, runner: CliRunner, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.save(storage_key("SP1"), ContentDocument())

        result = runner.invoke(app, ["reset", "--store", str(tmp_path), "-a", "SP1"], input="n\n")

        assert result.exit_code != 0
        assert store.exists(storage_key("SP1"))


class TestCrop:
    @pytest.fixture
    def image_path(self, tmp_path: Path) -> Path:
        path = tmp_path / "photo.png"
        buffer = io.BytesIO()
        Image.new("RGB", (200, 200), "green").save(buffer, format="PNG")
        path.write_bytes(buffer.getvalue())
        return path

    def test_prints_data_url(self, runner: CliRunner, image_path: Path):
        result = runner.invoke(
            app, ["crop", str(image_path), "--width", "50", "--height", "50", "--scale-x", "2"]
        )
        assert result.exit_code == 0
        assert result.output.startswith("data:image/jpeg;base64,")

    def test_writes_output_file(self, runner: CliRunner, image_path: Path, tmp_path: Path):
        output = tmp_path / "out.txt"
        result = runner.invoke(app, ["crop", str(image_path), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8").startswith("data:image/jpeg;base64,")

    def test_empty_crop_fails(self, runner: CliRunner, image_path: Path):
        result = runner.invoke(app, ["crop", str(image_path), "--x", "500", "--y", "500"])
        assert result.exit_code == 1
        assert "Crop failed" in result.output
