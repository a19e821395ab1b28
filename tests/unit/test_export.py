"""Unit tests for wallpaper export."""

from soulpaper.core.export import (
    EXPORT_DIR_PREFIX,
    discard_all_exports,
    discard_export,
    export_image,
    export_temporary,
)
from soulpaper.core.models import GeneratedImage


class TestExportImage:
    """Tests for export_image."""

    def test_writes_payload_bytes(self, temp_dir, png_payload, png_bytes):
        image = GeneratedImage(id="abc-123", payload=png_payload, prompt="p")
        path = export_image(image, temp_dir)
        assert path == temp_dir / "soulpaper-abc-123.png"
        assert path.read_bytes() == png_bytes

    def test_creates_missing_directory(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        target = temp_dir / "nested" / "exports"
        path = export_image(image, target)
        assert path.parent == target
        assert path.exists()

    def test_export_is_repeatable(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        first = export_image(image, temp_dir)
        second = export_image(image, temp_dir)
        assert first == second
        assert len(list(temp_dir.iterdir())) == 1

    def test_accepts_string_directory(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        path = export_image(image, str(temp_dir))
        assert path.name == f"soulpaper-{image.id}.png"


class TestTemporaryExports:
    """Tests for short-lived download files."""

    def test_export_temporary_uses_fresh_directory(self, temp_dir, png_payload, png_bytes):
        image = GeneratedImage.create(png_payload, "p")
        first = export_temporary(image, temp_dir)
        second = export_temporary(image, temp_dir)

        assert first.parent != second.parent
        assert first.parent.parent == temp_dir
        assert first.parent.name.startswith(EXPORT_DIR_PREFIX)
        assert first.name == f"soulpaper-{image.id}.png"
        assert first.read_bytes() == png_bytes

    def test_export_temporary_creates_parent(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        path = export_temporary(image, temp_dir / "missing" / "parent")
        assert path.exists()

    def test_export_temporary_defaults_to_system_temp(self, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        path = export_temporary(image)
        try:
            assert path.exists()
        finally:
            discard_export(path)
        assert not path.parent.exists()

    def test_discard_export_removes_file_and_directory(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        path = export_temporary(image, temp_dir)

        discard_export(path)

        assert not path.exists()
        assert not path.parent.exists()
        assert temp_dir.exists()

    def test_discard_export_twice_is_harmless(self, temp_dir, png_payload):
        image = GeneratedImage.create(png_payload, "p")
        path = export_temporary(image, temp_dir)
        discard_export(path)
        discard_export(str(path))
        assert not path.parent.exists()

    def test_discard_all_exports(self, temp_dir, png_payload):
        discard_all_exports()
        paths = [
            export_temporary(GeneratedImage.create(png_payload, "p"), temp_dir) for _ in range(3)
        ]

        assert discard_all_exports() == 3
        assert not any(path.exists() for path in paths)
        assert discard_all_exports() == 0
