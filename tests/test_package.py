"""Tests for Gerber package generation."""

import os
import zipfile

import pytest

from clover_fab.exceptions import ArchiveError, GenerationError
from clover_fab.export import (
    LAYER_PLAN,
    GerberPackager,
    encode_design,
    generate_drill_file,
    generate_gerber_package,
)
from clover_fab.export import package as package_module
from clover_fab.schema import Design

EXPECTED_SUFFIXES = [
    "-Edge_Cuts.gbr",
    "-F_Cu.gbr",
    "-B_Cu.gbr",
    "-F_SilkS.gbr",
    "-F_Mask.gbr",
    "-B_Mask.gbr",
    ".drl",
]


class TestEncodeDesign:
    """Test the in-memory manifest."""

    def test_layer_plan_order(self):
        assert [job.suffix for job in LAYER_PLAN] == EXPECTED_SUFFIXES

    def test_names_use_sanitized_stem(self, sample_design):
        names = [f.name for f in encode_design(sample_design)]
        assert names == [f"LED-Blinker{suffix}" for suffix in EXPECTED_SUFFIXES]

    def test_whitespace_runs_collapse(self):
        files = encode_design(Design(name="My   tiny\tboard"))
        assert files[0].name == "My-tiny-board-Edge_Cuts.gbr"

    def test_contents_are_utf8_text(self, sample_design):
        files = encode_design(sample_design)
        assert files[-1].data == generate_drill_file(sample_design).encode("utf-8")
        assert all(f.data.decode("utf-8").endswith(("M02*", "M30")) for f in files)


class TestGerberPackager:
    """Test writing layer files and the archive."""

    def test_generate(self, tmp_path, sample_design):
        result = GerberPackager(tmp_path).generate(sample_design)

        assert result.archive_path == tmp_path / "LED-Blinker.zip"
        assert result.archive_path.is_file()
        assert result.layer_dir == tmp_path / "LED-Blinker"
        assert sorted(p.name for p in result.layer_dir.iterdir()) == sorted(result.files)
        assert result.archive_size == result.archive_path.stat().st_size

    def test_archive_matches_layer_files(self, tmp_path, sample_design):
        result = GerberPackager(tmp_path).generate(sample_design)

        with zipfile.ZipFile(result.archive_path) as zf:
            assert zf.namelist() == result.files
            for name in result.files:
                assert zf.read(name) == (result.layer_dir / name).read_bytes()

    def test_no_staging_left_behind(self, tmp_path, sample_design):
        GerberPackager(tmp_path).generate(sample_design)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["LED-Blinker", "LED-Blinker.zip"]

    def test_regenerate_replaces_output(self, tmp_path, sample_design):
        (tmp_path / "LED-Blinker").mkdir()
        (tmp_path / "LED-Blinker" / "stale.gbr").write_text("old")

        result = GerberPackager(tmp_path).generate(sample_design)
        assert not (result.layer_dir / "stale.gbr").exists()

    def test_archive_only(self, tmp_path, sample_design):
        result = GerberPackager(tmp_path, keep_layer_files=False).generate(sample_design)

        assert result.layer_dir is None
        assert [p.name for p in tmp_path.iterdir()] == ["LED-Blinker.zip"]

    def test_threaded_same_archive(self, tmp_path, sample_design):
        serial = GerberPackager(tmp_path / "a").generate(sample_design)
        threaded = GerberPackager(tmp_path / "b", workers=4).generate(sample_design)
        assert serial.archive_path.read_bytes() == threaded.archive_path.read_bytes()

    def test_archive_failure_leaves_nothing(self, tmp_path, sample_design, monkeypatch):
        def fail(*args, **kwargs):
            raise ArchiveError("Duplicate archive entry")

        monkeypatch.setattr(package_module, "build_zip", fail)

        with pytest.raises(ArchiveError) as exc_info:
            GerberPackager(tmp_path).generate(sample_design)

        assert exc_info.value.operation == "jlcpcb:generateGerberPackage"
        assert list(tmp_path.iterdir()) == []

    def test_unexpected_archive_failure_wrapped(self, tmp_path, sample_design, monkeypatch):
        def fail(*args, **kwargs):
            raise MemoryError("out of memory")

        monkeypatch.setattr(package_module, "build_zip", fail)

        with pytest.raises(ArchiveError, match="Failed to build archive"):
            GerberPackager(tmp_path).generate(sample_design)
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_output_root(self, tmp_path, sample_design):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(GenerationError, match="Cannot create output directory"):
            GerberPackager(blocker / "out").generate(sample_design)

    @pytest.mark.parametrize("name", [".", ".."])
    def test_dot_names_raise_generation_error(self, tmp_path, name):
        with pytest.raises(GenerationError, match="Cannot create layer directory") as exc_info:
            GerberPackager(tmp_path).generate(Design(name=name))

        assert exc_info.value.operation == "jlcpcb:generateGerberPackage"
        assert list(tmp_path.iterdir()) == []

    def test_failed_publish_keeps_previous_package(self, tmp_path, sample_design, monkeypatch):
        first = GerberPackager(tmp_path).generate(sample_design)
        (first.layer_dir / "notes.txt").write_text("previous run")
        previous_archive = first.archive_path.read_bytes()

        real_replace = os.replace

        def replace(src, dst):
            if str(dst).endswith(".zip"):
                raise OSError("No space left on device")
            real_replace(src, dst)

        monkeypatch.setattr(package_module.os, "replace", replace)

        with pytest.raises(ArchiveError, match="Failed to publish package"):
            GerberPackager(tmp_path).generate(sample_design)

        assert (first.layer_dir / "notes.txt").read_text() == "previous run"
        assert first.archive_path.read_bytes() == previous_archive
        assert sorted(p.name for p in tmp_path.iterdir()) == ["LED-Blinker", "LED-Blinker.zip"]

    def test_to_dict(self, tmp_path, simple_design):
        data = GerberPackager(tmp_path).generate(simple_design).to_dict()
        assert data["archive_path"].endswith("Simple.zip")
        assert len(data["files"]) == 7


class TestGenerateGerberPackage:
    """Test the convenience function."""

    def test_returns_archive_path(self, tmp_path, simple_design):
        path = generate_gerber_package(simple_design, tmp_path)
        assert path == tmp_path / "Simple.zip"
        assert zipfile.is_zipfile(path)

    def test_default_output_root(self, tmp_path, simple_design, monkeypatch):
        monkeypatch.setattr(package_module.tempfile, "gettempdir", lambda: str(tmp_path))
        path = generate_gerber_package(simple_design)
        assert path == tmp_path / "clover-gerber" / "Simple.zip"
