"""Tests for sync/wrapper.py: wrapper file create/merge."""

import pytest

from ai_specflow.errors import EncodingError
from ai_specflow.file_handler import read_file_with_encoding
from ai_specflow.sync.merger import MARKER_END, MARKER_START, ManagedBlock
from ai_specflow.sync.models import SyncOptions, WrapperAction
from ai_specflow.sync.wrapper import upsert_wrapper

BLOCK = ManagedBlock(start="<!--start-->", end="<!--end-->")


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "pkg" / "W.md"
    path.parent.mkdir()
    path.write_text("AGENT RULES", encoding="utf-8")
    return path


class TestUpsertWrapper:
    """Tests for upsert_wrapper()."""

    def test_missing_target_written_verbatim(self, tmp_path, template):
        target = tmp_path / "W.md"

        action = upsert_wrapper(template, target, SyncOptions(), BLOCK)

        assert action == WrapperAction.CREATED
        assert target.read_text() == "AGENT RULES"

    def test_scenario_b(self, tmp_path, template):
        target = tmp_path / "W.md"
        target.write_text("hello\n")

        action = upsert_wrapper(template, target, SyncOptions(), BLOCK)

        assert action == WrapperAction.MERGED
        assert target.read_text() == (
            "hello\n\n<!--start-->\nAGENT RULES\n<!--end-->\n"
        )

        template.write_text("AGENT RULES v2")
        upsert_wrapper(template, target, SyncOptions(), BLOCK)
        text = target.read_text()

        assert text == "hello\n\n<!--start-->\nAGENT RULES v2\n<!--end-->\n"
        assert text.count("<!--start-->") == 1
        assert text.startswith("hello\n")

    def test_force_irrelevant(self, tmp_path, template):
        plain = tmp_path / "plain.md"
        forced = tmp_path / "forced.md"
        plain.write_text("user\n")
        forced.write_text("user\n")

        upsert_wrapper(template, plain, SyncOptions(), BLOCK)
        upsert_wrapper(template, forced, SyncOptions(force=True), BLOCK)

        assert plain.read_bytes() == forced.read_bytes()

    def test_user_content_around_block_preserved(self, tmp_path, template):
        target = tmp_path / "W.md"
        target.write_text(
            "# Mine\n\n<!--start-->\nstale\n<!--end-->\n\n## Also mine\n"
        )

        upsert_wrapper(template, target, SyncOptions(), BLOCK)

        assert target.read_text() == (
            "# Mine\n\n<!--start-->\nAGENT RULES\n<!--end-->\n\n## Also mine\n"
        )

    def test_default_markers(self, tmp_path, template):
        target = tmp_path / "W.md"
        target.write_text("x\n")

        upsert_wrapper(template, target, SyncOptions())

        text = target.read_text()
        assert MARKER_START in text
        assert MARKER_END in text

    def test_dry_run_create(self, tmp_path, template):
        target = tmp_path / "W.md"

        action = upsert_wrapper(
            template, target, SyncOptions(dry_run=True), BLOCK
        )

        assert action == WrapperAction.CREATED
        assert not target.exists()

    def test_dry_run_merge(self, tmp_path, template):
        target = tmp_path / "W.md"
        target.write_text("hello\n")

        action = upsert_wrapper(
            template, target, SyncOptions(dry_run=True), BLOCK
        )

        assert action == WrapperAction.MERGED
        assert target.read_text() == "hello\n"

    def test_non_utf8_target_keeps_encoding(self, tmp_path, template):
        target = tmp_path / "W.md"
        original = "Überschrift für Entwickler, Regeln und Größe\n" * 4
        target.write_bytes(original.encode("cp1252"))

        upsert_wrapper(template, target, SyncOptions(), BLOCK)

        raw = target.read_bytes()
        assert raw.startswith(original.encode("cp1252"))
        assert raw.endswith(b"<!--start-->\nAGENT RULES\n<!--end-->\n")

    def test_undecodable_user_bytes_survive_merge(self, tmp_path, template):
        target = tmp_path / "W.md"
        original = b"user \xff\xfe\x00\x81\x8d\x8f\x90\x9d bytes\n"
        target.write_bytes(original)

        upsert_wrapper(template, target, SyncOptions(), BLOCK)

        assert target.read_bytes() == (
            original + b"\n<!--start-->\nAGENT RULES\n<!--end-->\n"
        )

    def test_undecodable_bytes_outside_replaced_block(
        self, tmp_path, template
    ):
        target = tmp_path / "W.md"
        head = b"\x81\x8d head \xff\n"
        tail = b"\n\x90 tail \xfe\n"
        target.write_bytes(head + b"<!--start-->\nold\n<!--end-->\n" + tail)

        upsert_wrapper(template, target, SyncOptions(), BLOCK)

        assert target.read_bytes() == (
            head + b"<!--start-->\nAGENT RULES\n<!--end-->\n" + tail
        )

    @pytest.mark.parametrize("dry_run", [False, True])
    def test_unencodable_template_fails_in_both_modes(
        self, tmp_path, dry_run
    ):
        template = tmp_path / "T.md"
        template.write_text("Règles → agent\n", encoding="utf-8")
        target = tmp_path / "W.md"
        original = "Café crème brûlée, déjà vu à la française.\n" * 6
        target.write_bytes(original.encode("cp1252"))
        _, encoding = read_file_with_encoding(target)
        try:
            "Règles → agent".encode(encoding)
        except UnicodeEncodeError:
            pass
        else:
            pytest.skip(f"detected {encoding} can hold the template")

        with pytest.raises(EncodingError, match="Cannot encode"):
            upsert_wrapper(
                template, target, SyncOptions(dry_run=dry_run), BLOCK
            )

        assert target.read_bytes() == original.encode("cp1252")

    def test_non_utf8_template_raises(self, tmp_path):
        template = tmp_path / "T.md"
        template.write_bytes("Règles\n".encode("latin-1"))

        with pytest.raises(EncodingError, match="not valid UTF-8"):
            upsert_wrapper(template, tmp_path / "W.md", SyncOptions())

        assert not (tmp_path / "W.md").exists()

    def test_missing_template_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            upsert_wrapper(
                tmp_path / "nope.md", tmp_path / "W.md", SyncOptions()
            )
