# tests/core_test/test_config_loader.py
"""
Tests for YAML session profiles (src/dotstream/core/config_loader.py).
"""
import pytest

from dotstream.core.config_loader import DEFAULT_SESSION_PROFILE, ProfileLoader
from dotstream.core.enums import SessionPhase
from dotstream.core.exceptions import ProfileError
from dotstream.core.session import DotSession


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(
        "# layout settings\n"
        "session:\n"
        "  program: neato  # spring layout\n"
        "  strict: false\n",
        encoding="utf-8",
    )
    return path


class TestProfileLoader:

    def test_merges_over_defaults(self, profile_file):
        kwargs = ProfileLoader(profile_file).session_kwargs()

        assert kwargs["program"] == "neato"
        assert kwargs["strict"] is False
        assert kwargs["output_format"] == "svg"
        assert kwargs["graph_kind"] == "digraph"
        assert kwargs["close_timeout"] is None

    def test_defaults_not_mutated(self, profile_file):
        ProfileLoader(profile_file)
        assert DEFAULT_SESSION_PROFILE["session"]["program"] == "dot"
        assert DEFAULT_SESSION_PROFILE["session"]["strict"] is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert ProfileLoader(path).session_kwargs() == DEFAULT_SESSION_PROFILE["session"]

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "extra.yaml"
        path.write_text("session:\n  colour: red\n", encoding="utf-8")
        assert "colour" not in ProfileLoader(path).session_kwargs()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileError, match="not found"):
            ProfileLoader(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("session: [unclosed\n", encoding="utf-8")
        with pytest.raises(ProfileError, match="invalid YAML"):
            ProfileLoader(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ProfileError, match="mapping"):
            ProfileLoader(path)


class TestUpdateProfile:

    def test_update_keeps_comments(self, profile_file):
        ProfileLoader.update_profile(profile_file, {"session.output_format": "png"})

        text = profile_file.read_text(encoding="utf-8")
        assert "# layout settings" in text
        assert "# spring layout" in text
        assert ProfileLoader(profile_file).session_kwargs()["output_format"] == "png"

    def test_creates_missing_file_from_defaults(self, tmp_path):
        path = tmp_path / "new.yaml"
        ProfileLoader.update_profile(path, {"session.program": "fdp"})

        kwargs = ProfileLoader(path).session_kwargs()
        assert kwargs["program"] == "fdp"
        assert kwargs["strict"] is True


class TestSessionFromProfile:

    def test_from_profile_with_overrides(self, fake_renderer, profile_file, tmp_path):
        session = DotSession.from_profile(profile_file, output_format="dot", filename="p.dot")
        session.set_link("a", "b")
        session.close()

        assert session.phase is SessionPhase.CLOSED
        assert fake_renderer.argv() == ["neato", "-Tdot", "-op.dot"]
        assert (tmp_path / "p.dot").read_text(encoding="utf-8") == "digraph{\na -> b\n}\n"
