import pytest

from declmeta import InputValidationError, MatchMode, load_settings
from declmeta.utils.config import ReflectionSettings


def test_packaged_defaults():
    assert load_settings() == ReflectionSettings(
        autoload=True,
        match_mode=MatchMode.INSTANCE_OF,
        max_ancestor_depth=None,
    )


def test_override_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("autoload: false\nmatch_mode: exact\nmax_ancestor_depth: 8\n")

    settings = load_settings(path)
    assert settings.autoload is False
    assert settings.match_mode is MatchMode.EXACT
    assert settings.max_ancestor_depth == 8


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_settings(path) == ReflectionSettings()


@pytest.mark.parametrize(
    "content",
    [
        "- not\n- a mapping\n",
        "autoload: sometimes\n",
        "match_mode: fuzzy\n",
        "max_ancestor_depth: 0\n",
        "max_ancestor_depth: true\n",
        "unknown_key: 1\n",
    ],
)
def test_invalid_settings(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(InputValidationError):
        load_settings(path)


def test_missing_file(tmp_path):
    with pytest.raises(InputValidationError):
        load_settings(tmp_path / "missing.yaml")
