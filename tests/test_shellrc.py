from devsetup.env import resolve_runner_config
from devsetup.shellrc import ALIAS_BLOCK, ALIAS_MARKER, ensure_block
from devsetup.steps.shell import configure_aliases


def test_block_appended_once(tmp_path):
    bashrc = tmp_path / ".bashrc"
    bashrc.write_text("export EDITOR=vim\n")

    assert ensure_block(bashrc, ALIAS_MARKER, ALIAS_BLOCK) is True
    assert ensure_block(bashrc, ALIAS_MARKER, ALIAS_BLOCK) is False

    text = bashrc.read_text()
    assert text.count("alias ll='ls -al'") == 1
    assert text.startswith("export EDITOR=vim\n")
    assert text.endswith("\n# Custom aliases\nalias ll='ls -al'\n")


def test_missing_file_is_created(tmp_path):
    bashrc = tmp_path / "sub" / ".bashrc"

    assert ensure_block(bashrc, ALIAS_MARKER, ALIAS_BLOCK) is True
    assert "alias ll='ls -al'" in bashrc.read_text()


def test_existing_alias_is_left_alone(tmp_path):
    bashrc = tmp_path / ".bashrc"
    bashrc.write_text("alias ll='ls -lh'\n")

    assert ensure_block(bashrc, ALIAS_MARKER, ALIAS_BLOCK) is False
    assert bashrc.read_text() == "alias ll='ls -lh'\n"


def test_configure_aliases_step_is_idempotent(tmp_path):
    cfg = resolve_runner_config({"HOME": str(tmp_path)}, uid=1000)

    first = configure_aliases(cfg)
    second = configure_aliases(cfg)

    assert first.ok and "Added" in first.detail
    assert second.ok and "already exists" in second.detail
    assert cfg.bashrc.read_text().count("alias ll=") == 1
