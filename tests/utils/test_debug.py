import pytest

from pychip8.utils import debug_enabled, debug_log, reload_categories
from pychip8.utils.debug import ENV_VAR


@pytest.fixture
def debug_env(monkeypatch):
    def configure(value: str) -> None:
        monkeypatch.setenv(ENV_VAR, value)
        reload_categories()

    yield configure
    monkeypatch.delenv(ENV_VAR, raising=False)
    reload_categories()


def test_categories_are_parsed_case_insensitively(debug_env) -> None:
    debug_env(" CPU , video,,")

    assert reload_categories() == {"cpu", "video"}
    assert debug_enabled("cpu")
    assert debug_enabled("Video")
    assert not debug_enabled("audio")


def test_all_enables_every_category(debug_env) -> None:
    debug_env("all")

    assert debug_enabled("anything")


def test_disabled_without_variable(debug_env, capsys) -> None:
    debug_env("")

    debug_log("cpu", "hidden")

    assert not debug_enabled("cpu")
    assert capsys.readouterr().out == ""


def test_debug_log_formats_arguments(debug_env, capsys) -> None:
    debug_env("cpu")

    debug_log("cpu", "pc=%04x", 0x200)
    debug_log("cpu", "bad %d", "x")

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[CHIP8][cpu] pc=0200"
    assert out[1].startswith("[CHIP8][cpu] bad %d")
