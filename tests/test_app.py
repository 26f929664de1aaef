import os

import pytest

from goweb.app import GoWebApp, GoWebAppProvider, new_app


def test_version():
    assert GoWebApp().version() == "0.0.1"


def test_explicit_base_folder_wins(tmp_path):
    base = str(tmp_path)
    app = GoWebApp(base_folder=base, argv=["--base_folder", "/elsewhere"])
    assert app.base_folder() == base


def test_base_folder_from_command_line():
    app = GoWebApp(argv=["--base_folder", "/srv/app"])
    assert app.base_folder() == "/srv/app"


def test_base_folder_from_single_dash_option():
    app = GoWebApp(argv=["-base_folder=/srv/app", "--unrelated"])
    assert app.base_folder() == "/srv/app"


def test_base_folder_defaults_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert GoWebApp(argv=[]).base_folder() == os.getcwd() + "/"


def test_folder_layout(tmp_path):
    base = str(tmp_path)
    app = GoWebApp(base_folder=base)
    assert app.config_folder() == os.path.join(base, "config")
    assert app.storage_folder() == os.path.join(base, "storage")
    assert app.log_folder() == os.path.join(base, "storage", "log")
    assert app.runtime_folder() == os.path.join(base, "storage", "runtime")
    assert app.console_folder() == os.path.join(base, "console")
    assert app.command_folder() == os.path.join(base, "console", "command")
    assert app.provider_folder() == os.path.join(base, "provider")
    assert app.middleware_folder() == os.path.join(base, "gttp", "middleware")
    assert app.test_folder() == os.path.join(base, "test")


def test_trailing_slash_base_is_cleaned(tmp_path):
    base = str(tmp_path) + "/"
    app = GoWebApp(base_folder=base)
    assert app.config_folder() == os.path.join(str(tmp_path), "config")


def test_provider_params_and_build(tmp_path):
    container = object()
    provider = GoWebAppProvider(str(tmp_path))
    params = provider.params(container)
    assert params == [container, str(tmp_path)]
    app = provider.new_app(*params)
    assert app.container is container
    assert app.base_folder() == str(tmp_path)


def test_new_app_round_trip(tmp_path):
    container = object()
    app = new_app(container, str(tmp_path))
    assert app.container is container
    assert app.base_folder() == str(tmp_path)


@pytest.mark.parametrize("args", [(), (object(),), (object(), "/a", "/b")])
def test_new_app_wrong_arity(args):
    with pytest.raises(ValueError, match="param error"):
        new_app(*args)
    with pytest.raises(ValueError, match="param error"):
        GoWebAppProvider().new_app(*args)


def test_new_app_wrong_type():
    with pytest.raises(TypeError):
        new_app(object(), 42)