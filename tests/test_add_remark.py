import json
import types

import add_remark
import launcher
from launcher import Config


def _prompt(value):
    return types.SimpleNamespace(execute=lambda: value)


def test_set_remark_adds_replaces_and_clears():
    config = Config(project_dir="/work")

    add_remark.set_remark(config, "A", " admin ")
    assert config.remarks == {"A": "admin"}
    add_remark.set_remark(config, "A", "api")
    assert config.remarks == {"A": "api"}
    add_remark.set_remark(config, "A", "")
    assert config.remarks == {}


def test_pin_folder_is_idempotent():
    config = Config(project_dir="/work", pinned=["B"])

    add_remark.pin_folder(config, "A")
    add_remark.pin_folder(config, "B")

    assert config.pinned == ["B", "A"]


def test_main_saves_remark_and_pin(tmp_path, monkeypatch, capsys):
    (tmp_path / "A").mkdir()
    (tmp_path / "B").mkdir()
    monkeypatch.chdir(tmp_path)
    launcher.save_config(Config(project_dir=str(tmp_path)), "config.json")

    monkeypatch.setattr(add_remark.inquirer, "fuzzy", lambda **kwargs: _prompt("B"))
    monkeypatch.setattr(add_remark.inquirer, "text", lambda **kwargs: _prompt("shared libs"))
    monkeypatch.setattr(add_remark.inquirer, "confirm", lambda **kwargs: _prompt(True))

    add_remark.main()

    data = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert data["subDir"] == ["B"]
    assert data["remarks"] == [{"name": "B", "remark": "shared libs"}]
    assert "updated successfully" in capsys.readouterr().out


def test_main_without_folders_saves_nothing(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    launcher.save_config(Config(project_dir=str(tmp_path)), "config.json")
    before = (tmp_path / "config.json").read_text(encoding="utf-8")

    add_remark.main()

    assert (tmp_path / "config.json").read_text(encoding="utf-8") == before
    assert "No folders found" in capsys.readouterr().out


def test_main_reports_unreadable_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text('{"projectDir": "/work", "subDir": "tools"}', encoding="utf-8")

    add_remark.main()

    assert "Could not read project folders" in capsys.readouterr().out


def test_main_reports_missing_root(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    launcher.save_config(Config(project_dir=str(tmp_path / "gone")), "config.json")

    add_remark.main()

    assert "Could not read project folders" in capsys.readouterr().out
