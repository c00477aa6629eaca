import datetime

import pytest

from rkit.utility import (
    TranslatorSelector,
    check_login,
    create_config,
    load_config,
    read_file,
    write_file,
)

BEFORE_END = datetime.date(2016, 10, 31)
AFTER_END = datetime.date(2016, 11, 1)


def test_config_round_trip(tmp_path):
    path = tmp_path / "app.ini"
    create_config(path, "net", {"Host": "example.com", "port": "3306"})
    loaded, changed = load_config(path, "net", {"Host": "", "port": ""})
    assert loaded == {"Host": "example.com", "port": "3306"}
    assert changed is True


def test_config_keeps_other_sections(tmp_path):
    path = tmp_path / "app.ini"
    create_config(path, "a", {"k": "1"})
    create_config(path, "b", {"k": "2"})
    assert load_config(path, "a", {"k": ""})[0] == {"k": "1"}
    assert load_config(path, "b", {"k": ""})[0] == {"k": "2"}


def test_load_missing_file_with_defaults_does_not_create(tmp_path):
    path = tmp_path / "none.ini"
    loaded, changed = load_config(path, "g", {"k": "value"})
    assert loaded == {"k": ""}
    assert changed is True
    assert not path.exists()


def test_load_unchanged_creates_file(tmp_path):
    path = tmp_path / "new.ini"
    loaded, changed = load_config(path, "g", {"k": ""})
    assert changed is False
    assert path.exists()
    assert load_config(path, "g", {"k": "x"})[0] == {"k": ""}


def test_load_unchanged_without_create(tmp_path):
    path = tmp_path / "new.ini"
    load_config(path, "g", {"k": ""}, create_if_missing=False)
    assert not path.exists()


def test_check_login_accepts():
    assert check_login("user012", "111111", BEFORE_END) is True
    assert check_login("USER1ab", "111111", BEFORE_END) is True


def test_check_login_rejects():
    assert check_login("user012", "password", BEFORE_END) is False
    assert check_login("user0123", "111111", BEFORE_END) is False
    assert check_login("admin01", "111111", BEFORE_END) is False


def test_check_login_expired():
    with pytest.raises(PermissionError):
        check_login("user012", "111111", AFTER_END)


def test_file_round_trip(tmp_path):
    path = tmp_path / "blob.bin"
    write_file(path, b"\x00\x01data")
    assert read_file(path) == b"\x00\x01data"
    write_file(path, b"x")
    assert read_file(path) == b"x"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(tmp_path / "missing.bin")


def test_translator_switch():
    changes = []
    selector = TranslatorSelector(on_change=changes.append)
    selector.set_files(["en.qm", "zh.qm"])
    assert selector.reload(1) == "zh.qm"
    assert selector.reload(1) is None
    assert changes == [1]


def test_translator_out_of_range_keeps_file():
    changes = []
    selector = TranslatorSelector(on_change=changes.append)
    selector.set_files(["en.qm", "zh.qm"])
    assert selector.reload(5) == "en.qm"
    assert selector.index == 0
    assert changes == [5]


def test_translator_without_files():
    selector = TranslatorSelector()
    selector.set_files([])
    assert selector.reload(1) is None
    assert selector.index == 0


def test_translator_set_files_clamps_index():
    selector = TranslatorSelector()
    selector.set_files(["a", "b", "c"])
    selector.reload(2)
    selector.set_files(["a"])
    assert selector.index == 0