import json

import pytest

from shared.config import ElfcatConfig, GlobalConfig, ReportConfig, get_config
from shared.logger import ElfcatLogger


def test_defaults():
    config = ElfcatConfig()
    assert config.global_settings.log_level == "INFO"
    assert config.global_settings.log_file is None
    assert config.report.output_dir == "."
    assert config.report.bytes_per_row == 16
    assert config.report.max_file_size == 100 * 1024 * 1024


def test_load_without_file_returns_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert ElfcatConfig.load() == ElfcatConfig()


def test_load_picks_up_cwd_file(tmp_path, monkeypatch):
    (tmp_path / "elfcat.toml").write_text('[report]\noutput_dir = "reports"\n')
    monkeypatch.chdir(tmp_path)
    assert ElfcatConfig.load().report.output_dir == "reports"


def test_load_explicit_file_ignores_unknown_keys(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text(
        "[global]\n"
        'log_level = "DEBUG"\n'
        "log_json = true\n"
        "colour = true\n"
        "\n"
        "[report]\n"
        "bytes_per_row = 32\n"
        "\n"
        "[unrelated]\n"
        "key = 1\n"
    )
    config = ElfcatConfig.load(path)
    assert config.global_settings == GlobalConfig(log_level="DEBUG", log_json=True)
    assert config.report == ReportConfig(bytes_per_row=32)
    assert config.to_dict()["report"]["bytes_per_row"] == 32


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ElfcatConfig.load(tmp_path / "absent.toml")


def test_json_log_file_records_component_and_operation(tmp_path):
    log_file = tmp_path / "logs" / "elfcat.log"
    logger = ElfcatLogger(
        "test-json", log_file=log_file, json_logs=True, console_output=False
    )
    with logger.operation("decode"):
        logger.info("decoded %s", "a.out", ranges=15)

    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert record["message"] == "decoded a.out"
    assert record["logger"] == "elfcat.test-json"
    assert record["component"] == "test-json"
    assert record["operation"] == "decode"
    assert record["extra"] == {"ranges": 15}


def test_logger_level_filters(tmp_path):
    log_file = tmp_path / "plain.log"
    logger = ElfcatLogger(
        "test-level", log_level="WARNING", log_file=log_file, console_output=False
    )
    logger.info("hidden")
    logger.warning("shown")
    text = log_file.read_text(encoding="utf-8")
    assert "shown" in text
    assert "hidden" not in text


def test_get_config_caches_until_a_path_is_given(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text("[report]\nbytes_per_row = 8\n")
    loaded = get_config(path)
    assert loaded.report.bytes_per_row == 8
    assert get_config() is loaded


@pytest.mark.parametrize("key", ["bytes_per_row", "max_file_size"])
def test_non_positive_report_settings_are_rejected(tmp_path, key):
    path = tmp_path / "bad.toml"
    path.write_text(f"[report]\n{key} = 0\n")
    with pytest.raises(ValueError, match=key):
        ElfcatConfig.load(path)
