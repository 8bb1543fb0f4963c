import io
import json
import logging

from .config import Config, HabitConfig, global_config, safe_read_cfg
from .i18n import I18n, t
from .log import JsonFormatter, init_log
from .req_ctx import get_req_ctx, set_req_ctx, update_req_ctx


def _config(text: str) -> Config:
    return Config(yaml_filenames=io.StringIO(text))


def test_yaml_keys_are_case_insensitive():
    config = _config("log_level: debug\nHabit_Timezone: Europe/Paris\nDaily_Goal: 3\n")

    assert config.log.level == logging.DEBUG
    assert config.habits.timezone == "Europe/Paris"
    assert config.get_int("DAILY_GOAL") == 3
    assert config.get_str("missing", "fallback") == "fallback"


def test_environment_overrides_yaml(monkeypatch):
    monkeypatch.setenv("HABIT_WEEKLY_THRESHOLD", "12")

    config = _config("habit_weekly_threshold: 4\n")

    assert config.get_int("habit_weekly_threshold") == 12
    assert config.habits.weekly_threshold == 12


def test_typed_getters_fall_back_to_defaults():
    config = _config("count: abc\nflag: true\nhabit_note: ~\n")

    assert config.get_int("count", 3) == 3
    assert config.get_int("flag", 5) == 5
    assert config.get_str("habit_note", "none") == "none"
    assert config.get_str("count") == "abc"


def test_habit_config_validation():
    assert HabitConfig(timezone="Not/AZone").timezone == "UTC"
    assert HabitConfig(weekly_threshold=0).weekly_threshold == 8
    assert HabitConfig(language="  ").language == "en"


def test_refresh_and_global_config():
    config = _config("")
    config.refresh({"habit_language": "ja"})

    assert config.habits.language == "ja"
    assert global_config() is config
    assert safe_read_cfg("HABIT_LANGUAGE") == "ja"


def test_missing_yaml_file_is_ignored(tmp_path):
    config = Config(yaml_filenames=[str(tmp_path / "missing.yaml")])

    assert config.habits.timezone == "UTC"


def test_init_loads_dotenv_and_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.delenv("HABIT_LANGUAGE", raising=False)

    (tmp_path / "app.yaml").write_text("habit_timezone: Asia/Shanghai\n")
    (tmp_path / ".env").write_text("HABIT_LANGUAGE=zh\n")

    handlers = logging.root.handlers[:]
    level = logging.root.level
    try:
        config = Config.init(yaml_filenames=str(tmp_path / "app.yaml"), dotenv_filenames=str(tmp_path / ".env"))
    finally:
        logging.root.handlers = handlers
        logging.root.setLevel(level)
        monkeypatch.delenv("HABIT_LANGUAGE", raising=False)

    assert config.habits.timezone == "Asia/Shanghai"
    assert config.habits.language == "zh"


def test_init_log_file(tmp_path):
    handlers = logging.root.handlers[:]
    level = logging.root.level
    try:
        init_log(name="habitlens", dir=str(tmp_path / "logs"), level=logging.WARNING)
        assert logging.root.level == logging.WARNING
        assert any(isinstance(h, logging.FileHandler) for h in logging.root.handlers)
    finally:
        for h in logging.root.handlers:
            if h not in handlers:
                h.close()
        logging.root.handlers = handlers
        logging.root.setLevel(level)

    assert len(list((tmp_path / "logs").glob("*_habitlens_*.log"))) == 1


def test_json_formatter_includes_extra_and_context():
    record = logging.LogRecord("test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    record.skipped = 2

    with set_req_ctx({"habit_id": 7}):
        update_req_ctx(user_id="u1")
        assert get_req_ctx("user_id") == "u1"
        line = JsonFormatter({"service": "habitlens"}).format(record)

    data = json.loads(line)

    assert data["msg"] == "hello world"
    assert data["level"] == "INFO"
    assert data["skipped"] == 2
    assert data["service"] == "habitlens"
    assert data["habit_id"] == 7
    assert data["user_id"] == "u1"
    assert get_req_ctx("habit_id") is None


def test_i18n_fallbacks(tmp_path):
    (tmp_path / "demo.json").write_text(json.dumps({
        "greet": {"en": "Hello {name}", "zh": "你好 {name}"},
        "only_zh": {"zh": "仅中文"}
    }), encoding="utf-8")

    i18n = I18n(locales_dir=tmp_path)

    assert i18n.t("greet", "zh_CN", module="demo", name="A") == "你好 A"
    assert i18n.t("greet", "fr", module="demo", name="A") == "Hello A"
    assert i18n.t("only_zh", "en", module="demo") == "仅中文"
    assert i18n.t("unknown", "en", module="demo") == "unknown"
    assert i18n.t("greet", "en", module="absent") == "greet"


def test_packaged_month_names():
    assert t("month_12", "es", module="habits") == "dic."
    assert t("month_label", "fr", module="habits", month_name="févr.", month=2, year=2024) == "févr. 2024"


def test_print_lists_effective_settings(capsys):
    config = _config("log_name: habitlens\nlog_dir: logs\nhabit_language: zh\nagent_rules_file: custom.yaml\n")

    config.print()

    out = capsys.readouterr().out
    assert "<stream>" in out
    assert "log             : logs/habitlens:INFO" in out
    assert "language        : zh" in out
    assert "rules           : custom.yaml" in out


def test_init_reads_default_dotenv(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.delenv("HABIT_LANGUAGE", raising=False)

    (tmp_path / ".env").write_text("HABIT_LANGUAGE=fr\n")

    handlers = logging.root.handlers[:]
    level = logging.root.level
    try:
        config = Config.init()
    finally:
        logging.root.handlers = handlers
        logging.root.setLevel(level)
        monkeypatch.delenv("HABIT_LANGUAGE", raising=False)

    assert config.habits.language == "fr"
