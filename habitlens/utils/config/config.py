import dotenv, io, logging, os, re

from ruamel.yaml import YAML
from typing import Any

from .habits import HabitConfig, DEFAULT_WEEKLY_THRESHOLD
from .log import LogConfig

#-----------------------------------------------------------------------------

_global_config = None

#-----------------------------------------------------------------------------

class Config:

    yaml = YAML(typ="safe")

    #-------------------------------------------------

    def __init__(
        self,
        yaml_filenames: str | io.StringIO | list[str | io.StringIO] | None = None
    ):
        if isinstance(yaml_filenames, str|io.StringIO):
            self._yaml_filenames = [yaml_filenames]
        elif isinstance(yaml_filenames, list):
            self._yaml_filenames = yaml_filenames
        else:
            self._yaml_filenames = []

        #-------------------------------------------------

        self._raw = {}

        # Load YAML files.
        for yaml_filename in self._yaml_filenames:
            self.load_yaml(yaml_filename)

        self.refresh()

        global _global_config
        _global_config = self

    #-----------------------------------------------------

    def refresh(self, data: dict | None = None):
        if data:
            self._raw.update({k.upper(): v for k, v in data.items() if isinstance(k, str)})

        self.log = LogConfig(
            name    = self.get_str("LOG_NAME"),
            dir     = self.get_str("LOG_DIR"),
            level   = logging.getLevelNamesMapping().get(self.get_str("LOG_LEVEL").strip().upper(), logging.INFO)
        )

        self.habits = HabitConfig(
            timezone        = self.get_str("HABIT_TIMEZONE"),
            language        = self.get_str("HABIT_LANGUAGE"),
            weekly_threshold= self.get_int("HABIT_WEEKLY_THRESHOLD", DEFAULT_WEEKLY_THRESHOLD),
            rules_file      = self.get_str("AGENT_RULES_FILE")
        )


    def load_yaml(self, file: str | io.StringIO):
        if not file:
            return

        stream = None

        if isinstance(file, str):
            # Filename.
            try:
                with open(file, "r", encoding="utf-8") as f:
                    stream = io.StringIO(f.read())

            except Exception as e:
                logging.warning(f"Failed to load YAML file '{file}': {str(e)}")
                return

        elif isinstance(file, io.StringIO):
            stream = file

        if stream is None:
            return

        #-------------------------------------------------

        data = Config.yaml.load(stream)
        if not isinstance(data, dict):
            return

        for key, value in data.items():
            if not isinstance(key, str):
                continue

            self._raw[key.upper()] = value

    #-----------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        stripped_key = key.strip()
        if not stripped_key:
            return default

        # Check environment variables beforehand.
        s = os.environ.get(stripped_key)
        if s is not None:
            return s

        # Check key in upper case again.
        upper_key = stripped_key.upper()
        s = os.environ.get(upper_key)
        if s is not None:
            return s

        # Then check the configuration variables.
        return self._raw.get(upper_key, default)


    def get_str(self, key: str, default: str = "") -> str:
        s = self.get(key, default)
        if s is None:
            return default

        return s if isinstance(s, str) else str(s)


    def get_int(self, key: str, default: int = 0) -> int:
        obj = self.get(key)

        if isinstance(obj, bool):
            return default

        if isinstance(obj, int):
            return obj

        try:
            return int(obj)
        except (TypeError, ValueError):
            return default

    #-----------------------------------------------------

    def print(self):
        print(f"Configuration loaded from {[f if isinstance(f, str) else '<stream>' for f in self._yaml_filenames]}:")
        print("----------------------------------------------------------")
        print(f"env             : {os.environ.get('ENV', '').strip().lower()}")
        print(f"debug           : {self.log.level <= logging.DEBUG}")

        self.log.print()
        self.habits.print()

        print("----------------------------------------------------------")

    #-------------------------------------------------------------------------

    @staticmethod
    def load_dotenv(filenames: str | list[str] | None = None):
        if isinstance(filenames, str):
            l = [filenames]
        elif isinstance(filenames, list):
            l = filenames
        else:
            return

        for filename in l:
            filename = filename.strip()
            if not filename:
                continue

            for key, value in dotenv.dotenv_values(filename).items():
                if value:
                    value = value.strip()
                if not value:
                    continue

                key = key.strip()
                if not key:
                    continue

                os.environ.setdefault(key.upper(), value)

    #-------------------------------------------------------------------------

    @staticmethod
    def init(
        yaml_filenames  : str | list[str] | None = None,
        dotenv_filenames: str | list[str] | None = ".env",
        log_extra       : dict | None = None
    ) -> "Config":
        from ..log import init_log_console
        init_log_console(extra=log_extra)

        Config.load_dotenv(dotenv_filenames)

        env = os.environ.get("ENV", "").strip().lower()
        if env and log_extra is not None:
            log_extra["env"] = env

        #-----------------------------------------------------
        # Collect user yaml files, followed by their .{env}.yaml variants.

        yaml_file_list = []

        if isinstance(yaml_filenames, str):
            yaml_filenames = [yaml_filenames]

        for yaml_filename in yaml_filenames or []:
            if not isinstance(yaml_filename, str):
                continue

            yaml_filename = yaml_filename.strip()
            if not yaml_filename or yaml_filename in yaml_file_list:
                continue

            yaml_file_list.append(yaml_filename)

            if env and re.match(".*\\.yaml$", yaml_filename, re.IGNORECASE):
                env_yaml_filename = f"{yaml_filename[:-5]}.{env}.yaml"
                if env_yaml_filename not in yaml_file_list:
                    yaml_file_list.append(env_yaml_filename)

        if env and not yaml_file_list:
            yaml_file_list = [f"config.{env}.yaml"]

        #-------------------------------------------------

        final_yaml_file_list = []

        default_yaml = "config.yaml"
        if os.path.exists(default_yaml) and default_yaml not in yaml_file_list:
            final_yaml_file_list.append(default_yaml)
            logging.info("Default config has been loaded.")

        for yaml_filename in yaml_file_list:
            if os.path.exists(yaml_filename):
                final_yaml_file_list.append(yaml_filename)
            else:
                logging.warning(f"Config file '{yaml_filename}' does not exist, skipped.")

        config = Config(yaml_filenames=final_yaml_file_list)

        #-----------------------------------------------------

        from ..log import init_log
        init_log(
            name    = config.log.name,
            dir     = config.log.dir,
            level   = config.log.level,
            extra   = log_extra
        )

        return config

#-----------------------------------------------------------------------------

def global_config() -> Config | None:
    return _global_config

#-----------------------------------------------------------------------------

def safe_read_cfg(key: str, default: str = "") -> str:
    if not _global_config:
        return default

    return _global_config.get_str(key, default)

#-----------------------------------------------------------------------------
