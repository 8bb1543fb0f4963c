from .config import (
    Config,

    global_config,
    safe_read_cfg
)

from .habits import HabitConfig
from .log import LogConfig
