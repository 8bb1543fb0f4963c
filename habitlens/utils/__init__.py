from .config import (
    Config,
    HabitConfig,

    global_config,
    safe_read_cfg
)

from .log import (
    init_log_console,
    init_log_file,

    init_log
)

from .i18n import (
    i18n,
    t
)

from .req_ctx import (
    get_req_ctx,
    set_req_ctx,
    update_req_ctx
)
