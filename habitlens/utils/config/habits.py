import logging, pytz

#-----------------------------------------------------------------------------

DEFAULT_TIMEZONE        = "UTC"
DEFAULT_LANGUAGE        = "en"
DEFAULT_WEEKLY_THRESHOLD= 8

#-----------------------------------------------------------------------------

class HabitConfig:
    def __init__(
        self,
        timezone        : str = DEFAULT_TIMEZONE,
        language        : str = DEFAULT_LANGUAGE,
        weekly_threshold: int = DEFAULT_WEEKLY_THRESHOLD,
        rules_file      : str = ""
    ):
        timezone = timezone.strip() if timezone else ""
        if not timezone:
            timezone = DEFAULT_TIMEZONE

        try:
            pytz.timezone(timezone)
        except pytz.exceptions.UnknownTimeZoneError:
            logging.warning(f"Unknown timezone '{timezone}', falling back to {DEFAULT_TIMEZONE}.")
            timezone = DEFAULT_TIMEZONE

        if weekly_threshold <= 0:
            logging.warning(f"Invalid weekly threshold {weekly_threshold}, using {DEFAULT_WEEKLY_THRESHOLD}.")
            weekly_threshold = DEFAULT_WEEKLY_THRESHOLD

        self.timezone           = timezone
        self.language           = language.strip() if language and language.strip() else DEFAULT_LANGUAGE
        self.weekly_threshold   = weekly_threshold
        self.rules_file         = rules_file.strip() if rules_file else ""


    def print(self):
        print(f"timezone        : {self.timezone}")
        print(f"language        : {self.language}")
        print(f"weekly threshold: {self.weekly_threshold}")
        if self.rules_file:
            print(f"rules           : {self.rules_file}")

#-----------------------------------------------------------------------------
