"""
Completion Aggregate Service

Binds the pure aggregator to configuration: reads timezone, label language
and the weekly threshold from Config, loads exported completion logs and
aggregates them per user or per habit.
"""

import json
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .aggregator import RawEvent, aggregate, validate_events
from .models import AggregationResult
from ..utils.config import Config, HabitConfig, global_config
from ..utils.req_ctx import set_req_ctx

# Top-level keys accepted when a JSON export is an object rather than a list
_LOG_KEYS = ("logs", "habit_logs")


class CompletionAggregateService:
    """
    Service for chart aggregation

    Holds only configuration; every call recomputes its result from the
    events it is given.
    """

    def __init__(self, config: Optional[Union[Config, HabitConfig]] = None):
        """
        Args:
            config: Config or HabitConfig (default: global config, then built-in defaults)
        """
        if config is None:
            config = global_config()

        if isinstance(config, Config):
            self.options = config.habits
        elif isinstance(config, HabitConfig):
            self.options = config
        else:
            self.options = HabitConfig()

        logging.info(
            f"Initialized CompletionAggregateService with timezone={self.options.timezone}, "
            f"language={self.options.language}, weekly_threshold={self.options.weekly_threshold}"
        )

    def aggregate(self, events: Iterable[RawEvent]) -> AggregationResult:
        start_time = time.time()

        result = aggregate(
            events,
            timezone=self.options.timezone,
            language=self.options.language,
            weekly_threshold=self.options.weekly_threshold
        )

        logging.info(
            f"Aggregated {result.total_completions} completion(s) into "
            f"{len(result.completion_series)} {result.granularity.value} bucket(s)",
            extra={
                "skipped": result.skipped,
                "execution_time_ms": round((time.time() - start_time) * 1000, 2)
            }
        )

        return result

    def aggregate_by_habit(self, events: Iterable[RawEvent]) -> Tuple[Dict[Any, AggregationResult], int]:
        """
        Aggregate each habit separately

        Granularity is chosen per habit from that habit's own event count.
        Events without a habit_id are grouped under None. Malformed records
        belong to no habit, so they are counted once for the whole call.

        Returns:
            (results keyed by habit_id, number of skipped records)
        """
        valid, skipped = validate_events(events, self.options.timezone)

        by_habit = {}
        for event in valid:
            by_habit.setdefault(event.habit_id, []).append(event)

        results = {}
        for habit_id in sorted(by_habit, key=lambda h: (h is None, str(h), type(h).__name__)):
            with set_req_ctx({"habit_id": habit_id}):
                results[habit_id] = self.aggregate(by_habit[habit_id])

        if skipped:
            logging.info(f"{skipped} record(s) excluded before per-habit aggregation")

        return results, skipped

    @staticmethod
    def load_events(filepath: str) -> List[Dict[str, Any]]:
        """
        Load raw completion records from a JSON export

        The file holds either a list of records or an object with a "logs"
        (or "habit_logs") list. Records are returned unvalidated.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not valid JSON
            TypeError: If the JSON does not hold a list of records
        """
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Completion log file not found: {filepath}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in completion log file: {e}")

        if isinstance(data, dict):
            for key in _LOG_KEYS:
                if key in data:
                    data = data[key]
                    break
            else:
                raise TypeError(f"Completion log JSON must contain one of {', '.join(_LOG_KEYS)}")

        if not isinstance(data, list):
            raise TypeError(f"Completion logs must be a list, got {type(data).__name__}")

        logging.info(f"Loaded {len(data)} completion record(s) from {filepath}")
        return data
