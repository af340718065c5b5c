import logging
import pickle

import pytest
from prometheus_client import REGISTRY

from src.shared.telemetry import Telemetry, measure_time


class Worker:
    def __init__(self):
        self.telemetry = Telemetry("Worker")

    @measure_time("do_work")
    def work(self, value):
        return value * 2

    @measure_time("explode")
    def explode(self):
        raise RuntimeError("boom")


def duration_count(method):
    return (
        REGISTRY.get_sample_value(
            "trivia_engine_method_duration_seconds_count",
            {"component": "Worker", "method": method},
        )
        or 0.0
    )


def test_measure_time_records_duration_and_returns_result():
    before = duration_count("work")

    assert Worker().work(21) == 42
    assert duration_count("work") == before + 1


def test_measure_time_logs_and_reraises(caplog):
    before = duration_count("explode")

    with caplog.at_level(logging.ERROR, logger="trivia.Worker"):
        with pytest.raises(RuntimeError, match="boom"):
            Worker().explode()

    assert duration_count("explode") == before + 1
    assert "Failed: explode" in caplog.text


def test_log_info_includes_trace_id_and_fields(caplog):
    telemetry = Telemetry("Probe")
    trace_id = Telemetry.start_trace()

    with caplog.at_level(logging.INFO, logger="trivia.Probe"):
        telemetry.log_info("Something Happened", streak=3)

    assert Telemetry.get_trace_id() == trace_id
    assert f"[{trace_id}] Something Happened" in caplog.text
    assert "'streak': 3" in caplog.text


def test_count_outcome_increments_counter():
    def sample():
        return (
            REGISTRY.get_sample_value(
                "trivia_engine_outcomes_recorded_total", {"correct": "true"}
            )
            or 0.0
        )

    before = sample()
    Telemetry.count_outcome(True)
    assert sample() == before + 1


def test_telemetry_pickles_without_logger():
    clone = pickle.loads(pickle.dumps(Telemetry("Pickled")))

    assert clone.component == "Pickled"
    assert clone.logger.name == "trivia.Pickled"
