import json
import logging
import os
import threading
from typing import Dict, List, Optional

from ingres.config import METRICS_PATH


logger = logging.getLogger(__name__)

_lock = threading.Lock()
_write_lock = threading.Lock()

# Latency history kept for percentile estimates
_MAX_LATENCIES = 1000


class MetricsTracker:

    def __init__(self, path: Optional[str] = METRICS_PATH):

        self._path = path

        self._metrics = self._empty()

        self._load()


    @staticmethod
    def _empty() -> Dict:

        return {

            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,

            "total_latency": 0.0,
            "avg_latency": 0.0,

            "latencies": [],

            # edge function name -> {"calls", "failures"}
            "functions": {},

        }


    def _load(self):

        if not self._path or not os.path.exists(self._path):
            return

        try:

            with open(self._path, "r") as f:
                data = json.load(f)

        except (OSError, ValueError) as e:

            logger.warning(
                "Metrics file unreadable, starting fresh",
                extra={"path": self._path, "error": str(e)},
            )
            return

        if not isinstance(data, dict):

            logger.warning(
                "Metrics file unreadable, starting fresh",
                extra={"path": self._path, "error": "not a JSON object"},
            )
            return

        merged = self._empty()
        merged.update(data)
        self._metrics = merged


    def _save(self, payload: str):

        if not self._path:
            return

        directory = os.path.dirname(self._path)

        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = f"{self._path}.tmp"

        # Serialized under _lock, written outside it
        with _write_lock:

            with open(tmp_path, "w") as f:
                f.write(payload)

            os.replace(tmp_path, self._path)


    def record_success(self, latency: float):

        with _lock:

            self._metrics["total_requests"] += 1

            self._metrics["successful_requests"] += 1

            self._metrics["total_latency"] += latency

            self._metrics["avg_latency"] = (
                self._metrics["total_latency"]
                / self._metrics["total_requests"]
            )

            latencies = self._metrics["latencies"]
            latencies.append(latency)
            del latencies[:-_MAX_LATENCIES]

            payload = json.dumps(self._metrics, indent=2)

        self._save(payload)


    def record_failure(self):

        with _lock:

            self._metrics["total_requests"] += 1

            self._metrics["failed_requests"] += 1

            payload = json.dumps(self._metrics, indent=2)

        self._save(payload)


    def record_function_call(self, function: str, success: bool):

        with _lock:

            counters = self._metrics["functions"].setdefault(
                function, {"calls": 0, "failures": 0}
            )

            counters["calls"] += 1

            if not success:
                counters["failures"] += 1

            payload = json.dumps(self._metrics, indent=2)

        self._save(payload)


    def get_metrics(self):
        """Counters and p95; the raw latency history stays internal."""

        with _lock:

            snapshot = {
                key: value
                for key, value in self._metrics.items()
                if key not in ("latencies", "functions")
            }

            snapshot["functions"] = {
                name: dict(counters)
                for name, counters in self._metrics["functions"].items()
            }

            latencies = list(self._metrics["latencies"])

        snapshot["p95_latency"] = _percentile(latencies, 95)

        return snapshot


    def get_latency_percentile(self, percentile: float) -> float:

        with _lock:
            latencies = list(self._metrics["latencies"])

        return _percentile(latencies, percentile)


def _percentile(latencies: List[float], percentile: float) -> float:

    if not latencies:
        return 0.0

    sorted_latencies = sorted(latencies)

    index = int(len(sorted_latencies) * percentile / 100)

    index = min(index, len(sorted_latencies) - 1)

    return sorted_latencies[index]


metrics_tracker = MetricsTracker()
