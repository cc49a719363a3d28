# models/prediction.py

"""
Represents grade predictions shown next to a student's grades.

Each course row of the student grades view owns a `PredictionCell`. The cell starts in the
computing state and is filled by a background lookup once the backend answers. A failed lookup,
or one that never finishes, leaves the cell computing; there is no timeout and no retry.

`PredictionBoard` starts those lookups on a thread pool so the grades render never waits on them.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from typing import Callable

from core.response import Response
from core.utils import first_present

logger = logging.getLogger("portal.prediction")

COMPUTING_LABEL = "computing…"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"

    @property
    def arrow(self) -> str:
        return {"up": "↑", "down": "↓", "flat": "→"}[self.value]


class Prediction:

    def __init__(self, predicted_grade: float, trend: Trend):
        self._predicted_grade: float = predicted_grade
        self._trend: Trend = trend

    # === properties ===

    @property
    def predicted_grade(self) -> float:
        return self._predicted_grade

    @property
    def trend(self) -> Trend:
        return self._trend

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> Prediction:
        grade = first_present(data, "predicted_grade", "prediction", "grade")

        if grade is None:
            raise KeyError("predicted_grade")

        return cls(
            predicted_grade=float(grade),
            trend=Trend(str(data.get("trend", "flat")).lower()),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Prediction({self._predicted_grade}, {self._trend.value})"

    def __str__(self) -> str:
        return f"{self._predicted_grade:g} {self._trend.arrow}"


class PredictionCell:

    def __init__(self, course_id: str):
        self._course_id: str = course_id
        self._prediction: Prediction | None = None
        self._lock = threading.Lock()

    @property
    def course_id(self) -> str:
        return self._course_id

    @property
    def prediction(self) -> Prediction | None:
        with self._lock:
            return self._prediction

    @property
    def is_computing(self) -> bool:
        return self.prediction is None

    @property
    def label(self) -> str:
        prediction = self.prediction
        return COMPUTING_LABEL if prediction is None else str(prediction)

    def resolve(self, prediction: Prediction) -> None:
        with self._lock:
            self._prediction = prediction

    def __repr__(self) -> str:
        return f"PredictionCell({self._course_id}, {self.label})"


class PredictionBoard:
    """
    Issues one independent prediction lookup per course and collects the results into cells.

    Args:
        lookup (Callable[[str], Response]): Fetches the prediction for one course id; see `api.student.fetch_prediction`.
        executor (Executor | None, optional): Pool that runs the lookups. A private pool is created when omitted.
    """

    def __init__(
        self,
        lookup: Callable[[str], Response],
        executor: Executor | None = None,
    ):
        self._lookup = lookup
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="prediction"
        )
        self._cells: dict[str, PredictionCell] = {}

    @property
    def cells(self) -> dict[str, PredictionCell]:
        return dict(self._cells)

    def request(self, course_id: str) -> PredictionCell:
        """
        Returns the cell for `course_id`, starting its lookup the first time the course is requested.

        Notes:
            - Never blocks on the lookup.
        """
        if course_id in self._cells:
            return self._cells[course_id]

        cell = PredictionCell(course_id)
        self._cells[course_id] = cell

        future = self._executor.submit(self._lookup, course_id)
        future.add_done_callback(lambda f: self._fill(cell, f))

        return cell

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    # === helper methods ===

    def _fill(self, cell: PredictionCell, future: Future) -> None:
        if future.cancelled():
            return

        exception = future.exception()

        if exception is not None:
            logger.debug("prediction for course %s raised: %s", cell.course_id, exception)
            return

        response: Response = future.result()

        if not response.success:
            logger.debug(
                "prediction for course %s unavailable: %s", cell.course_id, response.detail
            )
            return

        cell.resolve(response.data["record"])
