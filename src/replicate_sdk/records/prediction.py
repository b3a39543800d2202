from __future__ import annotations

from typing import Any

from replicate_sdk.records.base import Record
from replicate_sdk.records.mixins import Refreshable, Statusable


class Prediction(Refreshable, Statusable, Record):
    """
    An asynchronous model run.

    Predictions order by `created_at`, compared as raw ISO-8601 strings.
    That ordering is only meaningful when every timestamp uses the same
    fixed-width format and timezone designator; the strings are not parsed.
    """

    def refetch(self) -> Prediction:
        self.data = self.client.retrieve_prediction(self.id).data
        return self

    def cancel(self) -> Prediction:
        self.data = self.client.cancel_prediction(self.id).data
        return self

    @property
    def output(self) -> Any:
        return self.get("output")

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, Prediction):
            return None
        mine, theirs = self.get("created_at"), other.get("created_at")
        if mine is None and theirs is None:
            return 0
        if mine is None or theirs is None:
            return None
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Prediction):
            return NotImplemented
        return self._compare(other) == -1

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Prediction):
            return NotImplemented
        return self._compare(other) == 1

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Prediction):
            return NotImplemented
        return self._compare(other) in (-1, 0)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Prediction):
            return NotImplemented
        return self._compare(other) in (0, 1)
