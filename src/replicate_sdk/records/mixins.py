"""Capabilities shared by asynchronous records (predictions and trainings)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

STARTING = "starting"
PROCESSING = "processing"
SUCCEEDED = "succeeded"
FAILED = "failed"
CANCELED = "canceled"

RUNNING_STATUSES = frozenset({STARTING, PROCESSING})
TERMINAL_STATUSES = frozenset({SUCCEEDED, FAILED, CANCELED})

STATUS_DESCRIPTIONS = {
    STARTING: "Starting execution",
    PROCESSING: "Processing",
    SUCCEEDED: "Completed successfully",
    FAILED: "Failed",
    CANCELED: "Canceled",
}


class Refreshable(ABC):
    """Records that can re-fetch their current state from the server."""

    @abstractmethod
    def refetch(self) -> Any:
        """Replace `data` with the server's current representation and return self."""

    def is_stale(self) -> bool:
        return False

    def refetch_if_stale(self) -> Any:
        if self.is_stale():
            self.refetch()
        return self


class Statusable:
    """
    Status predicates over the `status` field.

    The lifecycle is starting -> processing -> succeeded | failed | canceled.
    Transitions only ever come from server responses; nothing here computes
    one locally. A missing status (or non-mapping data) reads as unknown.
    """

    def current_status(self) -> str | None:
        data = getattr(self, "data", None)
        if not isinstance(data, Mapping):
            return None
        return data.get("status")

    def is_starting(self) -> bool:
        return self.current_status() == STARTING

    def is_processing(self) -> bool:
        return self.current_status() == PROCESSING

    def is_succeeded(self) -> bool:
        return self.current_status() == SUCCEEDED

    def is_failed(self) -> bool:
        return self.current_status() == FAILED

    def is_canceled(self) -> bool:
        return self.current_status() == CANCELED

    def is_running(self) -> bool:
        return self.current_status() in RUNNING_STATUSES

    def is_finished(self) -> bool:
        return self.current_status() in TERMINAL_STATUSES

    def status_description(self) -> str:
        status = self.current_status()
        if status in STATUS_DESCRIPTIONS:
            return STATUS_DESCRIPTIONS[status]
        return f"Unknown status: {status if status is not None else ''}"
