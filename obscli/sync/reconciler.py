"""Reconciliation engine: drive remote projects towards the manifest.

Projects are processed one at a time, in manifest order. For each project:

1. The remote state is fetched. A failure ends that project as FETCH_ERROR.
2. Local and remote are compared. Equivalent projects end as UP_TO_DATE
   without any write.
3. Divergent projects are upserted whole, ending as UPDATED or UPSERT_ERROR.

A failing project never stops the loop; nothing is retried within a run.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, Protocol

from loguru import logger

from obscli.models.project import Project
from obscli.sync.compare import projects_differ


class OutcomeStatus(Enum):
    """Terminal state of one project within a run."""

    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    FETCH_ERROR = "fetch_error"
    UPSERT_ERROR = "upsert_error"


class RemoteService(Protocol):
    """What the engine needs from the build service.

    Both calls block until done and raise on failure.
    """

    def fetch(self, name: str) -> Project: ...

    def upsert(self, project: Project) -> None: ...


@dataclass
class Outcome:
    """Result recorded for a single project."""

    project: str
    status: OutcomeStatus
    detail: str = ""

    @property
    def is_error(self) -> bool:
        return self.status in (OutcomeStatus.FETCH_ERROR, OutcomeStatus.UPSERT_ERROR)

    def message(self) -> str:
        if self.status == OutcomeStatus.UPDATED:
            return f"Project {self.project} updated on OBS."
        if self.status == OutcomeStatus.UP_TO_DATE:
            return f"Project {self.project} is already up-to-date."
        if self.status == OutcomeStatus.FETCH_ERROR:
            return f"Project {self.project}: error getting project from OBS: {self.detail}"
        return f"Project {self.project}: error creating/updating project on OBS: {self.detail}"


@dataclass
class ReconcileReport:
    """Outcomes of one run, in manifest order."""

    outcomes: list[Outcome] = field(default_factory=list)
    cancelled: bool = False

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def has_errors(self) -> bool:
        return any(o.is_error for o in self.outcomes)

    def counts(self) -> dict[OutcomeStatus, int]:
        counter = Counter(o.status for o in self.outcomes)
        return {status: counter.get(status, 0) for status in OutcomeStatus}

    def summary(self) -> str:
        counts = self.counts()
        parts = [
            f"{counts[OutcomeStatus.UPDATED]} updated",
            f"{counts[OutcomeStatus.UP_TO_DATE]} up-to-date",
            f"{counts[OutcomeStatus.FETCH_ERROR] + counts[OutcomeStatus.UPSERT_ERROR]} failed",
        ]
        text = ", ".join(parts)
        if self.cancelled:
            text += " (cancelled)"
        return text


class Reconciler:
    """Applies the fetch/compare/upsert workflow to a list of projects."""

    def __init__(self, remote: RemoteService, *, ignore_order: bool = False):
        self.remote = remote
        self.ignore_order = ignore_order

    def reconcile(
        self,
        desired: Iterable[Project],
        cancel: threading.Event | None = None,
        on_outcome: Callable[[Outcome], None] | None = None,
    ) -> ReconcileReport:
        """Reconcile every project in ``desired``.

        ``cancel`` is checked between projects only; once set, the
        remaining projects are left untouched and the report is marked
        as cancelled. ``on_outcome`` is called with each outcome as soon
        as its project finishes.
        """
        report = ReconcileReport()

        for project in desired:
            if cancel is not None and cancel.is_set():
                logger.warning("Reconciliation cancelled before project {}", project.name)
                report.cancelled = True
                break
            outcome = self.reconcile_one(project)
            report.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        return report

    def reconcile_one(self, project: Project) -> Outcome:
        """Run a single project to its terminal outcome."""
        logger.debug("Fetching remote state for {}", project.name)
        try:
            remote = self.remote.fetch(project.name)
        except Exception as e:
            logger.warning("Fetching {} failed: {}", project.name, e)
            return Outcome(project.name, OutcomeStatus.FETCH_ERROR, detail=str(e))

        if not projects_differ(project, remote, ignore_order=self.ignore_order):
            logger.debug("{} matches remote state", project.name)
            return Outcome(project.name, OutcomeStatus.UP_TO_DATE)

        logger.debug("{} differs from remote state, upserting", project.name)
        try:
            self.remote.upsert(project)
        except Exception as e:
            logger.warning("Upserting {} failed: {}", project.name, e)
            return Outcome(project.name, OutcomeStatus.UPSERT_ERROR, detail=str(e))

        return Outcome(project.name, OutcomeStatus.UPDATED)


def reconcile(
    desired: Iterable[Project],
    remote: RemoteService,
    *,
    ignore_order: bool = False,
    cancel: threading.Event | None = None,
) -> list[Outcome]:
    """Reconcile ``desired`` against ``remote`` and return one outcome per project."""
    report = Reconciler(remote, ignore_order=ignore_order).reconcile(desired, cancel=cancel)
    return report.outcomes
