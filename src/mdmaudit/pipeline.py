# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate discovery, extraction, indexing and duplicate detection."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from pathlib import Path

from .config.models import Config
from .detection import DuplicateSummary, detect_duplicates, summarize
from .discovery import DocumentScanner, relative_posix
from .errors import AnalysisCancelled, AnalysisRootError, DocumentParseError
from .extraction.adapters import AdapterRegistry
from .index import CorpusIndex
from .io import load_document
from .metadata import MetadataResolver
from .models import DuplicateEntry, FileWarning, SettingRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Records extracted from one document, or the reason it was skipped."""

    source_file: str
    records: tuple[SettingRecord, ...] = ()
    warning: FileWarning | None = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of a full pipeline run."""

    root: Path
    files: tuple[str, ...]
    record_count: int
    duplicates: tuple[DuplicateEntry, ...]
    warnings: tuple[FileWarning, ...] = ()

    @property
    def summary(self) -> DuplicateSummary:
        """Return conflict/redundancy counts for the detected duplicates."""

        return summarize(self.duplicates)

    @property
    def has_conflicts(self) -> bool:
        """Return ``True`` when at least one duplicate disagrees on its value."""

        return any(entry.has_conflict for entry in self.duplicates)


@dataclass(slots=True)
class AnalysisPipeline:
    """Run one analysis pass over every document below ``root``.

    Documents are parsed on a bounded thread pool. The calling thread is the
    only writer to the :class:`CorpusIndex` and consumes results in discovery
    order, so the output does not depend on which worker finishes first.
    Detection starts only once every document has been indexed.
    """

    root: Path
    config: Config = field(default_factory=Config)
    resolver: MetadataResolver | None = None
    registry: AdapterRegistry | None = None
    cancel_event: threading.Event | None = None
    _metadata: MetadataResolver = field(init=False)
    _adapters: AdapterRegistry = field(init=False)

    def __post_init__(self) -> None:
        self._metadata = self.resolver or MetadataResolver(suffix=self.config.discovery.metadata_suffix)
        if self.registry is not None:
            self._adapters = self.registry
        else:
            extraction = self.config.extraction
            self._adapters = AdapterRegistry.default(
                separator=extraction.path_separator,
                compliance_excluded_keys=extraction.compliance_excluded_keys,
                payload_excluded_keys=extraction.payload_excluded_keys,
            )

    def run(self) -> AnalysisResult:
        """Analyse every document and return the ranked duplicates.

        Returns:
            AnalysisResult: Files processed, warnings and duplicate entries.

        Raises:
            AnalysisRootError: If the root directory does not exist.
            AnalysisCancelled: If ``cancel_event`` is set before detection.
        """

        root = self.root.expanduser()
        if not root.is_dir():
            raise AnalysisRootError(root)
        root = root.resolve()
        files = DocumentScanner(root, self.config.discovery).documents()
        LOGGER.debug("discovered %d candidate documents under %s", len(files), root)

        index = CorpusIndex()
        warnings: list[FileWarning] = []
        for outcome in self._outcomes(root, files):
            if outcome.warning is not None:
                warnings.append(outcome.warning)
            index.extend(outcome.records)

        self._check_cancelled()
        duplicates = detect_duplicates(index)
        return AnalysisResult(
            root=root,
            files=tuple(relative_posix(path, root) for path in files),
            record_count=index.record_count,
            duplicates=tuple(duplicates),
            warnings=tuple(warnings),
        )

    def process_file(self, root: Path, path: Path) -> FileOutcome:
        """Load ``path`` and return its attributed setting records.

        Args:
            root: Resolved analysis root.
            path: Document to process.

        Returns:
            FileOutcome: Records for the file, or a warning when it could not
            be parsed.
        """

        source_file = relative_posix(path, root)
        try:
            document = load_document(path)
        except DocumentParseError as exc:
            LOGGER.info("skipping %s: %s", source_file, exc.reason)
            return FileOutcome(source_file, warning=FileWarning(source_file=source_file, message=exc.reason))
        except OSError as exc:
            reason = exc.strerror or str(exc)
            LOGGER.info("skipping %s: %s", source_file, reason)
            return FileOutcome(source_file, warning=FileWarning(source_file=source_file, message=reason))

        records = self._adapters.extract(document, context=source_file)
        if not records:
            return FileOutcome(source_file)
        metadata = self._metadata.resolve(path)
        return FileOutcome(source_file, tuple(record.with_source(source_file, metadata) for record in records))

    def _outcomes(self, root: Path, files: Sequence[Path]) -> Iterator[FileOutcome]:
        execution = self.config.execution
        jobs = max(1, min(execution.jobs, len(files)))
        if jobs == 1 and execution.file_timeout is None:
            for path in files:
                self._check_cancelled()
                yield self.process_file(root, path)
            return

        executor = self._executor(jobs)
        futures = [executor.submit(self.process_file, root, path) for path in files]
        try:
            for position, path in enumerate(files):
                self._check_cancelled()
                try:
                    outcome = futures[position].result(timeout=execution.file_timeout)
                except FutureTimeoutError:
                    outcome = self._timed_out(root, path)
                    executor = self._replace_executor(executor, jobs, root, files, futures, position + 1)
                yield outcome
        finally:
            # Workers still busy with a timed-out document are abandoned, not joined.
            executor.shutdown(wait=False, cancel_futures=True)

    def _executor(self, jobs: int) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="mdmaudit")

    def _replace_executor(
        self,
        executor: ThreadPoolExecutor,
        jobs: int,
        root: Path,
        files: Sequence[Path],
        futures: list[Future[FileOutcome]],
        start: int,
    ) -> ThreadPoolExecutor:
        """Move documents still queued behind a stuck worker onto a fresh pool.

        Args:
            executor: Pool holding the worker that timed out.
            jobs: Worker count for the replacement pool.
            root: Resolved analysis root.
            files: Documents in discovery order.
            futures: Futures aligned with ``files``; updated in place.
            start: Index of the first document not consumed yet.

        Returns:
            ThreadPoolExecutor: The pool now running the requeued documents.
        """

        executor.shutdown(wait=False, cancel_futures=True)
        replacement = self._executor(jobs)
        for position in range(start, len(files)):
            if futures[position].cancelled():
                futures[position] = replacement.submit(self.process_file, root, files[position])
        return replacement

    def _timed_out(self, root: Path, path: Path) -> FileOutcome:
        source_file = relative_posix(path, root)
        message = f"timed out after {self.config.execution.file_timeout:g}s"
        LOGGER.info("skipping %s: %s", source_file, message)
        return FileOutcome(source_file, warning=FileWarning(source_file=source_file, message=message))

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise AnalysisCancelled("analysis aborted before duplicate detection")


def analyze(root: Path, config: Config | None = None) -> AnalysisResult:
    """Run the pipeline over ``root`` with ``config`` (defaults when omitted)."""

    return AnalysisPipeline(root=root, config=config or Config()).run()


__all__ = ["AnalysisPipeline", "AnalysisResult", "FileOutcome", "analyze"]
