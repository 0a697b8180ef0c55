"""
Concurrent download orchestrator.

Every download operation runs concurrently with the others, and every
file inside an operation is fetched concurrently with its siblings.
An operation's ``after_complete`` command runs through the command
runner only after all of its transfers succeeded.

Failure policy is fail-together: all operations run to completion and
the failures are reported at the end as one ``DownloadOperationsError``.
Package and command installs are fail-fast instead (see installers.py).
"""

from __future__ import annotations

import concurrent.futures
import http.client
import logging
import urllib.error
import urllib.request
from collections.abc import Callable, Sequence
from pathlib import Path

from spinup import __version__
from spinup.core.engine.runner import CommandRunner
from spinup.core.errors import (
    DirectoryCreationError,
    DownloadFailedError,
    DownloadOperationsError,
    SpinupError,
    WriteFailedError,
)
from spinup.core.models.files import FileDownloadDefinition, FileDownloadOperation
from spinup.core.models.system import SystemDetails

logger = logging.getLogger(__name__)

USER_AGENT = f"spinup/{__version__}"
DOWNLOAD_TIMEOUT = 60

Fetcher = Callable[[str], bytes]


def fetch(source: str, timeout: int = DOWNLOAD_TIMEOUT) -> bytes:
    """GET ``source`` and return the full body.

    Any scheme urllib understands works (``http``, ``https``, ``file``).
    """
    req = urllib.request.Request(source, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return resp.read()


def prepare_target_dir(operation: FileDownloadOperation) -> Path:
    """Resolve the operation's base directory and create it if needed."""
    target = operation.download_target_base()
    if target is None:
        raise DirectoryCreationError(
            operation.base_dir or "<unset>", "unable to resolve target directory",
        )

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(str(target), str(e)) from e

    logger.debug("Download target directory: %s", target)
    return target


def download_target(
    definition: FileDownloadDefinition,
    base_path: Path,
    fetcher: Fetcher = fetch,
) -> Path:
    """Fetch one file and write it under ``base_path``."""
    try:
        body = fetcher(definition.source)
    except (urllib.error.URLError, http.client.HTTPException, ValueError, OSError) as e:
        raise DownloadFailedError(definition.source, str(e)) from e

    file_path = base_path / definition.target
    logger.debug("Writing %d bytes from %s to %s", len(body), definition.source, file_path)
    try:
        file_path.write_bytes(body)
    except OSError as e:
        raise WriteFailedError(str(file_path), str(e)) from e

    return file_path


def execute_download_operation(
    operation: FileDownloadOperation,
    system_details: SystemDetails,
    runner: CommandRunner,
    *,
    fetcher: Fetcher = fetch,
    max_workers: int | None = None,
) -> list[Path]:
    """Download every file of one operation, then run ``after_complete``.

    Returns:
        Paths written, in definition order.

    Raises:
        DirectoryCreationError: Base directory could not be prepared.
        DownloadFailedError / WriteFailedError: The first failed transfer,
            in definition order.  ``after_complete`` is skipped.
        SpinupError: ``after_complete`` itself failed.
    """
    target = prepare_target_dir(operation)

    written: list[Path | None] = [None] * len(operation.files)
    errors: list[tuple[int, SpinupError]] = []

    if operation.files:
        workers = _pool_size(len(operation.files), max_workers)
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(download_target, fl, target, fetcher): index
                for index, fl in enumerate(operation.files)
            }
            for future in concurrent.futures.as_completed(futures):
                index = futures[future]
                try:
                    written[index] = future.result()
                except SpinupError as e:
                    logger.error("%s", e)
                    errors.append((index, e))

    if errors:
        errors.sort(key=lambda pair: pair[0])
        if operation.after_complete is not None:
            logger.warning(
                "Skipping post-download command for %s: %d transfer(s) failed",
                target,
                len(errors),
            )
        raise errors[0][1]

    logger.info("Downloaded %d file(s) to %s", len(operation.files), target)

    if operation.after_complete is not None:
        runner.run(operation.after_complete, system_details)

    return [p for p in written if p is not None]


def execute_download_operations(
    operations: Sequence[FileDownloadOperation] | None,
    system_details: SystemDetails,
    runner: CommandRunner,
    *,
    fetcher: Fetcher = fetch,
    max_workers: int | None = None,
) -> list[Path]:
    """Run all download operations concurrently (fail-together).

    No operations is success with no work done.

    Raises:
        DownloadOperationsError: One or more operations failed; carries
            every operation's error in configuration order.
    """
    if not operations:
        logger.debug("No file downloads configured")
        return []

    results: list[list[Path]] = [[] for _ in operations]
    errors: list[tuple[int, SpinupError]] = []

    workers = _pool_size(len(operations), max_workers)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(
                execute_download_operation,
                op,
                system_details,
                runner,
                fetcher=fetcher,
                max_workers=max_workers,
            ): index
            for index, op in enumerate(operations)
        }
        for future in concurrent.futures.as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except SpinupError as e:
                errors.append((index, e))

    if errors:
        errors.sort(key=lambda pair: pair[0])
        raise DownloadOperationsError([e for _, e in errors])

    return [path for paths in results for path in paths]


def _pool_size(units: int, cap: int | None) -> int:
    if cap is None or cap <= 0:
        return max(units, 1)
    return max(min(units, cap), 1)
