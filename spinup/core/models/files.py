"""
File download operations.

Each operation downloads its files into one base directory and may run
an ``after_complete`` command once all of them have landed.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from spinup.core.models.command import CustomCommand


class FileDownloadDefinition(BaseModel):
    """One transfer: ``source`` URL → ``target`` file name under the base dir."""

    source: str
    target: str


class FileDownloadOperation(BaseModel):
    """A group of downloads sharing a base directory."""

    base_dir: str | None = None
    after_complete: CustomCommand | None = None
    files: list[FileDownloadDefinition] = Field(default_factory=list)

    def download_target_base(self) -> Path | None:
        """Resolve the directory files are written to.

        Order: explicit ``base_dir``, then the current working directory,
        then the home directory.  A leading ``~`` is replaced by the
        home directory.
        """
        if self.base_dir:
            path = Path(self.base_dir)
        else:
            try:
                path = Path.cwd()
            except OSError:
                try:
                    path = Path.home()
                except RuntimeError:
                    return None
        return _expand_home(path)


def _expand_home(path: Path) -> Path | None:
    if path.parts and path.parts[0] == "~":
        try:
            return Path.home().joinpath(*path.parts[1:])
        except RuntimeError:
            return None
    return path
