from __future__ import annotations

import zipfile
from pathlib import Path

import structlog

from application.ports.backup_archiver import BackupArchiver
from domain.exceptions import InfrastructureError

logger = structlog.get_logger()


class ZipDirectoryArchiver(BackupArchiver):
    """Pack a directory tree into a deflated zip file.

    Entry names are relative to the parent of the source directory, so
    archiving ``/data/db`` produces entries like ``db/000001.log``.
    """

    def archive(self, source_dir: Path, archive_path: Path) -> Path:
        source_dir = Path(source_dir)
        archive_path = Path(archive_path)
        if not source_dir.is_dir():
            msg = f"Backup source directory does not exist: {source_dir}"
            raise InfrastructureError(msg)

        logger.info("backup_archiving", source_dir=str(source_dir), archive=str(archive_path))
        archive_path.parent.mkdir(parents=True, exist_ok=True)

        files = 0
        try:
            with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for path in sorted(source_dir.rglob("*")):
                    if not path.is_file() or path == archive_path:
                        continue
                    zf.write(path, arcname=path.relative_to(source_dir.parent).as_posix())
                    files += 1
        except OSError as e:
            archive_path.unlink(missing_ok=True)
            msg = f"Failed to archive {source_dir}: {e!s}"
            raise InfrastructureError(msg) from e

        logger.info("backup_archived", archive=str(archive_path), files=files)
        return archive_path
