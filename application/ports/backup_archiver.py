from pathlib import Path
from typing import Protocol


class BackupArchiver(Protocol):
    def archive(self, source_dir: Path, archive_path: Path) -> Path:
        """Pack every file below ``source_dir`` into a single archive at ``archive_path``."""
        ...
