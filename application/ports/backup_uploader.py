from pathlib import Path
from typing import Protocol


class BackupUploader(Protocol):
    """Port for shipping a local backup archive to remote object storage.

    Implementations resolve endpoints and credentials themselves; the
    application layer only hands over the local file.
    """

    def upload(self, local_path: Path) -> str:
        """Upload the file and return the URL it was written to.

        Raises:
            InfrastructureError: If the upload fails.

        """
        ...
