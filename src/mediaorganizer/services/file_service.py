"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Copy executor: performs the finalized copy operations of a run.
Never overwrites an existing destination unless explicitly told to.
"""
import logging
import os
import shutil
from typing import List

from mediaorganizer.core.models import CopyResult, Operation

logger = logging.getLogger(__name__)


class FileService:
    """
    File operations used by the organize command.
    Errors are reported per operation; one failed copy never stops the others.
    """

    @staticmethod
    def copy_file(src: str, dst: str, overwrite: bool = False) -> None:
        """
        Copies src to dst, creating parent directories as needed.

        The destination is created exclusively unless overwrite is set (then truncated).
        Data is flushed to disk before returning and permission bits follow the source
        (a failure to set them is only logged).
        A partially written destination is removed on failure (only when we created it).

        Raises:
            FileExistsError: dst exists and overwrite is False
            OSError: any other I/O failure
        """
        os.makedirs(os.path.dirname(dst) or ".", exist_ok=True)

        mode = "wb" if overwrite else "xb"
        with open(src, "rb") as fsrc:
            src_mode = os.fstat(fsrc.fileno()).st_mode
            with open(dst, mode) as fdst:
                try:
                    shutil.copyfileobj(fsrc, fdst)
                    fdst.flush()
                    os.fsync(fdst.fileno())
                except OSError:
                    if not overwrite:
                        fdst.close()
                        FileService._remove_partial(dst)
                    raise

        try:
            os.chmod(dst, src_mode & 0o7777)
        except OSError as e:
            # Data is already complete and synced
            logger.warning(f"Could not copy permission bits to {dst}: {e}")

    @staticmethod
    def _remove_partial(path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Could not remove partial file {path}: {e}")

    @classmethod
    def execute(cls, operations: List[Operation], overwrite: bool = False) -> List[CopyResult]:
        """Copies every operation, returning one CopyResult per operation in order."""
        results = []
        for op in operations:
            try:
                cls.copy_file(op.source_path, op.destination_path, overwrite=overwrite)
            except FileExistsError:
                logger.error(f"Destination already exists: {op.destination_path}")
                results.append(CopyResult(operation=op, success=False,
                                          error="destination file already exists"))
                continue
            except OSError as e:
                logger.error(f"Failed to copy {op.source_path}: {e}")
                results.append(CopyResult(operation=op, success=False, error=str(e)))
                continue

            logger.info(f"Copied {op.source_path} -> {op.destination_path}")
            results.append(CopyResult(operation=op, success=True))

        return results
