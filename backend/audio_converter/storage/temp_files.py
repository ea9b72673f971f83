from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempFilePair:
    file_id: str
    input_path: str
    output_path: str


class TempFileStore:
    """Hands out per-request input/output paths inside a scratch directory."""

    def __init__(self, root_dir: str) -> None:
        self._root_dir = root_dir
        os.makedirs(self._root_dir, exist_ok=True)

    @property
    def root_dir(self) -> str:
        return self._root_dir

    def allocate(self, input_ext: str, output_format: str) -> TempFilePair:
        file_id = str(uuid.uuid4())
        input_name = f"{file_id}_input.{input_ext}" if input_ext else f"{file_id}_input"
        return TempFilePair(
            file_id=file_id,
            input_path=os.path.join(self._root_dir, input_name),
            output_path=os.path.join(self._root_dir, f"{file_id}_output.{output_format}"),
        )

    def release(self, pair: TempFilePair) -> int:
        removed = 0
        for path in (pair.input_path, pair.output_path):
            try:
                if os.path.exists(path):
                    os.remove(path)
                    removed += 1
            except OSError as e:
                logger.warning("Cleanup error for %s: %s", path, e)
        return removed
