from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .types import Result, SolveOptions


class SolverBackend(ABC):
    @abstractmethod
    def solve(self, image_path: str | Path, options: Optional[SolveOptions] = None) -> Result:
        pass

    @abstractmethod
    def solve_bytes(self, data: bytes, fmt: str, options: Optional[SolveOptions] = None) -> Result:
        pass

    def is_available(self) -> dict:
        """Return a dict with 'ok' (bool) and 'detail' (str) for doctor checks."""
        return {"ok": False, "detail": "not implemented"}
