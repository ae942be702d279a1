from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Diagnostics
@dataclass
class ErrorMessage:
    text: str
    file_name: Optional[str] = None  # Set when the problem comes from global.json
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based
