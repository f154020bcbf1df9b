from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckProStatusOutput:
    user_id: str
    is_pro: bool
