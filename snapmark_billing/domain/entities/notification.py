from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    subject: str
    html: str
