"""Persist and load merge resolution profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict


@dataclass
class ResolutionProfile:
    field_resolutions: Dict[str, str] = field(default_factory=dict)
    merge_career_stats: bool = False

    @classmethod
    def load(cls, path: Path) -> "ResolutionProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            field_resolutions=data.get("field_resolutions", {}),
            merge_career_stats=bool(data.get("merge_career_stats", False)),
        )

    def save(self, path: Path) -> None:
        payload = {
            "field_resolutions": self.field_resolutions,
            "merge_career_stats": self.merge_career_stats,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def with_overrides(self, overrides: Dict[str, str]) -> "ResolutionProfile":
        return ResolutionProfile(
            field_resolutions={**self.field_resolutions, **overrides},
            merge_career_stats=self.merge_career_stats,
        )
