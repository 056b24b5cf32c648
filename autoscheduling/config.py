"""Centralized knobs for the engine. Tweak values here (or in the YAML file) instead of touching the planner."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from autoscheduling.domain.types import SchedulingConstraints, ShiftRequirement

DEFAULT_DB_URL = "sqlite:///autoscheduling.db"


@dataclass(frozen=True)
class ScoringPolicy:
    """Weights used by the employee scorer and the confidence score."""

    efficiency_weight: float = 0.2
    reliability_weight: float = 0.2
    experience_weight: float = 0.2
    cost_weight: float = 0.2
    neutral_cost_score: float = 50.0
    cost_ceiling_rate: float = 100.0
    preferred_slot_bonus: float = 20.0
    preferred_position_bonus: float = 20.0
    max_score: float = 100.0
    experience_points: Dict[str, float] = field(
        default_factory=lambda: {"junior": 20.0, "mid": 50.0, "senior": 80.0}
    )
    confidence_reliability_weight: float = 0.6
    confidence_experience_weight: float = 0.4
    priority_weights: Dict[str, int] = field(
        default_factory=lambda: {"critical": 4, "high": 3, "medium": 2, "low": 1}
    )


@dataclass(frozen=True)
class MetricsPolicy:
    """Measurement constants; independent of the planning constraints."""

    daily_overtime_hours: float = 8.0
    weekly_overtime_hours: float = 40.0
    market_hourly_rate: float = 15.0
    rate_dispersion_penalty: float = 50.0
    critical_conflict_penalty: float = 10.0
    budget_info_ratio: float = 0.9


@dataclass(frozen=True)
class RecommendationPolicy:
    min_coverage_rate: float = 90.0
    max_overtime_hours: float = 20.0
    min_satisfaction_score: float = 70.0
    min_cost_efficiency_score: float = 60.0


@dataclass(frozen=True)
class EngineConfig:
    constraints: SchedulingConstraints = field(default_factory=SchedulingConstraints)
    scoring: ScoringPolicy = field(default_factory=ScoringPolicy)
    metrics: MetricsPolicy = field(default_factory=MetricsPolicy)
    recommendations: RecommendationPolicy = field(default_factory=RecommendationPolicy)
    fallback_requirements: List[Dict[str, Any]] = field(default_factory=list)
    db_url: str = DEFAULT_DB_URL

    def fallback_for(self, start_date, end_date) -> List[ShiftRequirement]:
        """
        Build the conservative requirement set used when loading fails.

        Entries without a ``date`` are placed on ``start_date``.
        """
        out = []
        for raw in self.fallback_requirements:
            row = dict(raw)
            row.setdefault("date", start_date)
            out.append(ShiftRequirement(**row))
        return out


def _build(cls, data: Mapping[str, Any] | None, section: str):
    data = dict(data or {})
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in '{section}' config section: {unknown}")
    return cls(**data)


def config_from_dict(raw: Mapping[str, Any] | None) -> EngineConfig:
    """Validate a parsed config mapping and build an ``EngineConfig``."""
    raw = dict(raw or {})
    sections = {"constraints", "scoring", "metrics", "recommendations", "fallback_requirements", "db_url"}
    unknown = sorted(set(raw) - sections)
    if unknown:
        raise ValueError(f"Unknown top-level config keys: {unknown}")

    fallback = raw.get("fallback_requirements") or []
    if not isinstance(fallback, list):
        raise ValueError("'fallback_requirements' must be a list")

    cfg = EngineConfig(
        constraints=_build(SchedulingConstraints, raw.get("constraints"), "constraints"),
        scoring=_build(ScoringPolicy, raw.get("scoring"), "scoring"),
        metrics=_build(MetricsPolicy, raw.get("metrics"), "metrics"),
        recommendations=_build(RecommendationPolicy, raw.get("recommendations"), "recommendations"),
        fallback_requirements=[dict(r) for r in fallback],
        db_url=str(raw.get("db_url") or DEFAULT_DB_URL),
    )
    # Fail fast on malformed fallback rows rather than at load-failure time
    for row in cfg.fallback_requirements:
        sample = dict(row)
        sample.setdefault("date", "2000-01-03")
        ShiftRequirement(**sample)
    return cfg


def load_config(path: str | Path | None = None) -> EngineConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Path to ``.yaml``/``.yml``/``.json``; None returns defaults

    Returns:
        EngineConfig
    """
    if path is None:
        return EngineConfig()
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() == ".json":
        raw = json.loads(text)
    elif p.suffix.lower() in {".yaml", ".yml"}:
        raw = yaml.safe_load(text)
    else:
        raise ValueError(f"Unsupported config format: {p.suffix} (use .yaml, .yml or .json)")
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping, got {type(raw).__name__}")
    return config_from_dict(raw)
