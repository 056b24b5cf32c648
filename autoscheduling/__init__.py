"""Auto-scheduling engine for small service and retail teams.

Modules:
- config: load and validate configuration (YAML or JSON)
- logger: package logging setup
- events: in-process event bus for schedule notifications
- domain: value types, SQLAlchemy models and repositories
- services: time utilities, candidate filter, scoring, conflicts,
  validation, metrics, recommendations and loaders
- engine: greedy planning pass and the generate_optimal_schedule entry point
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "logger",
    "events",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
