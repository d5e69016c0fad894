"""Hot-reload engine for terminal dashboards: loading, watching, state, events and error overlays."""

__version__ = "0.2.0"