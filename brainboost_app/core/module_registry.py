"""Utilities for declaratively registering application modules.

Each module package exposes a blueprint and a ``module_metadata`` dict. The
registry imports the package, honours its ``enabled`` flag and mounts the
blueprint at the metadata's ``url_prefix`` unless the definition overrides it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a blueprint-backed module is registered with the app."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None

    def load(self) -> tuple[Blueprint, Dict[str, Any]]:
        """Import the module and return its blueprint and metadata."""

        module = import_string(self.import_path)
        blueprint = getattr(module, self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        metadata = dict(getattr(module, "module_metadata", None) or {})
        return blueprint, metadata


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Register every enabled module with the Flask app."""

    for definition in modules:
        blueprint, metadata = definition.load()
        if not metadata.get("enabled", True):
            app.logger.info("Module %s is disabled, skipping", definition.import_path)
            continue
        url_prefix = definition.url_prefix or metadata.get("url_prefix")
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        app.logger.debug(
            "Registered module %s (%s) at prefix %s",
            metadata.get("name", blueprint.name),
            definition.import_path,
            url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in BrainBoost modules."""

    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("brainboost_app.modules.quiz", "quiz_bp"),
)
