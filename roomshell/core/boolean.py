"""Boolean subtraction capability: a thin guard around an external CSG engine."""

from __future__ import annotations
import importlib
import logging
from typing import Callable

from roomshell.models import SolidMesh

logger = logging.getLogger(__name__)

SubtractFn = Callable[[SolidMesh, SolidMesh], SolidMesh]


class BooleanCapability:
    """
    Wraps a `subtract(target, cutter) -> SolidMesh` callable.

    Unavailability and engine faults both surface as `None` so callers only
    ever see "cut" or "not cut".
    """

    def __init__(self, engine: SubtractFn | None = None, name: str = "") -> None:
        self._engine = engine
        self.name = name or (getattr(engine, "__name__", "") if engine else "")

    @property
    def available(self) -> bool:
        return self._engine is not None

    def subtract(self, target: SolidMesh, cutter: SolidMesh) -> SolidMesh | None:
        if self._engine is None:
            logger.warning("Boolean engine unavailable; cannot subtract")
            return None
        try:
            result = self._engine(target, cutter)
        except Exception:
            logger.exception("Boolean engine %s failed", self.name or "<anonymous>")
            return None
        if not isinstance(result, SolidMesh):
            logger.warning(
                "Boolean engine %s returned %s instead of a mesh",
                self.name or "<anonymous>", type(result).__name__,
            )
            return None
        return result


def resolve_boolean_engine(reference: str | None) -> BooleanCapability:
    """
    Resolve a ``module:callable`` reference once, at startup.

    An empty reference or any import/lookup failure gives an unavailable
    capability rather than an error.
    """
    if not reference:
        logger.info("No boolean engine configured; door cuts are disabled")
        return BooleanCapability()

    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        logger.warning("Boolean engine reference %r is not of the form module:callable", reference)
        return BooleanCapability()

    try:
        module = importlib.import_module(module_name)
        engine = getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        logger.warning("Boolean engine %s could not be loaded: %s", reference, exc)
        return BooleanCapability()

    if not callable(engine):
        logger.warning("Boolean engine %s is not callable", reference)
        return BooleanCapability()

    logger.info("Using boolean engine %s", reference)
    return BooleanCapability(engine, name=reference)
