"""Shared fixtures: fake boolean engines and mesh builders."""

from roomshell.core.boolean import BooleanCapability
from roomshell.core.session import EditingSession
from roomshell.models import SolidMesh, Transform, Vector3, make_box, make_prism


def copy_engine(target: SolidMesh, cutter: SolidMesh) -> SolidMesh:
    """Stands in for a real CSG engine: the 'cut' wall is a copy of the original."""
    return target.model_copy(deep=True)


def failing_engine(target: SolidMesh, cutter: SolidMesh) -> SolidMesh:
    raise RuntimeError("engine crashed")


def none_engine(target: SolidMesh, cutter: SolidMesh):
    return None


def square_room(size: float = 10.0, height: float = 3.0, base_y: float = 0.0) -> SolidMesh:
    """Room solid spanning x and z from 0 to `size`."""
    outline = [(0.0, 0.0), (size, 0.0), (size, size), (0.0, size)]
    return make_prism(outline, height, base_y=base_y)


def door_box(x: float, z: float, width: float = 1.0, height: float = 2.0, depth: float = 1.0) -> SolidMesh:
    return make_box(
        Vector3(x=width, y=height, z=depth),
        center=Vector3(x=x, y=height * 0.5, z=z),
    )


def moved(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Transform:
    return Transform(position=Vector3(x=x, y=y, z=z))


def make_session(engine=copy_engine) -> EditingSession:
    return EditingSession(boolean=BooleanCapability(engine, name="test"))
