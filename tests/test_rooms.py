import unittest

from roomshell.errors import InvalidGeometryError, UnknownEntityError
from roomshell.models import (
    BackDirection, CornerDirection, ElementSize, RoomSettings, VolumeKind, WallDirection,
)
from roomshell.core.boolean import BooleanCapability
from roomshell.core.session import EditingSession
from tests.helpers import copy_engine, door_box, make_session, square_room


class TestRoomBuild(unittest.TestCase):
    def setUp(self):
        self.session = make_session()
        self.scene = self.session.scene
        self.mesh = self.session.add_mesh(square_room(), "Cube")

    def build(self):
        result = self.session.build_room(self.mesh.id)
        self.assertTrue(result.success)
        return self.session.rooms.get(result.entity_id)

    def test_structure(self):
        room = self.build()
        container = self.scene.get(room.id)
        self.assertEqual(container.name, "Room")
        self.assertEqual(self.mesh.parent_id, room.id)
        self.assertEqual(self.mesh.name, "Room Mesh")
        self.assertFalse(self.mesh.renderer_enabled)

        self.assertEqual(len(room.wall_ids), 4)
        self.assertEqual(len(room.corner_ids), 4)
        self.assertEqual(self.scene.get(room.floor_id).kind, VolumeKind.FLOOR)
        self.assertEqual(self.scene.get(room.ceiling_id).kind, VolumeKind.CEILING)
        for wall_id in room.wall_ids:
            self.assertEqual(self.scene.get(wall_id).parent_id, room.walls_group_id)

    def test_wall_directions(self):
        room = self.build()
        directions = {self.scene.get(w).wall_direction for w in room.wall_ids}
        self.assertEqual(directions, set(WallDirection))
        corners = {self.scene.get(c).corner_direction for c in room.corner_ids}
        self.assertEqual(corners, set(CornerDirection))

    def test_back_walls_from_north_east(self):
        room = self.build()
        back = {self.scene.get(w).wall_direction for w in room.back_wall_ids}
        self.assertEqual(back, {WallDirection.SOUTH, WallDirection.WEST})
        back_corners = {self.scene.get(c).corner_direction for c in room.back_corner_ids}
        self.assertEqual(
            back_corners,
            {CornerDirection.SOUTH_WEST, CornerDirection.SOUTH_EAST, CornerDirection.NORTH_WEST},
        )

    def test_wall_heights(self):
        room = self.build()
        for wall_id in room.wall_ids:
            volume = self.scene.get(wall_id)
            bounds = volume.world_bounds()
            self.assertAlmostEqual(bounds.min.y, 0.0)
            expected = 4.0 if volume.is_back else 1.0
            self.assertAlmostEqual(bounds.size.y, expected)

    def test_wall_box_spans_wall(self):
        room = self.build()
        south = next(
            self.scene.get(w) for w in room.wall_ids
            if self.scene.get(w).wall_direction == WallDirection.SOUTH
        )
        bounds = south.world_bounds()
        self.assertAlmostEqual(bounds.size.x, 10.0)
        self.assertAlmostEqual(bounds.size.z, 0.2)
        self.assertAlmostEqual(bounds.center.z, 0.0)

    def test_floor_and_ceiling_slabs(self):
        room = self.build()
        floor = self.scene.get(room.floor_id).world_bounds()
        ceiling = self.scene.get(room.ceiling_id).world_bounds()
        self.assertAlmostEqual(floor.min.y, 0.0)
        self.assertAlmostEqual(floor.max.y, 0.1)
        self.assertAlmostEqual(ceiling.min.y, 2.9)
        self.assertAlmostEqual(ceiling.max.y, 3.0)
        self.assertAlmostEqual(floor.size.x, 10.0)

    def test_slabs_do_not_share_faces_with_source(self):
        room = self.build()
        floor = self.scene.get(room.floor_id).mesh
        ceiling = self.scene.get(room.ceiling_id).mesh
        source_edges = len(self.mesh.mesh.faces[0].edges)

        floor.faces[0].edges.pop()
        self.assertEqual(len(self.mesh.mesh.faces[0].edges), source_edges)
        self.assertEqual(len(ceiling.faces[0].edges), source_edges)
        self.assertIsNot(floor.faces, self.mesh.mesh.faces)

    def test_rebuild_resets_first(self):
        first = self.build()
        second = self.build()
        self.assertNotEqual(first.id, second.id)
        self.assertFalse(self.scene.exists(first.id))
        self.assertEqual(len(self.session.rooms.rooms()), 1)
        self.assertEqual(len(self.scene.volumes(VolumeKind.WALL)), 4)

    def test_reset(self):
        room = self.build()
        self.session.reset_room(room.id)

        self.assertFalse(self.scene.exists(room.id))
        self.assertIsNone(self.mesh.parent_id)
        self.assertEqual(self.mesh.name, "Cube")
        self.assertTrue(self.mesh.renderer_enabled)
        self.assertTrue(self.mesh.collider_enabled)
        self.assertEqual(self.scene.volumes(VolumeKind.WALL), [])
        self.assertEqual(self.scene.volumes(VolumeKind.FLOOR), [])

    def test_unknown_room(self):
        with self.assertRaises(UnknownEntityError):
            self.session.reset_room("container-404")

    def test_mesh_without_geometry(self):
        group = self.scene.create_volume("Group", VolumeKind.CONTAINER)
        with self.assertRaises(InvalidGeometryError):
            self.session.build_room(group.id)


class TestRoomSettings(unittest.TestCase):
    def test_disabled_floor_makes_every_wall_front(self):
        session = EditingSession(
            settings=RoomSettings(enable_floor=False, enable_ceiling=False),
            boolean=BooleanCapability(copy_engine),
        )
        mesh = session.add_mesh(square_room())
        room = session.rooms.get(session.build_room(mesh.id).entity_id)
        self.assertIsNone(room.floor_id)
        self.assertIsNone(room.ceiling_id)
        self.assertEqual(room.back_wall_ids, [])

    def test_back_direction_changes_back_walls(self):
        session = EditingSession(
            settings=RoomSettings(back_direction=BackDirection.SOUTH_WEST),
            boolean=BooleanCapability(copy_engine),
        )
        mesh = session.add_mesh(square_room())
        room = session.rooms.get(session.build_room(mesh.id).entity_id)
        back = {session.scene.get(w).wall_direction for w in room.back_wall_ids}
        self.assertEqual(back, {WallDirection.NORTH, WallDirection.EAST})

    def test_per_direction_size(self):
        settings = RoomSettings(
            wall_sizes={WallDirection.NORTH: ElementSize(width=1.0, height=2.5, depth=0.5)},
        )
        session = EditingSession(settings=settings, boolean=BooleanCapability(copy_engine))
        mesh = session.add_mesh(square_room())
        room = session.rooms.get(session.build_room(mesh.id).entity_id)
        north = next(
            session.scene.get(w) for w in room.wall_ids
            if session.scene.get(w).wall_direction == WallDirection.NORTH
        )
        bounds = north.world_bounds()
        self.assertAlmostEqual(bounds.size.y, 2.5)
        self.assertAlmostEqual(bounds.size.z, 0.5)


class TestRoomsAndDoors(unittest.TestCase):
    def setUp(self):
        self.session = make_session()
        self.mesh = self.session.add_mesh(square_room(), "Cube")
        self.room_id = self.session.build_room(self.mesh.id).entity_id
        self.door = self.session.add_mesh(door_box(5, 0), "Door")
        self.session.build_door(self.door.id)

    def test_room_reset_drops_door_pairs(self):
        self.session.reset_room(self.room_id)
        operation = self.session.registry.get(self.door.id)
        self.assertEqual(operation.pairs(), [])
        self.assertTrue(self.door.renderer_enabled)
        self.assertEqual(self.session.scene.volumes(VolumeKind.WALL), [])

    def test_rebuilding_room_reapplies_door(self):
        self.session.reset_room(self.room_id)
        result = self.session.build_room(self.mesh.id)

        operation = self.session.registry.get(self.door.id)
        self.assertEqual(len(operation.pairs()), 1)
        original = self.session.scene.get(operation.original_walls[0])
        self.assertEqual(original.room_id, result.entity_id)
        self.assertFalse(original.active)
        self.assertFalse(self.door.renderer_enabled)

    def test_build_room_in_place_reapplies_door(self):
        self.session.build_room(self.mesh.id)
        operation = self.session.registry.get(self.door.id)
        self.assertEqual(len(operation.pairs()), 1)
        self.assertTrue(all(self.session.scene.exists(w) for w in operation.new_walls))

    def test_close_clears_registry(self):
        self.session.close()
        self.assertEqual(len(self.session.registry), 0)


if __name__ == "__main__":
    unittest.main()
