import unittest

from roomshell.core.history import HistoryJournal
from roomshell.core.registry import DoorRegistry
from roomshell.core.scene import Scene
from roomshell.errors import UnknownEntityError
from roomshell.models import DoorOperation, HistoryAction, Vector3, VolumeKind, make_box
from tests.helpers import moved


class TestScene(unittest.TestCase):
    def setUp(self):
        self.history = HistoryJournal()
        self.scene = Scene(self.history)

    def test_create_records_history(self):
        volume = self.scene.create_volume("Box", VolumeKind.MESH, mesh=make_box(Vector3.one()))
        self.assertTrue(volume.id.startswith("mesh-"))
        entries = self.history.entries(volume.id)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].action, HistoryAction.CREATED)

    def test_unknown_id_raises(self):
        with self.assertRaises(UnknownEntityError) as ctx:
            self.scene.get("wall-99")
        self.assertIn("wall-99", str(ctx.exception))
        self.assertIsNone(self.scene.find("wall-99"))

    def test_destroy_is_recursive(self):
        group = self.scene.create_volume("Group", VolumeKind.CONTAINER)
        child = self.scene.create_volume("Child", VolumeKind.CONTAINER, parent_id=group.id)
        leaf = self.scene.create_volume("Leaf", VolumeKind.MESH, parent_id=child.id)

        destroyed = self.scene.destroy(group.id)
        self.assertEqual(destroyed, [leaf.id, child.id, group.id])
        self.assertEqual(self.scene.volumes(), [])
        destroyed_entries = [e for e in self.history.entries() if e.action == HistoryAction.DESTROYED]
        self.assertEqual(len(destroyed_entries), 3)

    def test_mutations_are_recorded(self):
        volume = self.scene.create_volume("Box", VolumeKind.MESH, mesh=make_box(Vector3.one()))
        self.scene.set_active(volume.id, False)
        self.scene.set_renderer_enabled(volume.id, False)
        self.scene.set_transform(volume.id, moved(x=3))

        fields = [e.field for e in self.history.entries(volume.id) if e.action == HistoryAction.MUTATED]
        self.assertEqual(fields, ["active", "renderer_enabled", "transform"])
        self.assertAlmostEqual(volume.mesh.world_bounds().center.x, 3.0)

    def test_cannot_parent_under_descendant(self):
        parent = self.scene.create_volume("Parent", VolumeKind.CONTAINER)
        child = self.scene.create_volume("Child", VolumeKind.CONTAINER, parent_id=parent.id)
        with self.assertRaises(ValueError):
            self.scene.set_parent(parent.id, child.id)
        self.assertTrue(self.scene.is_descendant_of(child.id, parent.id))

    def test_find_root_by_name(self):
        doors = self.scene.create_volume("Doors", VolumeKind.CONTAINER)
        self.scene.create_volume("Doors", VolumeKind.CONTAINER, parent_id=doors.id)
        self.assertEqual(self.scene.find_root_by_name("Doors").id, doors.id)
        self.assertIsNone(self.scene.find_root_by_name("Rooms"))


class TestDoorRegistry(unittest.TestCase):
    def test_register_and_lookup(self):
        registry = DoorRegistry()
        operation = registry.register(DoorOperation(door_id="mesh-1", container_id="container-2"))
        self.assertIs(registry.get("mesh-1"), operation)
        self.assertIn("mesh-1", registry)

        registry.unregister("mesh-1")
        self.assertIsNone(registry.get("mesh-1"))
        self.assertEqual(len(registry), 0)

    def test_operations_referencing(self):
        registry = DoorRegistry()
        a = registry.register(DoorOperation(door_id="a", original_walls=["w1"], new_walls=["w9"]))
        b = registry.register(DoorOperation(door_id="b", original_walls=["w1"], new_walls=["w8"]))
        self.assertEqual(registry.operations_referencing("w1"), [a, b])
        self.assertEqual(registry.operations_referencing("w8"), [b])

    def test_pairs_change_together(self):
        operation = DoorOperation(door_id="a")
        operation.append_pair("w1", "w2")
        self.assertEqual(operation.pairs(), [("w1", "w2")])
        with self.assertRaises(ValueError):
            operation.replace_pairs(["w1"], [])
        self.assertEqual(operation.pairs(), [("w1", "w2")])
        operation.clear_pairs()
        self.assertEqual(operation.pairs(), [])

    def test_clear_records_history(self):
        history = HistoryJournal()
        registry = DoorRegistry(history)
        registry.register(DoorOperation(door_id="a"))
        registry.clear()
        self.assertEqual([e.action for e in history.entries()], [HistoryAction.CREATED, HistoryAction.DESTROYED])


if __name__ == "__main__":
    unittest.main()
