import math
import unittest

from roomshell.core.raycast import SceneRayCaster
from roomshell.core.scene import Scene
from roomshell.core.silhouette import BackfaceSilhouetteClassifier, isometric_view_direction
from roomshell.models import (
    BackDirection, DetectedCorner, DetectedWall, Transform, Vector3, VolumeKind,
    make_box, make_prism,
)


def _v(x, z):
    return Vector3(x=x, y=0.0, z=z)


class TestRayCaster(unittest.TestCase):
    def setUp(self):
        self.scene = Scene()
        self.box = self.scene.create_volume("Box", VolumeKind.MESH, mesh=make_box(Vector3(x=2, y=2, z=2)))
        self.caster = SceneRayCaster(self.scene)

    def test_hit_distance(self):
        hits = self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100)
        self.assertEqual(len(hits), 1)
        self.assertEqual(hits[0].entity_id, self.box.id)
        self.assertAlmostEqual(hits[0].distance, 9.0)

    def test_max_distance(self):
        self.assertEqual(self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 5), [])

    def test_miss(self):
        self.assertEqual(self.caster.cast(Vector3(x=5, z=-10), Vector3(z=1), 100), [])

    def test_inactive_and_colliderless_volumes_are_skipped(self):
        self.scene.set_active(self.box.id, False)
        self.assertEqual(self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100), [])
        self.scene.set_active(self.box.id, True)
        self.scene.set_collider_enabled(self.box.id, False)
        self.assertEqual(self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100), [])

    def test_hits_are_ordered_by_distance(self):
        far = self.scene.create_volume(
            "Far", VolumeKind.MESH,
            mesh=make_box(Vector3(x=2, y=2, z=2), center=Vector3(z=10)),
        )
        hits = self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100)
        self.assertEqual([h.entity_id for h in hits], [self.box.id, far.id])

    def test_hit_point(self):
        hit = self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100)[0]
        self.assertAlmostEqual(hit.point.x, 0.3)
        self.assertAlmostEqual(hit.point.y, 0.2)
        self.assertAlmostEqual(hit.point.z, -1.0)

    def test_moved_volume_is_recast(self):
        self.assertEqual(len(self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100)), 1)
        self.scene.set_transform(self.box.id, Transform(position=Vector3(x=20)))
        self.assertEqual(self.caster.cast(Vector3(x=0.3, y=0.2, z=-10), Vector3(z=1), 100), [])

    def test_concave_outline_has_no_hit_in_notch(self):
        outline = [(0, 0), (4, 0), (4, 2), (2, 2), (2, 4), (0, 4)]
        slab = self.scene.create_volume("Slab", VolumeKind.FLOOR, mesh=make_prism(outline, 0.1, base_y=-20))
        down = Vector3(y=-1)
        self.assertEqual(self.caster.cast(Vector3(x=3, y=-15, z=3), down, 100), [])
        hits = self.caster.cast(Vector3(x=1, y=-15, z=3), down, 100)
        self.assertEqual([h.entity_id for h in hits], [slab.id])
        self.assertAlmostEqual(hits[0].distance, 4.9)


class TestBackfaceSilhouette(unittest.TestCase):
    """10 x 10 room on the origin with a 0.1 floor slab, viewed from the north-east."""

    def setUp(self):
        self.scene = Scene()
        outline = [(0, 0), (10, 0), (10, 10), (0, 10)]
        self.floor = self.scene.create_volume("Floor", VolumeKind.FLOOR, mesh=make_prism(outline, 0.1))
        self.classifier = BackfaceSilhouetteClassifier(SceneRayCaster(self.scene))

        self.south = DetectedWall.between(_v(0, 0), _v(10, 0), Vector3(z=-1))
        self.east = DetectedWall.between(_v(10, 0), _v(10, 10), Vector3(x=1))
        self.north = DetectedWall.between(_v(10, 10), _v(0, 10), Vector3(z=1))
        self.west = DetectedWall.between(_v(0, 10), _v(0, 0), Vector3(x=-1))
        self.walls = [self.south, self.east, self.north, self.west]
        self.view = isometric_view_direction(BackDirection.NORTH_EAST)

    def test_view_direction(self):
        s = -1 / math.sqrt(3)
        for got in self.view.as_tuple():
            self.assertAlmostEqual(got, s)
        sw = isometric_view_direction(BackDirection.SOUTH_WEST)
        self.assertGreater(sw.x, 0)
        self.assertGreater(sw.z, 0)

    def test_far_walls_are_back(self):
        back = self.classifier.classify_walls(self.walls, self.view, self.floor.id, 4.0)
        self.assertEqual(back, {self.south, self.west})

    def test_no_floor_means_all_front(self):
        self.assertEqual(self.classifier.classify_walls(self.walls, self.view, None, 4.0), set())

    def test_corners_follow_back_walls(self):
        corners = {
            name: DetectedCorner(position=_v(x, z), angle=90.0, normal=Vector3(x=sx, z=sz).normalized())
            for name, x, z, sx, sz in [
                ("sw", 0, 0, -1, -1), ("se", 10, 0, 1, -1),
                ("ne", 10, 10, 1, 1), ("nw", 0, 10, -1, 1),
            ]
        }
        back = self.classifier.classify_corners(list(corners.values()), {self.south, self.west})
        self.assertEqual(back, {corners["sw"], corners["se"], corners["nw"]})

    def test_sample_count(self):
        self.assertEqual(self.classifier.sample_count(10.0), 20)
        self.assertEqual(self.classifier.sample_count(0.4), 3)


if __name__ == "__main__":
    unittest.main()
