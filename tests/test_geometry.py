import unittest

from roomshell.models import (
    Bounds, Edge, Face, Quaternion, SolidMesh, Transform, Vector3, make_box,
)


class TestVector3(unittest.TestCase):
    def test_arithmetic(self):
        a = Vector3(x=1, y=2, z=3)
        b = Vector3(x=4, y=5, z=6)
        self.assertEqual((a + b).as_tuple(), (5, 7, 9))
        self.assertEqual((b - a).as_tuple(), (3, 3, 3))
        self.assertEqual((a * 2).as_tuple(), (2, 4, 6))
        self.assertAlmostEqual(a.dot(b), 32)
        self.assertEqual(Vector3(x=1).cross(Vector3(y=1)).as_tuple(), (0, 0, 1))

    def test_normalized_zero_stays_zero(self):
        self.assertEqual(Vector3.zero().normalized().length(), 0.0)

    def test_angle_to(self):
        self.assertAlmostEqual(Vector3(x=1).angle_to(Vector3(z=1)), 90.0)
        self.assertAlmostEqual(Vector3(x=1).angle_to(Vector3(x=-1)), 180.0)
        self.assertAlmostEqual(Vector3(x=1, z=1).angle_to(Vector3(z=1)), 45.0)


class TestTransform(unittest.TestCase):
    def test_look_rotation_turns_forward_onto_target(self):
        rotation = Quaternion.look_rotation(Vector3(x=1))
        turned = rotation.rotate(Vector3(z=1))
        self.assertAlmostEqual(turned.x, 1.0)
        self.assertAlmostEqual(turned.z, 0.0)

    def test_vertical_forward_gives_identity(self):
        self.assertEqual(Quaternion.look_rotation(Vector3(y=1)), Quaternion.identity())

    def test_point_round_trip(self):
        t = Transform(
            position=Vector3(x=3, y=1, z=-2),
            rotation=Quaternion.from_yaw(30),
            scale=Vector3(x=2, y=1, z=0.5),
        )
        p = Vector3(x=1, y=2, z=3)
        back = t.inverse_transform_point(t.transform_point(p))
        for got, want in zip(back.as_tuple(), p.as_tuple()):
            self.assertAlmostEqual(got, want)

    def test_quaternion_angle(self):
        self.assertAlmostEqual(Quaternion.identity().angle_to(Quaternion.from_yaw(90)), 90.0)


class TestBounds(unittest.TestCase):
    def test_touching_boxes_intersect(self):
        a = Bounds(center=Vector3(), size=Vector3(x=2, y=2, z=2))
        b = Bounds(center=Vector3(x=2), size=Vector3(x=2, y=2, z=2))
        self.assertTrue(a.intersects(b))

    def test_separate_boxes_do_not_intersect(self):
        a = Bounds(center=Vector3(), size=Vector3(x=2, y=2, z=2))
        b = Bounds(center=Vector3(x=2.5), size=Vector3(x=2, y=2, z=2))
        self.assertFalse(a.intersects(b))


class TestMesh(unittest.TestCase):
    def test_box_bounds_follow_transform(self):
        box = make_box(Vector3(x=2, y=2, z=2), transform=Transform(position=Vector3(x=5)))
        bounds = box.world_bounds()
        self.assertAlmostEqual(bounds.min.x, 4.0)
        self.assertAlmostEqual(bounds.max.x, 6.0)
        self.assertAlmostEqual(bounds.size.y, 2.0)

    def test_box_faces(self):
        box = make_box(Vector3(x=2, y=2, z=2))
        self.assertEqual(len(box.faces), 6)
        normals = [box.face_normal(f) for f in box.faces]
        vertical = [n for n in normals if abs(n.y) > 0.9]
        self.assertEqual(len(vertical), 2)

    def test_degenerate_face_normal_is_up(self):
        mesh = SolidMesh(
            positions=[Vector3(), Vector3(x=1)],
            faces=[Face(edges=[Edge(a=0, b=1), Edge(a=1, b=0)])],
        )
        self.assertEqual(mesh.face_normal(mesh.faces[0]), Vector3.up())

    def test_edge_key_is_undirected(self):
        self.assertEqual(Edge(a=3, b=1).key(), Edge(a=1, b=3).key())


if __name__ == "__main__":
    unittest.main()
