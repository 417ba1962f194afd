import unittest
from dataclasses import replace, FrozenInstanceError

from slidesnap.geometry import (
    SnapParams,
    ConfigurationError,
    DEFAULT_EPSILON,
    UPSIDE_DOWN_EPSILON,
    male_profile_points,
    channel_profile_points,
    relief_profile_points,
    latch_profile_points,
    latch_pocket_box,
    spring_cavity_box,
    polygon_bounds,
    polygon_area,
    is_simple_polygon,
    female_envelope,
    male_envelope,
)


SMALL = SnapParams()


class TestSnapParamsValidation(unittest.TestCase):
    def test_01_defaults_are_valid(self):
        is_valid, errors = SMALL.validate()
        self.assertTrue(is_valid, errors)
        self.assertEqual(SMALL.advisories(), [])

    def test_02_width_must_exceed_stem_plus_gaps(self):
        p = replace(SMALL, w=2.3)  # t + 2g = 2.35
        is_valid, errors = p.validate()
        self.assertFalse(is_valid)
        self.assertTrue(any("w must exceed t + 2g" in e for e in errors), errors)

    def test_03_every_violation_is_listed(self):
        p = replace(SMALL, l=4.0, a=5.0, h=0.0, c=-1.0)
        with self.assertRaises(ConfigurationError) as ctx:
            p.require_valid()
        message = str(ctx.exception)
        self.assertIn("l must be at least w", message)
        self.assertIn("a must not exceed l", message)
        self.assertIn("h must be positive", message)
        self.assertIn("c must be positive", message)
        self.assertEqual(len(ctx.exception.errors), 4)

    def test_04_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            replace(SMALL, epsilon=0.0).require_valid()

    def test_05_j_out_of_range_only_warns(self):
        p = replace(SMALL, j=1.5)
        is_valid, _ = p.validate()
        self.assertTrue(is_valid)
        with self.assertLogs("slidesnap.geometry", level="WARNING") as logs:
            p.require_valid()
        self.assertTrue(any("recommended range" in line for line in logs.output))

    def test_06_short_spring_warns(self):
        p = replace(SMALL, a=3.0)
        notes = p.advisories()
        self.assertEqual(len(notes), 1)
        self.assertIn("shorter than latch length", notes[0])

    def test_07_params_are_immutable(self):
        with self.assertRaises(FrozenInstanceError):
            SMALL.t = 3.0

    def test_08_epsilon_resolution(self):
        self.assertEqual(SMALL.resolve_epsilon(), DEFAULT_EPSILON)
        self.assertEqual(SMALL.resolve_epsilon(UPSIDE_DOWN_EPSILON), UPSIDE_DOWN_EPSILON)
        self.assertEqual(replace(SMALL, epsilon=0.05).resolve_epsilon(), 0.05)

    def test_09_dict_round_trip_ignores_unknown_keys(self):
        d = SMALL.to_dict()
        d['colour'] = 'red'
        self.assertEqual(SnapParams.from_dict(d), SMALL)

    def test_10_non_finite_values_are_rejected(self):
        for name, value in [('w', float('nan')), ('l', float('inf')),
                            ('g', float('nan')), ('epsilon', float('nan'))]:
            is_valid, errors = replace(SMALL, **{name: value}).validate()
            self.assertFalse(is_valid, name)
            self.assertEqual(errors, [f"{name} must be finite, got {value}"])

    def test_11_nan_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            replace(SMALL, t=float('nan')).require_valid()


class TestMaleProfile(unittest.TestCase):
    def test_01_extents(self):
        """t=2, w=6: |x| <= 3, vertical span from -1 to 2."""
        (min_x, min_z), (max_x, max_z) = polygon_bounds(male_profile_points(2.0, 6.0))
        self.assertEqual(max(abs(min_x), abs(max_x)), 3.0)
        self.assertEqual(min_z, -1.0)
        self.assertEqual(max_z, 2.0)

    def test_02_symmetric_about_axis(self):
        for t, w in [(2.0, 6.0), (1.75, 5.25), (3.5, 10.5), (1.0, 1.2)]:
            points = male_profile_points(t, w)
            mirrored = {(-x, z) for x, z in points}
            self.assertEqual({(x + 0.0, z) for x, z in points},
                             {(x + 0.0, z) for x, z in mirrored})

    def test_03_simple_and_counter_clockwise(self):
        for t, w in [(2.0, 6.0), (1.75, 5.25), (0.5, 0.6)]:
            points = male_profile_points(t, w)
            self.assertTrue(is_simple_polygon(points))
            self.assertGreater(polygon_area(points), 0)

    def test_04_flanks_at_45_degrees(self):
        points = male_profile_points(2.0, 6.0)
        (x0, z0), (x1, z1) = points[2], points[3]
        self.assertAlmostEqual(x1 - x0, z1 - z0)

    def test_05_area(self):
        # stem t * t/2 plus trapezoid (t + w)/2 * (w - t)/2
        t, w = 2.0, 6.0
        self.assertAlmostEqual(polygon_area(male_profile_points(t, w)), 2.0 + 8.0)


class TestFemaleProfiles(unittest.TestCase):
    def test_01_channel_width_is_profile_width(self):
        for p in (SMALL, replace(SMALL, g=0.0), replace(SMALL, w=8.0, l=9.0, a=9.0)):
            (min_x, _), (max_x, max_z) = polygon_bounds(
                channel_profile_points(p.t, p.w, p.g))
            self.assertAlmostEqual(max_x - min_x, p.channel_width)
            self.assertAlmostEqual(max_z, p.dovetail_height)

    def test_02_channel_clears_male_flank(self):
        p = SMALL
        channel = channel_profile_points(p.t, p.w, p.g, 0.0)
        male = male_profile_points(p.t, p.w)
        # horizontal offset between parallel flanks
        self.assertAlmostEqual(channel[1][0] - male[2][0], p.g * (1 + 2 ** 0.5))
        self.assertAlmostEqual(channel[2][0] - male[3][0], p.g * (1 + 2 ** 0.5))

    def test_03_channel_breaks_through_mating_plane(self):
        (_, min_z), _ = polygon_bounds(channel_profile_points(2.0, 6.0, 0.3, 0.01))
        self.assertAlmostEqual(min_z, -0.01)

    def test_04_relief_is_c_shape(self):
        points = relief_profile_points(SMALL)
        self.assertEqual(len(points), 8)
        self.assertTrue(is_simple_polygon(points))
        (min_x, min_y), (max_x, max_y) = polygon_bounds(points)
        self.assertAlmostEqual(max_x - min_x, SMALL.channel_width)
        self.assertAlmostEqual(max_y, SMALL.female_length)
        self.assertAlmostEqual(max_y - min_y, SMALL.a + SMALL.j)
        # cut area: outer rectangle minus the tongue
        outer = SMALL.channel_width * (SMALL.a + SMALL.j)
        tongue = (SMALL.channel_width - 2 * SMALL.j) * SMALL.a
        self.assertAlmostEqual(abs(polygon_area(points)), outer - tongue)

    def test_05_relief_stays_inside_part(self):
        for p in (SMALL, replace(SMALL, a=SMALL.l)):
            self.assertGreater(p.spring_start_y, 0.0)

    def test_06_latch_wedge(self):
        eps = DEFAULT_EPSILON
        points = latch_profile_points(SMALL, eps)
        self.assertEqual(len(points), 4)
        self.assertTrue(is_simple_polygon(points))
        (min_y, min_z), (max_y, max_z) = polygon_bounds(points)
        self.assertAlmostEqual(min_y, SMALL.l + SMALL.g)
        self.assertAlmostEqual(max_z, SMALL.clip_height)
        self.assertAlmostEqual(max_y - min_y, SMALL.latch_length + 2 * eps)
        # locking face vertical, ramp at 45 degrees
        self.assertEqual(points[0][0], points[3][0])
        (y1, z1), (y2, z2) = points[1], points[2]
        self.assertAlmostEqual(y2 - y1, z2 - z1)
        # latch ends before the relief's far cut
        self.assertLessEqual(max_y, SMALL.female_length - SMALL.j + 2 * eps + 1e-12)

    def test_07_pocket_and_cavity_boxes(self):
        origin, extents = latch_pocket_box(SMALL)
        self.assertAlmostEqual(origin[1], SMALL.l)
        self.assertAlmostEqual(origin[1] + extents[1], SMALL.female_length)
        self.assertAlmostEqual(origin[2] + extents[2], SMALL.dovetail_height)

        origin, extents = spring_cavity_box(SMALL)
        self.assertAlmostEqual(origin[1], SMALL.spring_start_y)
        self.assertAlmostEqual(origin[2] + extents[2],
                               SMALL.clip_height + SMALL.dovetail_height)


class TestPolygonHelpers(unittest.TestCase):
    def test_01_bowtie_is_not_simple(self):
        self.assertFalse(is_simple_polygon([(0, 0), (1, 1), (1, 0), (0, 1)]))

    def test_02_touching_edges_are_not_simple(self):
        # vertex (1, 0) lies on the edge (0, 0)-(2, 0)
        self.assertFalse(is_simple_polygon([(0, 0), (2, 0), (2, 2), (1, 0), (0, 2)]))

    def test_03_degenerate(self):
        self.assertFalse(is_simple_polygon([(0, 0), (1, 1)]))

    def test_04_square_area(self):
        self.assertEqual(polygon_area([(0, 0), (2, 0), (2, 2), (0, 2)]), 4.0)
        self.assertEqual(polygon_area([(0, 0), (0, 2), (2, 2), (2, 0)]), -4.0)

    def test_05_collinear_vertex_stays_simple(self):
        points = [(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)]
        self.assertTrue(is_simple_polygon(points))
        self.assertAlmostEqual(polygon_area(points), 4.0)

    def test_06_overlapping_edges_are_not_simple(self):
        # j wider than half the channel folds the C back over itself
        points = relief_profile_points(replace(SMALL, j=4.0))
        self.assertFalse(is_simple_polygon(points))


class TestEnvelopes(unittest.TestCase):
    def test_01_male(self):
        env = male_envelope(2.0, 6.0, 8.0)
        self.assertEqual(env.min, (-3.0, 0.0, -1.0))
        self.assertEqual(env.max, (3.0, 8.0, 2.0))

    def test_02_female_without_cavity(self):
        env = female_envelope(SMALL, include_cavity=False)
        self.assertAlmostEqual(env.size[0], SMALL.channel_width)
        self.assertAlmostEqual(env.size[1], SMALL.female_length + SMALL.c)
        self.assertAlmostEqual(env.max[2], SMALL.clip_height)

    def test_03_upside_down_mirrors_z(self):
        eps = UPSIDE_DOWN_EPSILON
        env = female_envelope(SMALL, upside_down=True, epsilon=eps)
        self.assertAlmostEqual(env.min[2], SMALL.clip_height)
        self.assertAlmostEqual(env.max[2], 2 * SMALL.clip_height + eps)


if __name__ == '__main__':
    unittest.main()
