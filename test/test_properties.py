import unittest

import numpy as np

from lensdistlib.properties import Properties, NO_ID, camera_key


class TestProperties(unittest.TestCase):
    def test_camera_key(self):
        self.assertEqual(camera_key('k1'), 'k1')
        self.assertEqual(camera_key('k1', NO_ID), 'k1')
        self.assertEqual(camera_key('k1', 0), 'k10')
        self.assertEqual(camera_key('A', 12), 'A12')

    def test_put_get_remove(self):
        prop = Properties()
        prop.put_value('k1', 0.5)
        prop.put_value('k1', 0.25, 2)

        self.assertTrue(prop.contains('k1'))
        self.assertTrue(prop.contains('k1', 2))
        self.assertFalse(prop.contains('k1', 1))
        self.assertEqual(prop.get_float('k1'), 0.5)
        self.assertEqual(prop.get_float('k1', id=2), 0.25)
        self.assertEqual(prop.get_float('k2', 7.0), 7.0)
        self.assertIsNone(prop.get_value('k2'))

        prop.remove('k1', 2)
        prop.remove('missing')
        self.assertEqual(prop.keys(), ['k1'])

    def test_order(self):
        prop = Properties({'b': 1, 'a': 2})
        prop.put_value('c', 3)
        self.assertEqual(list(prop), ['b', 'a', 'c'])

    def test_malformed_float(self):
        prop = Properties({'k1': 'x'})
        with self.assertWarns(UserWarning):
            self.assertEqual(prop.get_float('k1'), 0.0)

    def test_strings(self):
        prop = Properties({'model': ' radial ', 'k1': np.float64(0.5)})
        self.assertEqual(prop.get_string('model'), 'radial')
        self.assertEqual(prop.get_string('k1'), '0.5')
        self.assertEqual(prop.get_string('missing', 'none'), 'none')

    def test_as_dict(self):
        prop = Properties()
        prop.put_value('k1', np.float64(0.5))
        prop.put_value('n', np.int64(3))
        prop.put_value('v', np.array([1.0, 2.0]))
        d = prop.as_dict()
        self.assertEqual(d, {'k1': 0.5, 'n': 3, 'v': [1.0, 2.0]})
        self.assertIs(type(d['k1']), float)
        self.assertIs(type(d['n']), int)

        self.assertEqual(Properties.from_dict(d), prop)


if __name__ == '__main__':
    unittest.main()
