# implements polynomial radial and tangential distortion as used by OpenCV

import numpy as np

from lensdistlib.distortion import Distortion
from lensdistlib.properties import NO_ID

RADIAL_KEYS = ("k1", "k2", "k3")
TANGENTIAL_KEYS = ("p1", "p2")


def radial_order(prop, id=NO_ID):
    # Number of radial parameters from the highest k key that is present
    n = 1
    for i, key in enumerate(RADIAL_KEYS):
        if prop.contains(key, id):
            n = i + 1
    return n


def radial_scale(r2, k):
    # k: (k1, k2, k3)
    return 1 + k[0] * r2 + k[1] * r2 ** 2 + k[2] * r2 ** 3


def tangential(x, y, r2, p1, p2):
    return (
        2 * p1 * x * y + p2 * (r2 + 2 * x ** 2),
        p1 * (r2 + 2 * y ** 2) + 2 * p2 * x * y,
    )


def _check_order(n):
    if n not in (1, 2, 3):
        raise ValueError(f"Number of radial distortion parameters must be 1, 2 or 3, got {n}")


class RadialDistortion(Distortion):
    """
    Radial lens distortion.

    r^2 = x^2 + y^2
    s   = 1 + k1*r^2 + k2*r^4 + k3*r^6
    x'  = x*s
    y'  = y*s

    The number n of radial parameters can be 1, 2 or 3; higher order coefficients that are not used are 0.
    Order of parameters: k1, k2, k3
    """

    model_type = "radial"
    _property_keys = RADIAL_KEYS

    def __init__(self, n=3, params=None):
        _check_order(n)
        self._keys = RADIAL_KEYS[:n]
        super().__init__(params)

    @classmethod
    def from_properties(cls, prop, id=NO_ID):
        n = radial_order(prop, id)
        return cls(n, [prop.get_float(key, 0.0, id) for key in RADIAL_KEYS[:n]])

    def _k(self):
        k = np.zeros(3)
        k[:self.count_parameter()] = self._params
        return k

    def _transform(self, x, y):
        s = radial_scale(x ** 2 + y ** 2, self._k())
        return x * s, y * s


class RadialTangentialDistortion(Distortion):
    """
    Radial and tangential lens distortion.

    r^2 = x^2 + y^2
    s   = 1 + k1*r^2 + k2*r^4 + k3*r^6
    x'  = x*s + 2*p1*x*y         + p2*(r^2 + 2*x^2)
    y'  = y*s + p1*(r^2 + 2*y^2) + 2*p2*x*y

    The number n of radial parameters can be 1, 2 or 3.
    Order of parameters: p1, p2, k1, k2, k3
    """

    model_type = "radial_tangential"
    _property_keys = TANGENTIAL_KEYS + RADIAL_KEYS

    def __init__(self, n=3, params=None):
        _check_order(n)
        self._keys = TANGENTIAL_KEYS + RADIAL_KEYS[:n]
        super().__init__(params)

    @classmethod
    def from_properties(cls, prop, id=NO_ID):
        n = radial_order(prop, id)
        keys = TANGENTIAL_KEYS + RADIAL_KEYS[:n]
        return cls(n, [prop.get_float(key, 0.0, id) for key in keys])

    def _transform(self, x, y):
        p1, p2 = self._params[0:2]
        k = np.zeros(3)
        k[:self.count_parameter() - 2] = self._params[2:]

        r2 = x ** 2 + y ** 2
        s = radial_scale(r2, k)
        tx, ty = tangential(x, y, r2, p1, p2)
        return x * s + tx, y * s + ty
