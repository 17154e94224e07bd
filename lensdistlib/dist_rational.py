# implements rational radial distortion with tangential and thin prism terms, as the OpenCV 8 and 12 coefficient
# models

from lensdistlib.dist_radial import TANGENTIAL_KEYS, RADIAL_KEYS, radial_scale, tangential
from lensdistlib.distortion import Distortion
from lensdistlib.properties import NO_ID

RATIONAL_KEYS = RADIAL_KEYS + ("k4", "k5", "k6")
THIN_PRISM_KEYS = ("s1", "s2", "s3", "s4")


def rational_scale(r2, k):
    # k: (k1, ..., k6). The denominator is not checked, parameters close to a pole give inf or nan.
    return radial_scale(r2, k[0:3]) / radial_scale(r2, k[3:6])


class RationalTangentialDistortion(Distortion):
    """
    Radial and tangential lens distortion. Radial distortion is modelled by a rational polynomial function with
    3 parameters in the numerator and 3 parameters in the denominator.

    r^2 = x^2 + y^2
    s   = (1 + k1*r^2 + k2*r^4 + k3*r^6) / (1 + k4*r^2 + k5*r^4 + k6*r^6)
    x'  = x*s + 2*p1*x*y         + p2*(r^2 + 2*x^2)
    y'  = y*s + p1*(r^2 + 2*y^2) + 2*p2*x*y

    Order of parameters: p1, p2, k1, k2, k3, k4, k5, k6
    """

    model_type = "rational_tangential"
    _keys = TANGENTIAL_KEYS + RATIONAL_KEYS
    _property_keys = _keys

    @classmethod
    def from_properties(cls, prop, id=NO_ID):
        return cls([prop.get_float(key, 0.0, id) for key in cls._keys])

    def _transform(self, x, y):
        p1, p2 = self._params[0:2]
        r2 = x ** 2 + y ** 2
        s = rational_scale(r2, self._params[2:8])
        tx, ty = tangential(x, y, r2, p1, p2)
        return x * s + tx, y * s + ty


class RationalTangentialThinPrismDistortion(RationalTangentialDistortion):
    """
    Rational radial, tangential and thin prism lens distortion.

    r^2 = x^2 + y^2
    s   = (1 + k1*r^2 + k2*r^4 + k3*r^6) / (1 + k4*r^2 + k5*r^4 + k6*r^6)
    x'  = x*s + 2*p1*x*y         + p2*(r^2 + 2*x^2) + s1*r^2 + s2*r^4
    y'  = y*s + p1*(r^2 + 2*y^2) + 2*p2*x*y         + s3*r^2 + s4*r^4

    Order of parameters: p1, p2, k1, k2, k3, k4, k5, k6, s1, s2, s3, s4
    """

    model_type = "rational_tangential_thin_prism"
    _keys = TANGENTIAL_KEYS + RATIONAL_KEYS + THIN_PRISM_KEYS
    _property_keys = _keys

    def _transform(self, x, y):
        s1, s2, s3, s4 = self._params[8:12]
        x_r, y_r = super()._transform(x, y)
        r2 = x ** 2 + y ** 2
        r4 = r2 ** 2
        return x_r + s1 * r2 + s2 * r4, y_r + s3 * r2 + s4 * r4
