import numpy as np

from lensdistlib.distortion import Distortion
from lensdistlib.properties import NO_ID

EQUIDISTANT_KEYS = ("e1", "e2", "e3", "e4")


class EquidistantDistortion(Distortion):
    """
    Distortion of fisheye and wide angle lenses, expressed as polynomial in the angle of incidence instead of
    the radius.

    r      = sqrt(x^2 + y^2)
    theta  = atan(r)
    theta' = theta*(1 + e1*theta^2 + e2*theta^4 + e3*theta^6 + e4*theta^8)
    x'     = x*theta'/theta
    y'     = y*theta'/theta

    The ideal point is moved along its azimuth. The center maps onto itself and all parameters 0 is the identity.
    Order of parameters: e1, e2, e3, e4
    """

    model_type = "equidistant"
    _keys = EQUIDISTANT_KEYS
    _property_keys = _keys

    @classmethod
    def from_properties(cls, prop, id=NO_ID):
        return cls([prop.get_float(key, 0.0, id) for key in cls._keys])

    def _transform(self, x, y):
        e = self._params
        theta2 = np.arctan(np.hypot(x, y)) ** 2
        s = 1 + theta2 * (e[0] + theta2 * (e[1] + theta2 * (e[2] + theta2 * e[3])))
        return x * s, y * s
