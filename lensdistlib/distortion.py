import copy

import numpy as np

from lensdistlib import inverse
from lensdistlib.properties import NO_ID


def _output(v):
    # Scalar in, scalar out
    if np.ndim(v) == 0:
        return float(v)
    return v


class Distortion:
    """
    Base class for modelling lens distortion on normalized image coordinates (x=X/Z, y=Y/Z).

    The base class is the identity model without parameters. Derived models define their parameter keys and
    implement _transform(). The inverse of all models is computed by the shared fixed-point iteration in
    lensdistlib.inverse.
    """

    model_type = "none"

    # Keys of the parameters in parameter order
    _keys = ()
    # Keys that are read from properties by the model, i.e. that are removed by clean_properties()
    _property_keys = ()

    def __init__(self, params=None):
        n = len(self._keys)
        if params is None:
            self._params = np.zeros(n, dtype=float)
        else:
            params = np.asarray(params, dtype=float).flatten()
            if params.shape[0] != n:
                raise ValueError(f"{type(self).__name__} expects {n} parameters, got {params.shape[0]}")
            self._params = params.copy()

    @classmethod
    def from_properties(cls, prop, id=NO_ID):
        return cls()

    def clone(self):
        return copy.deepcopy(self)

    def count_parameter(self):
        return self._params.shape[0]

    def _check_index(self, i):
        if not 0 <= i < self.count_parameter():
            raise IndexError(f"Parameter index {i} out of range for {type(self).__name__} "
                             f"with {self.count_parameter()} parameters")

    def get_parameter(self, i):
        self._check_index(i)
        return float(self._params[i])

    def set_parameter(self, i, v):
        self._check_index(i)
        self._params[i] = float(v)

    @property
    def params(self):
        return self._params.copy()

    @property
    def is_trivial(self):
        return np.all(self._params == 0)

    def keys(self):
        return list(self._keys)

    def _transform(self, x, y):
        return x, y

    def transform(self, x, y):
        """
        Applies distortion to ideal coordinates.

        Parameters:
            x, y (float or np.ndarray): Ideal normalized image coordinates.

        Returns:
            tuple: Distorted coordinates (xd, yd) of the same shape as the input.
        """
        xd, yd = self._transform(np.asarray(x, dtype=float), np.asarray(y, dtype=float))
        return _output(xd), _output(yd)

    def inv_transform(self, xd, yd, tolerance=inverse.TOLERANCE, max_iterations=inverse.MAX_ITERATIONS):
        """
        Removes distortion from observed coordinates.

        Parameters:
            xd, yd (float or np.ndarray): Distorted normalized image coordinates.
            tolerance (float): Residual at which the iteration stops.
            max_iterations (int): Maximum number of iterations.

        Returns:
            tuple: Ideal coordinates (x, y). Accuracy is only guaranteed if the iteration converged, which can be
            verified with residual().
        """
        if self.count_parameter() == 0:
            return _output(np.asarray(xd, dtype=float)), _output(np.asarray(yd, dtype=float))

        x, y = inverse.fixed_point_inverse(self._transform, xd, yd, tolerance=tolerance,
                                           max_iterations=max_iterations)
        return _output(x), _output(y)

    def inv_transform_refined(self, xd, yd):
        if self.count_parameter() == 0:
            return _output(np.asarray(xd, dtype=float)), _output(np.asarray(yd, dtype=float))

        x, y = inverse.refined_inverse(self._transform, xd, yd)
        return _output(x), _output(y)

    def residual(self, x, y, xd, yd):
        return _output(inverse.residual(self._transform, np.asarray(x, dtype=float), np.asarray(y, dtype=float),
                                        xd, yd))

    def distort(self, xy):
        # xy: np.array((..., 2)) of ideal coordinates
        xy = np.asarray(xy, dtype=float)
        xd, yd = self._transform(xy[..., 0], xy[..., 1])
        return np.stack((xd, yd), axis=-1)

    def undistort(self, xy_d):
        # xy_d: np.array((..., 2)) of distorted coordinates
        xy_d = np.asarray(xy_d, dtype=float)
        x, y = self.inv_transform(xy_d[..., 0], xy_d[..., 1])
        return np.stack((np.asarray(x), np.asarray(y)), axis=-1)

    def get_properties(self, prop, id=NO_ID):
        """
        Stores the parameters of the model in the given Properties object, with the camera id appended to all
        keys unless id is NO_ID.
        """
        for key, v in zip(self._keys, self._params):
            prop.put_value(key, float(v), id)

    def clean_properties(self, prop, id=NO_ID):
        """
        Removes the parameters of this model from the given Properties object.
        """
        for key in self._property_keys:
            prop.remove(key, id)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._keys == other._keys and np.array_equal(self._params, other._params)

    def __repr__(self):
        values = ", ".join(f"{k}={v:g}" for k, v in zip(self._keys, self._params))
        return f"{type(self).__name__}({values})"
