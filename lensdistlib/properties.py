import warnings
from copy import deepcopy

import numpy as np

NO_ID = -1


def camera_key(key, id=NO_ID):
    # Keys of a specific camera carry the camera id as suffix, e.g. k1 -> k10
    if id == NO_ID:
        return key
    return f"{key}{id}"


def _to_plain(value):
    if isinstance(value, np.ndarray):
        return value.tolist()
    elif isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    elif isinstance(value, bytes):
        return value.decode().strip()
    elif hasattr(value, 'dtype'):
        # numpy float64 and int64 to float and int
        if np.issubdtype(value.dtype, np.integer):
            return int(value)
        elif np.issubdtype(value.dtype, np.floating):
            return float(value)
    return value


class Properties:
    """
    Ordered key/value record holding camera parameters.

    Keys are strings, values are usually numbers. All accessors take an optional camera id that is appended to
    the key, so that parameters of several cameras can live in the same record. NO_ID addresses the plain keys.
    """

    def __init__(self, values=None):
        self._values = {}
        if values is not None:
            for k, v in values.items():
                self._values[str(k)] = v

    @staticmethod
    def from_dict(values):
        return Properties(deepcopy(values))

    def as_dict(self):
        return {k: _to_plain(v) for k, v in self._values.items()}

    def contains(self, key, id=NO_ID):
        return camera_key(key, id) in self._values

    def get_value(self, key, default=None, id=NO_ID):
        return self._values.get(camera_key(key, id), default)

    def get_string(self, key, default="", id=NO_ID):
        value = self.get_value(key, None, id)
        if value is None:
            return default
        return str(_to_plain(value)).strip()

    def get_float(self, key, default=0.0, id=NO_ID):
        value = self.get_value(key, None, id)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            warnings.warn(f"Property {camera_key(key, id)} has non-numeric value {value!r}, using {default}")
            return default

    def put_value(self, key, value, id=NO_ID):
        self._values[camera_key(key, id)] = _to_plain(value)

    def remove(self, key, id=NO_ID):
        self._values.pop(camera_key(key, id), None)

    def keys(self):
        return list(self._values.keys())

    def __contains__(self, key):
        return key in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Properties):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return f"Properties({self._values!r})"
