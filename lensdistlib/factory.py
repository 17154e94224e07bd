"""Creation of distortion models from camera parameters"""
import logging

from lensdistlib.dist_equidistant import EquidistantDistortion, EQUIDISTANT_KEYS
from lensdistlib.dist_radial import RadialDistortion, RadialTangentialDistortion, RADIAL_KEYS, TANGENTIAL_KEYS
from lensdistlib.dist_rational import (RationalTangentialDistortion, RationalTangentialThinPrismDistortion,
                                       RATIONAL_KEYS, THIN_PRISM_KEYS)
from lensdistlib.distortion import Distortion
from lensdistlib.properties import NO_ID

logger = logging.getLogger(__name__)

__all__ = ['MODEL_KEY', 'create', 'clean_all_properties', 'model_types']

# Optional key that names the model explicitly instead of deriving it from the present parameter keys
MODEL_KEY = "distortion_model"

_registry = {
    cls.model_type: cls for cls in (
        Distortion,
        RadialDistortion,
        RadialTangentialDistortion,
        RationalTangentialDistortion,
        RationalTangentialThinPrismDistortion,
        EquidistantDistortion,
    )
}

# Probing order, the first model with any of its distinguishing keys present is chosen
_precedence = (
    (EQUIDISTANT_KEYS, EquidistantDistortion),
    (THIN_PRISM_KEYS, RationalTangentialThinPrismDistortion),
    (RATIONAL_KEYS[3:], RationalTangentialDistortion),
    (TANGENTIAL_KEYS, RadialTangentialDistortion),
    (RADIAL_KEYS, RadialDistortion),
)


def model_types():
    """Return list of model type names"""
    return list(_registry.keys())


def _select(prop, id):
    if prop.contains(MODEL_KEY, id):
        model_type = prop.get_string(MODEL_KEY, id=id)
        if model_type not in _registry:
            raise ValueError(f"Unknown distortion model '{model_type}', expected one of {model_types()}")
        return _registry[model_type]

    for keys, cls in _precedence:
        if any(prop.contains(key, id) for key in keys):
            return cls

    return Distortion


def create(prop, id=NO_ID):
    """
    Creates and initializes the distortion model that is configured in the given camera parameters.

    Parameters:
        prop (Properties): Camera parameters.
        id (int): Camera id or NO_ID.

    Returns:
        Distortion: The configured model, the identity model if no distortion parameters are present.
    """
    cls = _select(prop, id)
    logger.debug("using %s distortion model for camera %s", cls.model_type, id)
    return cls.from_properties(prop, id)


def clean_all_properties(prop, id=NO_ID):
    """
    Removes the parameters of all distortion models from the given camera parameters, e.g. before storing a
    different model.
    """
    prop.remove(MODEL_KEY, id)
    for cls in _registry.values():
        cls().clean_properties(prop, id)
