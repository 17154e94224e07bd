from .properties import Properties, NO_ID
from .distortion import Distortion
from .dist_radial import RadialDistortion, RadialTangentialDistortion
from .dist_rational import RationalTangentialDistortion, RationalTangentialThinPrismDistortion
from .dist_equidistant import EquidistantDistortion
from .factory import create, clean_all_properties, model_types
