"""
A Wrapper for the RWIS Water Quality API (Korea)
================================================

'The real-time waterworks information system (RWIS) operated by K-water
publishes residual chlorine, pH and turbidity measured at water
purification facilities.'
API base URI -> 'apis.data.go.kr/B500001/rwis/waterQuality'
"""

__version__ = "0.1.0"

from .base import WaterQuality
from .exceptions import (
    ConfigurationError,
    MissingOptionError,
    ResultCodeError,
    RwisError,
    UnexpectedResponseError,
)
from .schema import FACILITY_DIVISIONS, WATER_TYPES
