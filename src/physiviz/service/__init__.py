"""
Parse service: problem text in, ``ProblemDescription`` out.

Example
-------
>>> from physiviz.service import parse_problem
>>> problem = parse_problem("A ball is thrown horizontally at 15 m/s ...")  # doctest: +SKIP
"""

from .config import Settings, get_settings
from .parser import (
    OpenRouterClient,
    ProblemRejectedError,
    RemoteProblemParser,
    ServiceConfigurationError,
    ServiceError,
    extract_json,
    map_motion_type,
    parse_problem,
    transform_response,
)

__all__ = [
    "Settings",
    "get_settings",
    "ServiceError",
    "ServiceConfigurationError",
    "ProblemRejectedError",
    "OpenRouterClient",
    "RemoteProblemParser",
    "extract_json",
    "map_motion_type",
    "transform_response",
    "parse_problem",
]
