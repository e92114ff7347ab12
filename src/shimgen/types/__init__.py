from shimgen.types.base import Behavior, CallSite
from shimgen.types.boolean import BoolBehavior
from shimgen.types.duration import DurationBehavior
from shimgen.types.option import OptionBehavior
from shimgen.types.registry import (
    BUILTIN_BEHAVIORS,
    Registry,
    default_registry,
    dispatch,
    registry_for_module,
)
from shimgen.types.result import ResultBehavior
from shimgen.types.scalars import ScalarBehavior
from shimgen.types.string import StringBehavior
from shimgen.types.unit import UnitBehavior
from shimgen.types.user import UserTypeBehavior
from shimgen.types.vec import VecBehavior

__all__ = [
    "BUILTIN_BEHAVIORS",
    "Behavior",
    "BoolBehavior",
    "CallSite",
    "DurationBehavior",
    "OptionBehavior",
    "Registry",
    "ResultBehavior",
    "ScalarBehavior",
    "StringBehavior",
    "UnitBehavior",
    "UserTypeBehavior",
    "VecBehavior",
    "default_registry",
    "dispatch",
    "registry_for_module",
]
