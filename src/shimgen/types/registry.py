import logging
from collections.abc import Callable, Sequence
from functools import cache, partial

from shimgen.errors import UnrecognizedTypeError
from shimgen.models import Module, TypeExpr
from shimgen.types.base import Behavior
from shimgen.types.boolean import BoolBehavior
from shimgen.types.duration import DurationBehavior
from shimgen.types.option import OptionBehavior
from shimgen.types.result import ResultBehavior
from shimgen.types.scalars import ScalarBehavior
from shimgen.types.string import StringBehavior
from shimgen.types.unit import UnitBehavior
from shimgen.types.user import UserTypeBehavior
from shimgen.types.vec import VecBehavior

logger = logging.getLogger(__name__)

BehaviorFactory = Callable[["Registry"], Behavior]

# Specific shapes first: the first behavior that recognizes a type wins.
BUILTIN_BEHAVIORS: tuple[BehaviorFactory, ...] = (
    ResultBehavior,
    OptionBehavior,
    VecBehavior,
    DurationBehavior,
    StringBehavior,
    BoolBehavior,
    ScalarBehavior,
    UnitBehavior,
)


class Registry:
    """An ordered, fixed set of behaviors.

    Each factory is called once with the registry itself so composite shapes
    can dispatch their inner types. ``extend`` never modifies a registry; it
    builds a new one with the extra behaviors appended.
    """

    def __init__(self, factories: Sequence[BehaviorFactory]) -> None:
        self._factories = tuple(factories)
        self._behaviors = tuple(factory(self) for factory in self._factories)

    @property
    def behaviors(self) -> tuple[Behavior, ...]:
        return self._behaviors

    def extend(self, *factories: BehaviorFactory) -> "Registry":
        return Registry((*self._factories, *factories))

    def dispatch(self, ty: TypeExpr) -> Behavior:
        for behavior in self._behaviors:
            if behavior.recognizes(ty):
                return behavior
        raise UnrecognizedTypeError(str(ty))


@cache
def default_registry() -> Registry:
    return Registry(BUILTIN_BEHAVIORS)


def dispatch(ty: TypeExpr) -> Behavior:
    return default_registry().dispatch(ty)


def registry_for_module(module: Module, base: Registry | None = None) -> Registry:
    """Extend ``base`` with a behavior for every struct and enum exposed in ``module``'s tree."""
    locations: dict[str, tuple[str, ...]] = {}
    for module_path, node in module.walk():
        for item in (*node.structs, *node.enums):
            if item.name in locations:
                logger.warning("Exposed type %s is declared more than once; keeping the first", item.name)
                continue
            locations[item.name] = module_path[1:]
    logger.debug("Registered %d user types for crate %s", len(locations), module.crate_name)
    return (base or default_registry()).extend(partial(UserTypeBehavior, locations=locations))
