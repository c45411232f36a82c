# painmap/domain/common/di_container.py

"""
Dependency injection container for the pain-mapping application.

Services are registered against their interface. Singletons are created on
first resolution and then shared, which is how one catalog and one pain area
store live for the whole form session.
"""
from typing import Dict, Any, Type, TypeVar, Callable, Set


T = TypeVar('T')
TBase = TypeVar('TBase')


class DIContainer:
    """Registers and resolves services by interface type."""

    def __init__(self):
        self._instance_registrations: Dict[type, Any] = {}
        self._factory_registrations: Dict[type, Callable[[], Any]] = {}
        self._singleton_factories: Dict[type, Callable[[], Any]] = {}
        self._resolving: Set[type] = set()  # Types being resolved, to detect cycles

    def register_instance(self, base_type: Type[TBase], instance: TBase) -> None:
        """Bind an already built object, e.g. the logger or the loaded catalog."""
        self._instance_registrations[base_type] = instance

    def register_factory(self, base_type: Type[TBase], factory: Callable[[], TBase]) -> None:
        """Bind a factory that builds a fresh object on every resolve."""
        self._factory_registrations[base_type] = factory

    def register_singleton(self, base_type: Type[TBase], factory: Callable[[], TBase]) -> None:
        """Bind a factory that runs on the first resolve only; later resolves share its object."""
        self._singleton_factories[base_type] = factory

    def is_registered(self, base_type: type) -> bool:
        return (base_type in self._instance_registrations
                or base_type in self._singleton_factories
                or base_type in self._factory_registrations)

    def resolve(self, base_type: Type[T]) -> T:
        """
        Return the object bound to ``base_type``.

        Lookup order: instances (including singletons already built), then
        singleton factories, then plain factories.

        Raises:
            ValueError: Nothing is bound to ``base_type``, or resolving it
                needs ``base_type`` again
        """
        if base_type in self._resolving:
            raise ValueError(f"Circular dependency detected while resolving {base_type.__name__}")

        if base_type in self._instance_registrations:
            return self._instance_registrations[base_type]

        if base_type in self._singleton_factories:
            instance = self._create(base_type, self._singleton_factories[base_type])
            self._instance_registrations[base_type] = instance
            return instance

        if base_type in self._factory_registrations:
            return self._create(base_type, self._factory_registrations[base_type])

        raise ValueError(f"No registration found for {base_type.__name__}")

    def _create(self, base_type: type, factory: Callable[[], Any]) -> Any:
        self._resolving.add(base_type)
        try:
            return factory()
        finally:
            self._resolving.remove(base_type)
