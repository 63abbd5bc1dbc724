"""
Namespace & schema registry: operation descriptors built once from the static schema dictionary.
"""

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from . import xsd
from .errors import SchemaError, UnknownOperation

logger = logging.getLogger(__name__)

# Field kinds
PRIMITIVE = 'primitive'
ENUM = 'enum'
STRUCT = 'struct'
OPAQUE = 'opaque'

# Cardinalities
REQUIRED = 'required'
OPTIONAL = 'optional'
REPEATED = 'repeated'

ANY = 'any'


def field_key(element_name: str) -> str:
    """
    Python key for an XML element or attribute name.

    The first letter is lower-cased unless the second one is upper case, so
    'ProfileToken' becomes 'profileToken' while 'XAddr', 'PTZConfiguration'
    and 'UTCDateTime' keep their spelling.
    """
    if len(element_name) > 1 and element_name[1].isupper():
        return element_name
    return element_name[:1].lower() + element_name[1:]


# ---------------------------------------------------------------------------
# Definitions: what the schema dictionary modules declare
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldSpec:
    name: str
    type_name: str = 'string'
    cardinality: str = REQUIRED
    attribute: bool = False


@dataclass(frozen=True)
class ComplexTypeSpec:
    name: str
    fields: Tuple[FieldSpec, ...] = ()
    base: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class SimpleTypeSpec:
    name: str
    values: Tuple[str, ...] = ()
    base: str = 'string'


@dataclass(frozen=True)
class OperationSpec:
    name: str
    request: Tuple[FieldSpec, ...] = ()
    response: Tuple[FieldSpec, ...] = ()
    response_name: Optional[str] = None
    idempotent: Optional[bool] = None
    action: Optional[str] = None


Definition = Union[ComplexTypeSpec, SimpleTypeSpec, OperationSpec]


def _cardinality(optional: bool, repeated: bool) -> str:
    if repeated:
        return REPEATED
    return OPTIONAL if optional else REQUIRED


def element(name: str, type_name: str = 'string', optional: bool = False,
            repeated: bool = False) -> FieldSpec:
    return FieldSpec(name, type_name, _cardinality(optional, repeated))


def attribute(name: str, type_name: str = 'string', optional: bool = False) -> FieldSpec:
    return FieldSpec(name, type_name, _cardinality(optional, False), attribute=True)


def any_element(name: str, optional: bool = True, repeated: bool = False) -> FieldSpec:
    """An extension point whose content travels as a raw XML fragment."""
    return FieldSpec(name, ANY, _cardinality(optional, repeated))


def complex_type(name: str, fields: Iterable[FieldSpec] = (), base: Optional[str] = None,
                 namespace: Optional[str] = None) -> ComplexTypeSpec:
    return ComplexTypeSpec(name, tuple(fields), base, namespace)


def simple_type(name: str, values: Iterable[str] = (), base: str = 'string') -> SimpleTypeSpec:
    """An enumeration when values are given, otherwise an alias of a primitive."""
    return SimpleTypeSpec(name, tuple(values), base)


def operation(name: str, request: Iterable[FieldSpec] = (), response: Iterable[FieldSpec] = (),
              response_name: Optional[str] = None, idempotent: Optional[bool] = None,
              action: Optional[str] = None) -> OperationSpec:
    return OperationSpec(name, tuple(request), tuple(response), response_name, idempotent, action)


# ---------------------------------------------------------------------------
# Descriptors: what the codec consumes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    key: str
    kind: str
    type_name: str
    cardinality: str
    namespace: str
    attribute: bool = False
    allowed: Tuple[str, ...] = ()

    @property
    def required(self) -> bool:
        return self.cardinality == REQUIRED

    @property
    def repeated(self) -> bool:
        return self.cardinality == REPEATED


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    namespace: str
    fields: Tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class OperationDescriptor:
    service: str
    namespace: str
    name: str
    request: Tuple[FieldDescriptor, ...]
    response: Tuple[FieldDescriptor, ...]
    response_name: str
    action: str
    idempotent: bool
    types: Mapping[str, TypeDescriptor] = field(repr=False, compare=False,
                                                default_factory=lambda: MappingProxyType({}))

    def nested(self, field_descriptor: FieldDescriptor) -> TypeDescriptor:
        return self.types[field_descriptor.type_name]


@dataclass(frozen=True)
class ServiceSchema:
    name: str
    namespace: str
    prefix: Optional[str]
    operations: Mapping[str, OperationDescriptor]
    types: Mapping[str, TypeDescriptor]


def is_idempotent(operation_name: str) -> bool:
    """ONVIF naming convention: Get* operations have no side effects."""
    return operation_name.startswith('Get')


class _ServiceBuilder:
    """Turns one service's definitions into a ServiceSchema."""

    def __init__(self, service_name: str, namespace: str, definitions: Iterable[Definition]):
        self.service_name = service_name
        self.namespace = namespace
        self.complex: Dict[str, ComplexTypeSpec] = {}
        self.simple: Dict[str, SimpleTypeSpec] = {}
        self.operations: List[OperationSpec] = []
        for definition in definitions:
            # later definitions override earlier ones (service types over common ones)
            if isinstance(definition, ComplexTypeSpec):
                self.simple.pop(definition.name, None)
                self.complex[definition.name] = definition
            elif isinstance(definition, SimpleTypeSpec):
                self.complex.pop(definition.name, None)
                self.simple[definition.name] = definition
            elif isinstance(definition, OperationSpec):
                self.operations.append(definition)
            else:
                raise SchemaError(f"{service_name}: unsupported definition {definition!r}")

    def _primitive_of(self, type_name: str, seen=()) -> Optional[str]:
        """Follow simple-type aliases down to an XSD primitive."""
        if xsd.is_primitive(type_name):
            return type_name
        spec = self.simple.get(type_name)
        if spec is None or type_name in seen:
            return None
        return self._primitive_of(spec.base, seen + (type_name,))

    def _field(self, spec: FieldSpec, namespace: str, owner: str) -> FieldDescriptor:
        key = field_key(spec.name)
        if spec.type_name == ANY:
            if spec.attribute:
                raise SchemaError(f"{owner}.{spec.name}: attributes cannot be opaque")
            return FieldDescriptor(spec.name, key, OPAQUE, ANY, spec.cardinality, namespace)
        simple = self.simple.get(spec.type_name)
        if simple is not None and simple.values:
            return FieldDescriptor(spec.name, key, ENUM, spec.type_name, spec.cardinality,
                                   namespace, spec.attribute, simple.values)
        primitive = self._primitive_of(spec.type_name)
        if primitive is not None:
            return FieldDescriptor(spec.name, key, PRIMITIVE, primitive, spec.cardinality,
                                   namespace, spec.attribute)
        if spec.type_name in self.complex:
            if spec.attribute:
                raise SchemaError(f"{owner}.{spec.name}: attributes must be simple")
            return FieldDescriptor(spec.name, key, STRUCT, spec.type_name, spec.cardinality,
                                   namespace)
        raise SchemaError(f"{self.service_name}: {owner}.{spec.name} has unknown type {spec.type_name!r}")

    def _flatten(self, name: str, chain: Tuple[str, ...] = ()) -> List[FieldDescriptor]:
        if name in chain:
            raise SchemaError(f"{self.service_name}: cyclic base chain {' -> '.join(chain + (name,))}")
        spec = self.complex.get(name)
        if spec is None:
            raise SchemaError(f"{self.service_name}: unknown base type {name!r}")
        fields = self._flatten(spec.base, chain + (name,)) if spec.base else []
        namespace = spec.namespace or self.namespace
        fields.extend(self._field(f, namespace, name) for f in spec.fields)
        return fields

    def _check_unique(self, owner: str, fields: Iterable[FieldDescriptor]):
        seen = set()
        for f in fields:
            if f.key in seen:
                raise SchemaError(f"{self.service_name}: duplicate field {owner}.{f.name}")
            seen.add(f.key)

    def build(self, prefix: Optional[str]) -> ServiceSchema:
        types: Dict[str, TypeDescriptor] = {}
        for name, spec in self.complex.items():
            fields = tuple(self._flatten(name))
            self._check_unique(name, fields)
            types[name] = TypeDescriptor(name, spec.namespace or self.namespace, fields)
        types_view = MappingProxyType(types)

        operations: Dict[str, OperationDescriptor] = {}
        for spec in self.operations:
            request = tuple(self._field(f, self.namespace, spec.name) for f in spec.request)
            response_name = spec.response_name or spec.name + 'Response'
            response = tuple(self._field(f, self.namespace, response_name) for f in spec.response)
            self._check_unique(spec.name, request)
            self._check_unique(response_name, response)
            idempotent = is_idempotent(spec.name) if spec.idempotent is None else spec.idempotent
            operations[spec.name] = OperationDescriptor(
                service=self.service_name,
                namespace=self.namespace,
                name=spec.name,
                request=request,
                response=response,
                response_name=response_name,
                action=spec.action or f"{self.namespace}/{spec.name}",
                idempotent=idempotent,
                types=types_view,
            )
        return ServiceSchema(self.service_name, self.namespace, prefix,
                             MappingProxyType(operations), types_view)


class SchemaRegistry:
    """
    Lookup from (service, operation) to OperationDescriptor.

    Writers build a complete ServiceSchema before publishing it with a single
    dict assignment, so readers never see a half-registered service.
    """

    def __init__(self):
        self._services: Dict[str, ServiceSchema] = {}
        self._aliases: Dict[str, str] = {}
        self._namespaces: Dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, service_name: str, namespace: str, definitions: Iterable[Definition],
                 prefix: Optional[str] = None) -> ServiceSchema:
        schema = _ServiceBuilder(service_name, namespace, definitions).build(prefix)
        if prefix:
            from .codec import register_prefix
            register_prefix(prefix, namespace)
        with self._lock:
            previous = self._services.get(service_name)
            if previous is not None and previous.namespace != namespace:
                self._namespaces.pop(previous.namespace, None)
            self._services[service_name] = schema
            self._aliases[service_name.lower()] = service_name
            self._namespaces[namespace] = service_name
        logger.debug("Registered service %s (%s): %d operations, %d types",
                     service_name, namespace, len(schema.operations), len(schema.types))
        return schema

    def service(self, service_name: str) -> ServiceSchema:
        schema = self._services.get(service_name)
        if schema is None:
            canonical = self._aliases.get(service_name.lower())
            schema = self._services.get(canonical) if canonical else None
        if schema is None:
            raise UnknownOperation(service_name)
        return schema

    def lookup(self, service_name: str, operation_name: str) -> OperationDescriptor:
        descriptor = self.service(service_name).operations.get(operation_name)
        if descriptor is None:
            raise UnknownOperation(service_name, operation_name)
        return descriptor

    def namespace(self, service_name: str) -> str:
        return self.service(service_name).namespace

    def service_for_namespace(self, namespace: str) -> Optional[str]:
        return self._namespaces.get(namespace)

    def canonical_name(self, service_name: str) -> str:
        return self.service(service_name).name

    def services(self) -> List[str]:
        return list(self._services)

    def __contains__(self, service_name: str) -> bool:
        return service_name.lower() in self._aliases


_default_registry: Optional[SchemaRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> SchemaRegistry:
    """The process-wide registry, loaded once from the bundled schema dictionary."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            from .schema import load
            registry = SchemaRegistry()
            load(registry)
            _default_registry = registry
    return _default_registry
