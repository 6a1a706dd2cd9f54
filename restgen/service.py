"""RPC services and methods with their REST mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from restgen.descriptors import FieldType, MessageDescriptor, MethodDescriptor, ServiceDescriptor
from restgen.fieldmeta import FieldMetadata, FieldPath
from restgen.model import File, Message, RegistryError
from restgen.naming import sanitize
from restgen.paths import PathParam, harmonize_path_vars, parse_path
from restgen.querystring import QueryStringError, QueryStringParams

if TYPE_CHECKING:
    from restgen.registry import Registry

RESTMAP_IMPORT = "restgen/pbmap"
"""Import the generated code needs once a message's query map is used."""


@dataclass(eq=False)
class Method:
    """An RPC method with the REST mapping taken from its options."""

    descriptor: MethodDescriptor
    package: str = ""
    registry: Optional["Registry"] = field(default=None, repr=False)
    input_type: Optional[MessageDescriptor] = field(default=None, repr=False)
    output_type: Optional[MessageDescriptor] = field(default=None, repr=False)
    rest_method: str = ""
    rest_path: str = ""
    rest_body: str = ""
    rest_path_vars: list[PathParam] = field(default_factory=list)
    rest_query_string: QueryStringParams = field(default_factory=QueryStringParams)
    name: str = field(init=False)
    _has_method_map: bool = field(default=False, init=False, repr=False)
    _method_map_parsed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name

    def _lookup(self, key: str) -> Optional[Message]:
        return self.registry.get_message(key) if self.registry is not None else None

    def input_type_name(self) -> str:
        """The input type's name without leading dots."""
        return self.descriptor.input_type.lstrip(".")

    def output_type_name(self) -> str:
        """The output type's name without leading dots."""
        return self.descriptor.output_type.lstrip(".")

    def has_method_map(self) -> bool:
        """True if the method carries a method map option."""
        return self._has_method_map

    def has_body_mapping(self) -> bool:
        """True if the request body is mapped."""
        return self.rest_body != ""

    def has_query_string_mapping(self) -> bool:
        """True if query string parameters are mapped."""
        return len(self.rest_query_string) != 0

    def has_path_params_mapping(self) -> bool:
        """True if URL path parameters are mapped."""
        return len(self.rest_path_vars) != 0

    def harmonized_rest_path(self) -> str:
        """The REST path with every parameter renamed, for conflict-free routing."""
        return harmonize_path_vars(self.rest_path)

    def full_name(self) -> str:
        """The method's name qualified by its package."""
        return f"{self.package}.{self.name}"

    def _apply_method_map(self) -> None:
        mm = self.descriptor.method_map
        if mm is None:
            return

        self._has_method_map = True
        self.rest_method = mm.method
        self.rest_body = mm.body
        self.rest_path = mm.path

        try:
            self.rest_query_string = QueryStringParams.parse(mm.query_string)
        except QueryStringError as err:
            raise RegistryError(f"invalid Query string definition: {err}") from err

        message = self._lookup(self.descriptor.input_type)
        if message is None:
            return

        for param in self.rest_query_string:
            param.metadata = message.get_field_type(param.field)

        for n, raw in enumerate(parse_path(mm.path)):
            san = sanitize(raw)
            try:
                fmds = message.get_field_type(san)
            except RegistryError as err:
                raise RegistryError(
                    f"invalid path definition. Field '{raw}' (sanitized: {san}) not found: {err}"
                ) from err
            self.rest_path_vars.append(
                PathParam(field_raw=raw, field_sanitized=san, n=n, metadata=fmds)
            )

        self._method_map_parsed = True

    def _apply_query_maps(self) -> bool:
        """Add the query maps of the input's message fields; return True if any was used."""
        if not self._has_method_map or self.input_type is None:
            return False

        found = False
        for fd in self.input_type.fields:
            if fd.type != FieldType.MESSAGE:
                continue
            msg = self._lookup(fd.type_name)
            if msg is None or not msg.has_query_map():
                continue

            qm = msg.query_map()
            try:
                params = QueryStringParams.parse(qm.query)
            except QueryStringError as err:
                raise RegistryError(f"error parsing query from {qm}: {err}") from err

            field_name = sanitize(fd.name)
            for param in params:
                tail = msg.get_field_type(param.field)
                own = FieldMetadata(name=fd.name, proto_kind=fd.type, type=fd.type_name)
                param.metadata = FieldPath([own, *tail])
                param.field = f"{field_name}.{param.field}"
                self.rest_query_string.append(param)
                found = True
        return found


@dataclass(eq=False)
class Service:
    """An RPC service with the REST options needed for code generation."""

    descriptor: ServiceDescriptor
    registry: Optional["Registry"] = field(default=None, repr=False)
    file: Optional[File] = field(default=None, repr=False)
    package: str = ""
    go_package: str = ""
    imports: list[str] = field(default_factory=list)
    base_uri: str = ""
    methods: list[Method] = field(default_factory=list)
    comment: str = ""
    index: int = 0
    target_package: str = ""
    version: str = ""
    name: str = field(init=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name

    def register_method(self, method: MethodDescriptor) -> None:
        """Resolve *method*'s REST mapping and add it unless one of that name exists."""
        m = Method(descriptor=method, package=self.package, registry=self.registry)
        if self.registry is not None:
            found = self.registry.get_message(method.input_type)
            if found is not None:
                m.input_type = found.descriptor
            found = self.registry.get_message(method.output_type)
            if found is not None:
                m.output_type = found.descriptor

        m._apply_method_map()
        try:
            used_query_map = m._apply_query_maps()
        except RegistryError as err:
            raise RegistryError(f"Could not read the query map options: {err}") from err
        if used_query_map:
            self.imports.append(RESTMAP_IMPORT)

        if all(existing.name != m.name for existing in self.methods):
            self.methods.append(m)

    def mapped_methods(self) -> list[Method]:
        """The methods exposed on the REST interface, i.e. those with a method map."""
        return [m for m in self.methods if m.has_method_map()]

    def service_type(self) -> str:
        """The name of the server interface the REST endpoints call."""
        return f"{self.package}.{self.name}Server"

    def has_service_map_extension(self) -> bool:
        """True if the service carries a service map option."""
        return self.descriptor.service_map is not None