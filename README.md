# restgen

`restgen` takes descriptions of protobuf files that carry REST mapping
options (service, method and query maps) and builds a registry of the
files, messages, enums, services and methods in them. The registry holds
what a generator of HTTP gateway code needs: REST verbs and paths, path
parameters, query string parameters, the chain of fields each parameter
writes to, and the converter for each value.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Naming helpers (`restgen.naming`)

Protobuf field names are snake case; generated code uses camel case.
`sanitize` camel-cases a name and appends `_` to names that protobuf
reserves for generated methods (`Reset`, `String`, `ProtoMessage`,
`Descriptor`).

```python
from restgen.naming import camel_case, sanitize

camel_case("hello_world")   # "HelloWorld"
camel_case("_x")            # "XX"
sanitize("reset")           # "Reset_"
```

## REST paths (`restgen.paths`)

Path parameters are written as `:name` segments.

```python
from restgen.paths import PathParam, parse_path, harmonize_path_vars

parse_path("/City/:postal/Street/:name")           # ["postal", "name"]
harmonize_path_vars("/City/:postal/Street/:name")  # "/City/:id/Street/:id"
PathParam.from_field("postal").field_sanitized     # "Postal"
```

`harmonize_path_vars` gives a form of the path that a router can register
without clashing with routes that name their parameters differently.

## Query string definitions (`restgen.querystring`)

A query string mapping has the form `key1=<field1:type1>&key2=<field2:type2>`.
The angle brackets may be left out, and so may the type. Supported types are
`string`, `int`, `float`, `bool` and `bytes` (bytes are expected as URL-safe
Base64). `QueryStringParams` is a list of `QSParameter` sorted by key.

```python
from restgen.querystring import QueryStringParams, QueryStringError

params = QueryStringParams.parse("key1=<value1:int>&key2=<value2:string>")
p = params.get_param_for_key("key1")
p.field   # "value1"
p.type    # "int"
params.get_param_for_key("missing")   # None

QueryStringParams.parse("key1=value1:int16")   # raises QueryStringError
```

A key defined more than once, more than one `:` in a definition, an
unsupported type or a bad `%` escape is rejected with `QueryStringError`
(a subclass of `ValueError`).

## Describing protobuf files (`restgen.descriptors`)

Files are described with plain dataclasses: `FileDescriptor`,
`MessageDescriptor`, `FieldDescriptor`, `EnumDescriptor`,
`EnumValueDescriptor`, `ServiceDescriptor` and `MethodDescriptor`, with
`ServiceMap`, `MethodMap` and `QueryMap` for the REST options. Field types
and labels are the `FieldType` and `Label` enums. Every class has
`from_dict` and `to_dict`, so descriptions can be kept as JSON or YAML; in
dictionaries, types and labels may be given by number or by name
(`"string"`, `"TYPE_STRING"`, `"repeated"`, ...).

## Building a registry (`restgen.registry`)

Pass the file descriptions to `Registry.from_files`. Imported files come
first; the last file is the one whose service is used, and it must set
`go_package`.

```python
from restgen.descriptors import (
    FieldDescriptor, FieldType, FileDescriptor, MessageDescriptor,
    MethodDescriptor, MethodMap, ServiceDescriptor, ServiceMap,
)
from restgen.registry import Registry

shop = FileDescriptor(
    name="shop.proto",
    package="shop",
    go_package="example/shop",
    messages=[
        MessageDescriptor(name="GetItemRequest", fields=[
            FieldDescriptor(name="Id", type=FieldType.INT64, number=1),
            FieldDescriptor(name="Verbose", type=FieldType.BOOL, number=2),
        ]),
        MessageDescriptor(name="Item"),
    ],
    services=[ServiceDescriptor(
        name="Shop",
        service_map=ServiceMap(version="v1", base_uri="/shop", target_package="shopgw"),
        methods=[MethodDescriptor(
            name="GetItem",
            input_type=".shop.GetItemRequest",
            output_type=".shop.Item",
            method_map=MethodMap(method="GET", path="/items/:id",
                                 query_string="verbose=<Verbose:bool>"),
        )],
    )],
)

registry = Registry.from_files([shop])
service = registry.service
service.service_type()                  # "shop.ShopServer"
method = service.mapped_methods()[0]
method.full_name()                      # "shop.GetItem"
method.rest_method                      # "GET"
method.harmonized_rest_path()           # "/items/:id"
var = method.rest_path_vars[0]
var.field_sanitized                     # "Id"
var.metadata.converter_name()           # "ToInt64"
qs = method.rest_query_string.get_param_for_key("verbose")
qs.metadata.get_path()                  # ".Verbose"
```

Path parameters are camel-cased with `sanitize` before they are looked up
among the input message's fields. Query string and path parameters may
name nested fields (`User.Name`); every step but the last must be a
message field. When a field of the input message has a type with a query
map, that map's parameters are added to the method's query string,
prefixed with the field's name, and `restgen/pbmap` is added to the
service's `imports`.

`Registry` also keeps `files`, `messages` and `enums`, looked up with
`get_file`, `get_message` (by qualified name such as `.shop.Item`) and
`get_enum` (by plain or qualified name). Each `Message` and `Field` of
`restgen.model` answers questions code templates ask (`is_repeated`,
`is_message`, `is_enum`, `is_bytes`, `is_intermediate_map`), and
`FieldPath.generate()` writes the statements that create the intermediate
messages on a nested field path.

Only one service per file is supported, and only methods with a method map
are exposed over REST. Invalid input raises `RegistryError` from
`restgen.model`: an empty list of files, a root file with a service but no
`go_package`, an enum whose values do not run from 0 without gaps, a bad
query string definition, or a path or query parameter that names no
suitable field of the request message.

## What restgen does not do

restgen builds the registry only. It does not read compiler plugin requests
from standard input, does not decode binary protobuf descriptors, has no
command-line tool, and does not render or write gateway source code; a
template or program of your own turns the registry into code.