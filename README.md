# jclassparse

Parsing and validation of the building blocks of Java class files. It covers
the constant pool, field and method descriptors, and class, method and module
names. It is pure Python and has no dependencies.

## Installation

```
pip install jclassparse
```

## Modules

- `jclassparse.binary`: `ByteReader` reads big-endian unsigned values with
  `read_u1`, `read_u2`, `read_u4` and `read_u8`, and raw byte runs with
  `read_bytes(length)`. It keeps track of its own `position`, and `at_end()`
  tells whether every byte has been read.
- `jclassparse.flags`: the `IntFlag` types `AccessFlags`, `FieldAccessFlags`,
  `MethodAccessFlags` and `ClassAccessFlags`. `parse_flags(flag_type, value)`
  builds a flag value and drops any bits that the type does not define.
- `jclassparse.names`: `is_binary_name`, `is_unqualified_name`,
  `is_unqualified_method_name(name, allow_init, allow_clinit)` and
  `is_module_name`.
- `jclassparse.descriptors`:
  - `parse_field_descriptor`, `parse_method_descriptor`,
    `parse_return_descriptor` and `parse_array_descriptor` return
    `FieldDescriptor` and `MethodDescriptor` values.
  - A field type is a `BaseType` or an `ObjectType` holding a `ClassName`.
  - A void return type is `None`.
  - `ClassName.parse` checks a `/`-separated class name.
  - Calling `str()` on these objects gives back the descriptor text.
  - `is_field_descriptor`, `is_array_descriptor`, `is_method_descriptor` and
    `is_return_descriptor` test whether a whole string is one descriptor.
- `jclassparse.constant_pool`:
  - `read_constant_pool(reader, major_version)` reads, resolves and validates
    a constant pool and returns a list of `ConstantPoolEntry`. Slot 0 is a
    placeholder.
  - Each long and double takes two slots.
  - Entry tags that the given major version does not allow are rejected.
  - `decode_modified_utf8` decodes the modified UTF-8 used for string data.
    UTF-8 data that cannot be decoded is kept as `bytes`.
- `jclassparse.pool_items`:
  - It reads typed references into a pool, such as `read_cp_utf8`,
    `read_cp_classinfo`, `read_cp_memberref(reader, pool, allowed)`,
    `read_cp_methodhandle` and `read_cp_bootstrap_argument`.
  - `get_cp_loadable(index, pool)` returns a loadable constant.
  - `iter_constant_pool(pool)` yields a `ConstantPoolItem` for every entry.
    It skips UTF-8 entries and unused slots.

Malformed input raises `jclassparse.errors.ParseError`. It has a `msg` and a
tuple of `contexts`, and its text names where the problem was found, for
example `Invalid field descriptor for constant pool entry 7`.

## Example

```python
from jclassparse.binary import ByteReader
from jclassparse.constant_pool import read_constant_pool
from jclassparse.descriptors import parse_method_descriptor
from jclassparse.pool_items import iter_constant_pool

descriptor = parse_method_descriptor("(ILjava/lang/String;)V", 0)
print(len(descriptor.parameters), str(descriptor))

with open("Example.class", "rb") as handle:
    reader = ByteReader(handle.read())
reader.read_u4()                  # magic number
reader.read_u2()                  # minor version
major = reader.read_u2()
pool = read_constant_pool(reader, major)
for item in iter_constant_pool(pool):
    print(item.kind, item.value)
```

## What it does not do

The package has no single call that parses a whole class file. It does not
check the magic number, and the caller reads the version numbers, as in the
example above.

The package does not read the following parts of a class file:

- the class access flags, `this_class`, `super_class` and the interfaces;
- fields and methods;
- attributes and bytecode.

The reader, flag and `pool_items` functions are the pieces from which such
parsing can be built.