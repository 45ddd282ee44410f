# jsonpatchkit

jsonpatchkit applies JSON Patch documents (RFC 6902) to JSON values. A JSON value is one of the
ordinary Python objects that `json.loads` returns: `dict`, `list`, `str`, `int`, `float`, `bool`
or `None`.

The package has no dependencies beyond the standard library.

## Installation

```
pip install jsonpatchkit
```

## Usage

Everything is in the `jsonpatchkit.patch` module. The module provides the function `apply_patch` and
the exception `PatchError`.

```python
from jsonpatchkit.patch import apply_patch, PatchError

doc = {"foo": ["bar", "baz"]}
patch = [
    {"op": "add", "path": "/foo/1", "value": "qux"},
    {"op": "test", "path": "/foo/0", "value": "bar"},
    {"op": "move", "from": "/foo/2", "path": "/last"},
]

result = apply_patch(doc, patch)
# result == {"foo": ["bar", "qux"], "last": "baz"}
# doc is unchanged
```

### `apply_patch(document, patch, *, in_place=False)`

`patch` must be a list of operation objects. The operations are applied in order.

- With `in_place=False`, which is the default, the document is deep-copied and the copy is patched.
  The document you pass in is left unchanged.
- With `in_place=True`, the document you pass in is modified as each operation succeeds.

In both modes the function returns the patched value. Use the return value as the result.
An operation on the root path (`""`) replaces the whole document, and removing the root makes the
result `None`.

The values taken from `add` and `replace` operations are deep-copied into the document. `copy` also
inserts a deep copy of the source value.

### Operations

Paths are JSON Pointers (RFC 6901). `~1` stands for `/` and `~0` stands for `~`.

- `add` sets a key in an object. In an array it inserts at an index, or appends when the last token is
  `-`. An index greater than the array length is rejected.
- `remove` deletes the target.
- `replace` requires the target to exist, then overwrites it.
- `move` removes the value at `from` and adds it at `path`.
- `copy` adds a copy of the value at `from` at `path`.
- `test` compares the value at `path` with `value`. The comparison is strict about types: `1` and
  `1.0` are not equal, and `true` is not equal to `1`. Object key order is ignored.

For `move` and `copy`, if `from` is a textual prefix of `path`, the operation fails. The one exception
is when the two are identical: the operation then does nothing.

Array indices must be plain decimal numbers without leading zeros. For example, `01` and `-1` are invalid.

### Errors

When an operation fails, `apply_patch` raises `PatchError`. The exception has these attributes:

- `errno_code`: the kind of failure.
  - `errno.ENOENT`: a referenced location does not exist, or a `test` did not match.
  - `errno.EINVAL`: a malformed operation or an invalid path. This covers a missing `op`, `path`,
    `value` or `from` field, an unknown `op`, and a bad array index.
  - `errno.EFAULT`: `patch` is not a list.
- `patch_failure_idx`: the index of the failing operation, or `None` when the failure concerns the
  patch as a whole.
- `message`: a human-readable description. It is also what `str(exc)` returns.

```python
import errno

try:
    apply_patch({"a": 1}, [{"op": "remove", "path": "/b"}])
except PatchError as exc:
    assert exc.errno_code == errno.ENOENT
    assert exc.patch_failure_idx == 0
    print(exc.message)  # Did not find element referenced by path field
```

When you patch in place, the operations before the failing one have already been applied.

## What it does not do

jsonpatchkit only applies patches to values that are already in memory:

- It does not read or write files.
- It does not parse JSON text.
- It does not create patches by comparing two documents.
- It does not provide a command-line tool.
- The JSON Pointer resolution it uses internally is not offered as a public API.