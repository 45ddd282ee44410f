"""Apply JSON Patch (RFC 6902) documents to plain Python JSON values.

JSON values are represented by the usual Python types: ``dict`` for objects,
``list`` for arrays, ``str``, ``int``, ``float``, ``bool`` and ``None``.
"""

from __future__ import annotations

import copy
import errno
import json
from dataclasses import dataclass
from typing import Any, Callable

_DIGITS = frozenset("0123456789")


class PatchError(Exception):
    """Raised when a patch cannot be applied.

    ``errno_code`` is one of ``errno.ENOENT`` (a referenced location does not
    exist or a test failed), ``errno.EINVAL`` (an invalid operation or path)
    or ``errno.EFAULT`` (the patch itself is not an array).
    ``patch_failure_idx`` is the index of the failing operation, or ``None``
    for errors that concern the patch as a whole.
    """

    def __init__(self, errno_code, message, patch_failure_idx=None):
        super().__init__(message)
        self.errno_code = errno_code
        self.message = message
        self.patch_failure_idx = patch_failure_idx

    def __str__(self) -> str:
        return self.message


class _PointerError(Exception):
    def __init__(self, errno_code: int) -> None:
        super().__init__(errno_code)
        self.errno_code = errno_code


class _OperationError(Exception):
    def __init__(self, errno_code: int, message: str) -> None:
        super().__init__(message)
        self.errno_code = errno_code
        self.message = message


@dataclass
class _Location:
    parent: Any
    key: str | None
    index: int | None
    value: Any


ArraySetter = Callable[[list, int, Any], None]


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _parse_index(token: str) -> int:
    if len(token) == 1:
        if token in _DIGITS:
            return int(token)
        raise _PointerError(errno.EINVAL)
    if token.startswith("0") or not all(ch in _DIGITS for ch in token):
        raise _PointerError(errno.EINVAL)
    return int(token) if token else 0


def _resolve(document: Any, path: str | None) -> _Location:
    if path is None:
        raise _PointerError(errno.EINVAL)
    if path == "":
        return _Location(None, None, None, document)
    if not path.startswith("/"):
        raise _PointerError(errno.EINVAL)

    location = _Location(None, None, None, document)
    for token in path[1:].split("/"):
        current = location.value
        if isinstance(current, list):
            idx = _parse_index(token)
            if idx >= len(current):
                raise _PointerError(errno.ENOENT)
            location = _Location(current, None, idx, current[idx])
        elif isinstance(current, dict):
            name = _unescape(token)
            if name not in current:
                raise _PointerError(errno.ENOENT)
            location = _Location(current, name, None, current[name])
        else:
            raise _PointerError(errno.ENOENT)
    return location


def _put_at(array: list, idx: int, value: Any) -> None:
    if idx < len(array):
        array[idx] = value
    else:
        array.extend([None] * (idx - len(array)))
        array.append(value)


def _insert_at(array: list, idx: int, value: Any) -> None:
    if idx >= len(array):
        _put_at(array, idx, value)
    else:
        array.insert(idx, value)


def _array_insert(array: list, idx: int, value: Any) -> None:
    if idx > len(array):
        raise _PointerError(errno.EINVAL)
    _insert_at(array, idx, value)


def _array_replace(array: list, idx: int, value: Any) -> None:
    if idx > len(array):
        raise _PointerError(errno.EINVAL)
    _put_at(array, idx, value)


def _array_mover(source_parent: Any) -> ArraySetter:
    def move_into(array: list, idx: int, value: Any) -> None:
        limit = len(array)
        # The element was already taken out of this array, so the
        # end position of the original array is still acceptable.
        if array is source_parent:
            limit += 1
        if idx > limit:
            raise _PointerError(errno.EINVAL)
        _insert_at(array, idx, value)

    return move_into


def _set(document: Any, path: str | None, value: Any, array_setter: ArraySetter) -> Any:
    if path is None:
        raise _PointerError(errno.EINVAL)
    if path == "":
        return value
    if not path.startswith("/"):
        raise _PointerError(errno.EINVAL)

    head, _, last = path.rpartition("/")
    parent = document if head == "" else _resolve(document, head).value
    if isinstance(parent, list):
        if last == "-":
            parent.append(value)
        else:
            array_setter(parent, _parse_index(last), value)
    elif isinstance(parent, dict):
        parent[_unescape(last)] = value
    else:
        raise _PointerError(errno.EINVAL)
    return document


def _remove(document: Any, location: _Location) -> Any:
    if isinstance(location.parent, list):
        del location.parent[location.index]
        return document
    if location.parent is not None and location.key is not None:
        del location.parent[location.key]
        return document
    return None


def _json_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict):
        return (
            isinstance(b, dict)
            and a.keys() == b.keys()
            and all(_json_equal(value, b[key]) for key, value in a.items())
        )
    if isinstance(a, list):
        return (
            isinstance(b, list)
            and len(a) == len(b)
            and all(_json_equal(x, y) for x, y in zip(a, b))
        )
    if isinstance(a, int):
        return isinstance(b, int) and a == b
    if isinstance(a, float):
        return isinstance(b, float) and a == b
    if isinstance(a, str):
        return isinstance(b, str) and a == b
    if a is None:
        return b is None
    return a == b


def _as_string(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def _pointer_failure(exc: _PointerError, field: str) -> _OperationError:
    if exc.errno_code == errno.ENOENT:
        message = f"Did not find element referenced by {field} field"
    else:
        message = f"Invalid {field} field"
    return _OperationError(exc.errno_code, message)


def _require_value(operation: dict) -> Any:
    if "value" not in operation:
        raise _OperationError(errno.EINVAL, "Patch object does not contain a 'value' field")
    return operation["value"]


def _op_test(document: Any, operation: dict, path: str | None) -> Any:
    expected = _require_value(operation)
    try:
        actual = _resolve(document, path).value
    except _PointerError as exc:
        raise _pointer_failure(exc, "path") from None
    if not _json_equal(expected, actual):
        raise _OperationError(
            errno.ENOENT,
            "Value of element referenced by 'path' field did not match 'value' field",
        )
    return document


def _op_remove(document: Any, operation: dict, path: str | None) -> Any:
    try:
        location = _resolve(document, path)
    except _PointerError as exc:
        raise _pointer_failure(exc, "path") from None
    return _remove(document, location)


def _set_or_fail(document: Any, path: str | None, value: Any, setter: ArraySetter) -> Any:
    try:
        return _set(document, path, value, setter)
    except _PointerError as exc:
        raise _OperationError(
            exc.errno_code, "Failed to set value at path referenced by 'path' field"
        ) from None


def _op_add(document: Any, operation: dict, path: str | None) -> Any:
    value = copy.deepcopy(_require_value(operation))
    return _set_or_fail(document, path, value, _array_insert)


def _op_replace(document: Any, operation: dict, path: str | None) -> Any:
    value = copy.deepcopy(_require_value(operation))
    try:
        _resolve(document, path)
    except _PointerError as exc:
        raise _pointer_failure(exc, "path") from None
    return _set_or_fail(document, path, value, _array_replace)


def _move_or_copy(document: Any, operation: dict, path: str | None, move: bool) -> Any:
    if "from" not in operation:
        raise _OperationError(errno.EINVAL, "Patch does not contain a 'from' field")
    source = _as_string(operation["from"])

    if source is not None and path is not None and path.startswith(source):
        # RFC 6902 4.4: a location cannot be moved into one of its children.
        if len(source) == len(path):
            return document
        raise _OperationError(errno.EINVAL, "Invalid attempt to move parent under a child")

    try:
        location = _resolve(document, source)
    except _PointerError as exc:
        raise _pointer_failure(exc, "from") from None

    if move:
        value = location.value
        document = _remove(document, location)
        setter = _array_mover(location.parent)
    else:
        value = copy.deepcopy(location.value)
        setter = _array_insert
    return _set_or_fail(document, path, value, setter)


def _op_move(document: Any, operation: dict, path: str | None) -> Any:
    return _move_or_copy(document, operation, path, move=True)


def _op_copy(document: Any, operation: dict, path: str | None) -> Any:
    return _move_or_copy(document, operation, path, move=False)


_OPERATIONS = {
    "test": _op_test,
    "remove": _op_remove,
    "add": _op_add,
    "replace": _op_replace,
    "move": _op_move,
    "copy": _op_copy,
}


def _apply_operation(document: Any, operation: Any) -> Any:
    if not isinstance(operation, dict) or "op" not in operation:
        raise _OperationError(errno.EINVAL, "Patch object does not contain 'op' field")
    op_name = _as_string(operation["op"])
    if "path" not in operation:
        raise _OperationError(errno.EINVAL, "Patch object does not contain 'path' field")
    path = _as_string(operation["path"])

    handler = _OPERATIONS.get(op_name) if op_name is not None else None
    if handler is None:
        raise _OperationError(errno.EINVAL, "Patch object has invalid 'op' field")
    return handler(document, operation, path)


def apply_patch(document, patch, *, in_place=False):
    """Apply ``patch`` (a list of RFC 6902 operations) and return the result.

    Unless ``in_place`` is true the document is deep-copied first and left
    untouched. In place, the document is modified as operations succeed, so it
    may be partly patched when an error is raised; the returned value is the
    authoritative result, since operations on the root path replace it, and
    removing the root yields ``None``.
    """
    if not isinstance(patch, list):
        raise PatchError(errno.EFAULT, "Patch object is not of type json_type_array", None)

    result = document if in_place else copy.deepcopy(document)
    for idx, operation in enumerate(patch):
        try:
            result = _apply_operation(result, operation)
        except _OperationError as exc:
            raise PatchError(exc.errno_code, exc.message, idx) from None
    return result