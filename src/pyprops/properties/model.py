# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 22:03:51
# @Author : pyprops contributors

"""
Flat `key=value` documents with a chain of defaults.

    ```properties
    # comment, skipped
    name=pyprops
    url=http://host/?a=b
    ```

Only the first `=` separates, so `url` above maps to `http://host/?a=b`.
A line is stripped as a whole, but spaces around `=` are kept:
` key1 = val1 ` gives the key `"key1 "` and the value `" val1"`.

No escapes, no line continuation, no sections. Keys and values are `str`.
"""

import logging
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from io import TextIOBase
from warnings import warn

__all__ = [
    'Properties', 'PropertiesFormatError', 'InvalidPropertyLine',
    'read_from', 'load_from_path'
]


class PropertiesFormatError(ValueError):
    """Content that can't be represented as a flat `str: str` document."""


class InvalidPropertyLine(PropertiesFormatError):
    """A non-blank, non-comment line without `=`."""
    def __init__(self, lineno: int, line: str) -> None:
        super().__init__(f'line {lineno}: missing "=" in {line!r}')
        self.lineno = lineno
        self.line = line


class Properties(MutableMapping[str, str]):
    """键值对字典，附带一条只读的默认值（`defaults`）链。

    查找先看本地，再依次回退到 defaults；增删改只作用于本地。
    所以删除本地的键之后，*仍可能*从 defaults 读到同名的值。

    Note: this class does no locking. Mutating a store while another
    thread reads it (or any store below it in a defaults chain)
    is left to the caller.
    """
    def __init__(
        self,
        defaults: 'Properties | None' = None,
        pairs: Mapping[str, str] | None = None
    ) -> None:
        self._data: dict[str, str] = {}
        self._defaults: Properties | None = None
        self.defaults = defaults
        if pairs:
            self._data.update(pairs)

    @property
    def defaults(self) -> 'Properties | None':
        """Fallback store. Shared by reference, never written through."""
        return self._defaults

    @defaults.setter
    def defaults(self, value: 'Properties | None') -> None:
        node = value
        while node is not None:
            if node is self:
                raise ValueError('defaults chain would loop back to itself.')
            node = node._defaults
        self._defaults = value

    def _chain(self) -> Iterator['Properties']:
        node: Properties | None = self
        while node is not None:
            yield node
            node = node._defaults

    def _collect_keys(self) -> dict[str, None]:
        # deepest defaults first, as a dict to keep it deduplicated.
        ret: dict[str, None] = {}
        for node in reversed(list(self._chain())):
            ret.update(dict.fromkeys(node._data))
        return ret

    def __getitem__(self, key: str) -> str:
        value, found = self.lookup(key)
        if not found:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return any(key in node._data for node in self._chain())

    def __len__(self) -> int:
        return len(self._collect_keys())

    def __iter__(self) -> Iterator[str]:
        return iter(self._collect_keys())

    def __repr__(self) -> str:
        return '<Properties> { .local = %d, .total = %d }' % (
            len(self._data), len(self))

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def lookup(self, key: str) -> tuple[str, bool]:
        """Returns `(value, True)`, or `('', False)` if no level has `key`."""
        for node in self._chain():
            if key in node._data:
                return node._data[key], True
        return '', False

    def get_default(self, key: str, fallback: str) -> str:
        value, found = self.lookup(key)
        return value if found else fallback

    def remove(self, key: str) -> None:
        """Delete `key` locally. Missing keys are ignored."""
        self._data.pop(key, None)
        if self._defaults is not None and key in self._defaults:
            warn(
                f'"{key}" is still provided by defaults, '
                'lookups will keep returning that value.')

    # the mixins pick keys chain-wide, but only local pairs can go.
    def popitem(self) -> tuple[str, str]:
        """Remove and return a local pair. `KeyError` if none is left."""
        return self._data.popitem()

    def clear(self) -> None:
        """Drop every local pair. Defaults stay readable."""
        self._data.clear()

    def filter(self, predicate: Callable[[str], bool]) -> 'Properties':
        """Flattened snapshot of entries whose *key* passes `predicate`.

        The result has no defaults; later changes to this store
        (or its defaults) don't show up in it.
        """
        ret = Properties()
        for key in self:
            if predicate(key):
                ret.put(key, self[key])
        return ret

    def filter_has_prefix(self, prefix: str) -> 'Properties':
        return self.filter(lambda key: key.startswith(prefix))

    def to_dict(self, flatten: bool = True) -> dict[str, str]:
        """合并 defaults 链，获取实际生效的键值对；`flatten=False` 则只取本地。"""
        if not flatten:
            return self._data.copy()
        return {key: self[key] for key in self}

    def parse_from(self, buf: TextIOBase) -> int:
        """Read `key=value` lines from a text stream into this store.

        Returns the UTF-8 byte count of the line contents consumed
        (terminators excluded). Stops at the first malformed line with
        `InvalidPropertyLine`; pairs before it stay put.
        """
        consumed, lineno = 0, 0
        seen: set[str] = set()
        while i := buf.readline():
            lineno += 1
            i = i.removesuffix('\n').removesuffix('\r')
            consumed += len(i.encode('utf-8'))
            trimmed = i.strip()
            if not trimmed or trimmed[0] == '#':
                continue
            key, sep, val = trimmed.partition('=')
            if not sep:
                raise InvalidPropertyLine(lineno, i)
            if key in seen:
                warn(f'line {lineno}: "{key}" defined again, '
                     'the earlier value is overridden.')
            seen.add(key)
            self.put(key, val)
        logging.debug(f'parsed {len(seen)} keys from {lineno} lines.')
        return consumed

    def write_to(self, buf: TextIOBase) -> int:
        """Write local entries (defaults excluded) as `key=value` lines.

        Nothing is escaped. Returns UTF-8 bytes written.
        """
        written = 0
        for k, v in self._data.items():
            line = f'{k}={v}\n'
            buf.write(line)
            written += len(line.encode('utf-8'))
        return written

    def load_from(self, filename: str, encoding: str = 'utf-8') -> None:
        # only `\n` ends a line, `\r` is dropped by `parse_from`.
        with open(filename, 'r', encoding=encoding, newline='\n') as fp:
            self.parse_from(fp)
        logging.info(f'loaded {filename}: {len(self._data)} local keys.')

    def save_to(self, filename: str, encoding: str = 'utf-8') -> None:
        with open(filename, 'w', encoding=encoding, newline='') as fp:
            self.write_to(fp)
        logging.info(f'saved {filename}: {len(self._data)} keys.')


def read_from(buf: TextIOBase) -> Properties:
    ret = Properties()
    ret.parse_from(buf)
    return ret


def load_from_path(filename: str, encoding: str = 'utf-8') -> Properties:
    ret = Properties()
    ret.load_from(filename, encoding)
    return ret
