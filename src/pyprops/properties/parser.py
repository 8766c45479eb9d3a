# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 00:12:26
# @Author : pyprops contributors

import json
import logging
from collections.abc import Mapping
from io import StringIO
from typing import Any
from warnings import warn

import chardet
import yaml

from ..abstract import FileHandler
from .model import Properties, PropertiesFormatError

__all__ = [
    'PropertiesParser', 'PropertiesFileParser',
    'PropertiesJsonParser', 'PropertiesYamlParser'
]


# should keep this base class for better type hinting.
class PropertiesParser(FileHandler[Properties]):
    def __init__(
        self,
        filename: str,
        encoding: str | None = 'utf-8', *,
        defaults: Properties | None = None
    ) -> None:
        """`defaults` would be attached to every document read."""
        super().__init__(filename, encoding)
        self._defaults = defaults

    def _new_document(self) -> Properties:
        return Properties(self._defaults)

    @staticmethod
    def _to_pairs(src: Any) -> dict[str, str]:
        """Coerce a decoded JSON/YAML mapping into `str: str` pairs."""
        if src is None:  # empty yaml document
            return {}
        if not isinstance(src, Mapping):
            raise PropertiesFormatError(
                f'expected a mapping at top level, got {type(src).__name__}.')
        ret: dict[str, str] = {}
        for k, v in src.items():
            # yaml turns `null`, `yes` keys into None, True.
            if isinstance(k, bool) or not isinstance(k, (str, int, float)):
                raise PropertiesFormatError(
                    f'key {k!r} ({type(k).__name__}) is not text.')
            if isinstance(v, (Mapping, list)):
                raise PropertiesFormatError(
                    f'"{k}" holds a nested {type(v).__name__}, '
                    'only flat values are supported.')
            # may there be some pure digits considered as int
            ret[str(k)] = '' if v is None else str(v)
        return ret


class PropertiesFileParser(PropertiesParser):
    """`.properties` 文件读写。

    `encoding=None` 时用 chardet 猜测编码（适合来路不明的旧文件）。
    """
    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}
        logging.debug(f'{filename}: decoding as {codec["encoding"]}.')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            warn(f'{filename} is not {codec["encoding"]}, trying gbk.')
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self) -> Properties:
        ret = self._new_document()
        if self._codec is None:
            ret.parse_from(self._decode_file(self._fn))
            logging.info(f'loaded {self._fn}: {len(ret.to_dict(False))} '
                         'local keys.')
        else:
            ret.load_from(self._fn, self._codec)
        return ret

    def write(self, instance: Properties, *, flatten: bool = False) -> None:
        """Save to the file this parser was made for.

        By default only local pairs are saved, as `Properties.save_to()`.
        `flatten=True` saves the effective pairs, defaults included.
        """
        if flatten:
            instance = Properties(pairs=instance.to_dict())
        instance.save_to(self._fn, self._codec or 'utf-8')

    def __str__(self) -> str:
        return f'{super().__str__()}({self._codec or "auto"})'


class PropertiesJsonParser(PropertiesParser):
    """A flat JSON object, `{"key": "value", ...}`."""

    def read(self) -> Properties:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src = json.load(fp)
        ret = self._new_document()
        ret.update(self._to_pairs(src))
        return ret

    def write(
        self, instance: Properties, *,
        flatten: bool = False, indent: int = 2
    ) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(instance.to_dict(flatten), fp,
                      ensure_ascii=False, indent=indent)
        logging.info(f'exported {self._fn} as json.')


class PropertiesYamlParser(PropertiesParser):
    """A flat YAML mapping.

    Plain scalars are read back as `str`, e.g. `port: 8080` -> `"8080"`,
    `debug: yes` -> `"True"`.
    """

    def read(self) -> Properties:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src = yaml.load(fp, yaml.FullLoader)
        ret = self._new_document()
        ret.update(self._to_pairs(src))
        return ret

    def write(
        self, instance: Properties, *,
        flatten: bool = False, indent: int = 2
    ) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            # quote everything, or `8080` would come back as an int.
            yaml.dump(instance.to_dict(flatten), fp,
                      allow_unicode=True, default_style="'",
                      indent=indent, sort_keys=False)
        logging.info(f'exported {self._fn} as yaml.')
