# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 00:21:44
# @Author : pyprops contributors

import logging

from .properties import (
    Properties, PropertiesFormatError, InvalidPropertyLine,
    read_from, load_from_path,
    PropertiesFileParser, PropertiesJsonParser, PropertiesYamlParser
)

__all__ = [
    'Properties', 'PropertiesFormatError', 'InvalidPropertyLine',
    'read_from', 'load_from_path',
    'PropertiesFileParser', 'PropertiesJsonParser', 'PropertiesYamlParser'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
