# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 00:20:05
# @Author : pyprops contributors

from .model import (
    Properties,
    PropertiesFormatError,
    InvalidPropertyLine,
    read_from,
    load_from_path
)
from .parser import (
    PropertiesParser,
    PropertiesFileParser,
    PropertiesJsonParser,
    PropertiesYamlParser
)
