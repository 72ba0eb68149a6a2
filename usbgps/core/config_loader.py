"""Read the GPS device list (XML or YAML) into a ConfigNode tree."""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from usbgps.core.errors import ConfigLoadError
from usbgps.core.model import ConfigNode

DEFAULT_CONFIG_PATH = Path("/system/etc/odroid-usbgps.xml")
_YAML_SUFFIXES = {".yml", ".yaml"}
_CHILDREN_KEY = "children"
_TEXT_ONLY_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate keys and keeps scalars as text."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# vid/pid values such as 1546 or 0x1546 must reach the registry verbatim.
for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag not in _TEXT_ONLY_TAGS
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigLoadError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@lru_cache(maxsize=1)
def _load_schema_validator() -> Any:
    schema_text = resources.files("usbgps.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> ConfigNode:
    """Parse the document at ``path`` and return its root node.

    The format follows the file suffix: ``.yaml``/``.yml`` is YAML, anything
    else is XML.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ConfigLoadError(f"Could not read configuration file {path}: {exc}") from exc

    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigLoadError(f"Configuration file {path} is not valid UTF-8: {exc}") from exc
        return parse_yaml_config(text, source=str(path))
    # Bytes go to expat as-is so the XML encoding declaration is honoured.
    return parse_xml_config(content, source=str(path))


def parse_xml_config(content: str | bytes, *, source: str = "<string>") -> ConfigNode:
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    try:
        parser.feed(content)
        root = parser.close()
    except ET.ParseError as exc:
        raise ConfigLoadError(f"Invalid XML in {source}: {exc}") from exc
    return _node_from_element(root)


def _node_from_element(element: ET.Element) -> ConfigNode:
    if not isinstance(element.tag, str):
        # Comment or processing instruction.
        return ConfigNode(name="", is_element=False)
    return ConfigNode(
        name=element.tag,
        attributes=dict(element.attrib),
        children=tuple(_node_from_element(child) for child in element),
    )


def parse_yaml_config(content: str, *, source: str = "<string>") -> ConfigNode:
    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Invalid YAML in {source}: {exc}") from exc

    try:
        _load_schema_validator().validate(loaded)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigLoadError(f"Malformed configuration tree in {source}{where}: {exc.message}") from exc

    return _node_from_mapping(loaded)


def _node_from_mapping(element: dict[str, Any]) -> ConfigNode:
    ((name, body),) = element.items()
    if body is None:
        return ConfigNode(name=name)
    if isinstance(body, list):
        return ConfigNode(name=name, children=tuple(_node_from_mapping(child) for child in body))

    attributes = {
        key: value
        for key, value in body.items()
        if key != _CHILDREN_KEY and value is not None
    }
    children = tuple(_node_from_mapping(child) for child in body.get(_CHILDREN_KEY, []))
    return ConfigNode(name=name, attributes=attributes, children=children)
