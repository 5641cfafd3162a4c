"""
Constants for the parser module.
"""

# Project configuration
DEFAULT_CONFIG_FILE = "forge.toml"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_BOUNDARY_MODULE = "forge_runtime.boundary"
DEFAULT_CODEC_MODULE = "forge_runtime.codec"

# Generation targets (mutually exclusive)
TARGET_WRAPPERS = "wrappers"
TARGET_DATA_DRIVER = "data-driver"
GENERATION_TARGETS = (TARGET_WRAPPERS, TARGET_DATA_DRIVER)

SUPPORTED_SCHEMA_FORMATS = ("json", "yaml")

OUTPUT_FILES = {
    "schema_json": "schema.json",
    "schema_yaml": "schema.yaml",
    TARGET_WRAPPERS: "wrappers.py",
    TARGET_DATA_DRIVER: "data_driver.py",
}

# Emission primitives provided by the boundary runtime
EMIT_PRIMITIVE = "emit"
FEED_PRIMITIVE = "feed"
EMIT_PARAMETERS = ("topic", "payload")
FEED_PARAMETERS = ("item",)
RUNTIME_NAMESPACE = "abi"

# Marker decorators, matched on the last segment of the decorator name
MARKER_CUSTOM = "custom"
MARKER_FEEDS = "feeds"
MARKER_EXPOSE = "expose"
MARKER_VIEW = "view"
HANDLER_ROLES = ("encode_input", "decode_input", "decode_output")
FORGE_MARKERS = {MARKER_CUSTOM, MARKER_FEEDS, MARKER_EXPOSE, MARKER_VIEW, *HANDLER_ROLES}

REF_MARKER = "Ref"
MUT_REF_MARKER = "MutRef"
TUPLE_NAMES = {"tuple", "Tuple"}
SELF_TYPE_NAMES = {"Self"}

INIT_OPERATION = "init"

# Names treated as already fully qualified by the type resolver
BUILTIN_TYPE_NAMES = {
    "int",
    "float",
    "complex",
    "bool",
    "str",
    "bytes",
    "bytearray",
    "object",
    "list",
    "tuple",
    "dict",
    "set",
    "frozenset",
    "type",
    "None",
}

# Names available inside the generated dispatch module
DISPATCH_NAMESPACE_NAMES = {"json", "json_to_binary", "binary_to_json", "DispatchError"}
