"""klaw-decode: Composable decoders for untyped data, with located errors.

Flat imports (preferred):
    from klaw_decode import Decoder, DecodeError, string, number, object_, array
    from klaw_decode import one_of, union, and_then, lazy, map_, at

Submodule imports (for organization):
    from klaw_decode.primitives import string, number, boolean, equal
    from klaw_decode.structural import array, tuple_, object_, dict_, at
    from klaw_decode.control import map_, one_of, union, and_then, lazy
    from klaw_decode.result import Ok, Err
"""

# Configuration
from klaw_decode._config import DecodeConfig, get_config, init

# Logging
from klaw_decode._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from klaw_decode._location import ROOT, escape_key, push_location
from klaw_decode._undefined import UNDEFINED, UndefinedType

# Control combinators
from klaw_decode.control import and_then, lazy, map_, one_of, union

# Core
from klaw_decode.decoder import (
    DecodeFn,
    Decoder,
    EntryDecoder,
    JsonValue,
    decode_any,
    decode_json,
)

# Errors
from klaw_decode.errors import (
    DecodeError,
    DecodeFailure,
    FailureKind,
    MalformedJSONError,
    describe,
)

# Primitives
from klaw_decode.primitives import boolean, equal, fail, number, string, succeed
from klaw_decode.result import Err, Ok, Result

# Structural combinators
from klaw_decode.structural import array, at, dict_, list_, object_, tuple_

__all__ = [
    'ROOT',
    'UNDEFINED',
    'DecodeConfig',
    'DecodeError',
    'DecodeFailure',
    'DecodeFn',
    'Decoder',
    'EntryDecoder',
    'Err',
    'FailureKind',
    'JsonValue',
    'MalformedJSONError',
    'Ok',
    'Result',
    'UndefinedType',
    'add_log_hook',
    'and_then',
    'array',
    'at',
    'boolean',
    'clear_log_hooks',
    'configure_logging',
    'decode_any',
    'decode_json',
    'describe',
    'dict_',
    'equal',
    'escape_key',
    'fail',
    'get_config',
    'get_logger',
    'init',
    'lazy',
    'list_',
    'map_',
    'number',
    'object_',
    'one_of',
    'push_location',
    'remove_log_hook',
    'string',
    'succeed',
    'tuple_',
    'union',
]
