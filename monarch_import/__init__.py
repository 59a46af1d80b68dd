"""Public interface for the ``monarch_import`` package.

Symbol re-exports only; no runtime logic lives here.
"""

from .config import DEFAULT_SCHEMA, Settings, SourceSchema, load_settings
from .convert import combine_stats, convert, convert_files
from .learning import learn_account, learn_knowledge
from .matching import are_similar, find_inconsistent_merchants, first_match
from .models import (
    DEFAULT_ACCOUNT,
    OUTPUT_FIELDS,
    UNCATEGORIZED,
    ConversionResult,
    ConversionStats,
    ConvertedFile,
    MerchantKnowledge,
    OutputRecord,
    RawRecord,
    ReferenceRecord,
)
from .normalizers import capitalize_words, clean_amount, normalize, title_case_merchant
from .session import ConversionSession
from .transform import transform_record

__all__ = [
    # API
    "convert",
    "convert_files",
    "combine_stats",
    "learn_knowledge",
    "learn_account",
    "transform_record",
    "normalize",
    "are_similar",
    "first_match",
    "find_inconsistent_merchants",
    "clean_amount",
    "capitalize_words",
    "title_case_merchant",
    "ConversionSession",
    # Configuration
    "SourceSchema",
    "Settings",
    "DEFAULT_SCHEMA",
    "load_settings",
    # Models / types
    "MerchantKnowledge",
    "ConversionStats",
    "ConvertedFile",
    "ConversionResult",
    "RawRecord",
    "ReferenceRecord",
    "OutputRecord",
    "OUTPUT_FIELDS",
    "UNCATEGORIZED",
    "DEFAULT_ACCOUNT",
]
